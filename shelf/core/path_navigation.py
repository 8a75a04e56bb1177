from __future__ import annotations

from pathlib import PurePath
from typing import TypeVar

_PathT = TypeVar("_PathT", bound=PurePath)


def parent_directory(path: _PathT) -> _PathT | None:
    parent = path.parent
    if parent == path:
        return None
    return parent


def is_within(path: PurePath, ancestor: PurePath) -> bool:
    return path == ancestor or ancestor in path.parents
