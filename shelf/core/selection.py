from __future__ import annotations

from pathlib import Path
from typing import Iterator

from shelf.core.path_navigation import is_within


class SelectionSet:
    """Marked paths, kept in the order they were marked."""

    def __init__(self) -> None:
        self._paths: dict[Path, None] = {}

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __iter__(self) -> Iterator[Path]:
        return iter(list(self._paths))

    def __len__(self) -> int:
        return len(self._paths)

    def toggle(self, path: Path) -> bool:
        """Flip membership of ``path`` and return whether it is now marked."""
        if path in self._paths:
            del self._paths[path]
            return False
        self._paths[path] = None
        return True

    def discard(self, path: Path) -> None:
        """Drop ``path`` and anything marked beneath it."""
        for marked in list(self._paths):
            if is_within(marked, path):
                del self._paths[marked]

    def snapshot(self) -> tuple[Path, ...]:
        return tuple(self._paths)

    def clear(self) -> None:
        self._paths.clear()
