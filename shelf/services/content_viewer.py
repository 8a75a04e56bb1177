from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ViewedFile:
    path: Path
    content: bytes

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class ContentViewer:
    """Loads a whole file for read-only display."""

    def load(self, path: Path) -> ViewedFile:
        return ViewedFile(path=path, content=path.read_bytes())
