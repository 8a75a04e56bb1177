from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from shelf.services.file_listing import FileListingEntry
from shelf.services.mounts import MountEntry


@dataclass(frozen=True, slots=True)
class FileRow:
    entry: FileListingEntry
    marked: bool = False

    def title(self) -> str:
        return self.entry.name

    def description(self) -> str:
        if self.entry.is_parent_link:
            return "Parent Directory"
        label = "Directory" if self.entry.is_dir else "File"
        if self.marked:
            label = f"{label} [Marked]"
        return label


@dataclass(frozen=True, slots=True)
class MountRow:
    mount: MountEntry

    def title(self) -> str:
        return self.mount.device

    def description(self) -> str:
        if not self.mount.is_mounted:
            return "Unmounted"
        return f"Mounted at {self.mount.mount_point}"


Row = Union[FileRow, MountRow]


def row_item(row: Row) -> FileListingEntry | MountEntry:
    match row:
        case FileRow(entry=entry):
            return entry
        case MountRow(mount=mount):
            return mount
    raise TypeError(f"Unsupported row: {row!r}")
