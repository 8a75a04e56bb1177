from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from shelf.core.path_navigation import parent_directory

PARENT_LINK_NAME = ".."


@dataclass(frozen=True)
class FileListingEntry:
    path: Path
    name: str
    is_dir: bool
    is_parent_link: bool = False


@dataclass(frozen=True)
class DirectoryListingResult:
    path: Path
    entries: list[FileListingEntry] = field(default_factory=list)
    error: str | None = None


class EntryCatalog:
    """Lists a directory's children as display entries, directories first."""

    def list(self, directory: Path, *, show_hidden: bool = False) -> DirectoryListingResult:
        return collect_directory_listing(directory, show_hidden=show_hidden)


def collect_directory_listing(
    directory: Path,
    *,
    show_hidden: bool = False,
) -> DirectoryListingResult:
    try:
        with os.scandir(directory) as scan:
            visible: list[tuple[os.DirEntry[str], bool]] = []
            for entry in scan:
                if not is_entry_visible(entry.name, show_hidden=show_hidden):
                    continue
                try:
                    is_dir = entry.is_dir()
                except OSError:
                    is_dir = False
                visible.append((entry, is_dir))
    except OSError as exc:
        return DirectoryListingResult(directory, [], error=_describe(exc))

    visible.sort(key=lambda item: item[0].name)

    rows: list[FileListingEntry] = []
    parent = parent_directory(directory)
    if parent is not None:
        rows.append(
            FileListingEntry(
                path=parent,
                name=PARENT_LINK_NAME,
                is_dir=True,
                is_parent_link=True,
            )
        )
    rows.extend(_build_listing_entry(entry, is_dir=True) for entry, is_dir in visible if is_dir)
    rows.extend(
        _build_listing_entry(entry, is_dir=False) for entry, is_dir in visible if not is_dir
    )
    return DirectoryListingResult(directory, rows)


def is_entry_visible(name: str, *, show_hidden: bool = False) -> bool:
    if show_hidden:
        return True
    return not name.startswith(".")


def _build_listing_entry(entry: os.DirEntry[str], *, is_dir: bool) -> FileListingEntry:
    return FileListingEntry(path=Path(entry.path), name=entry.name, is_dir=is_dir)


def _describe(exc: OSError) -> str:
    return exc.strerror or str(exc)
