from __future__ import annotations

from pathlib import Path

from shelf.domain.rows import FileRow, MountRow, row_item
from shelf.services.file_listing import FileListingEntry
from shelf.services.mounts import MountEntry


def test_file_row_descriptions() -> None:
    parent = FileListingEntry(path=Path("/"), name="..", is_dir=True, is_parent_link=True)
    folder = FileListingEntry(path=Path("/d"), name="d", is_dir=True)
    document = FileListingEntry(path=Path("/a.txt"), name="a.txt", is_dir=False)

    assert FileRow(parent, marked=True).description() == "Parent Directory"
    assert FileRow(folder).description() == "Directory"
    assert FileRow(document).description() == "File"
    assert FileRow(document, marked=True).description() == "File [Marked]"
    assert FileRow(document).title() == "a.txt"


def test_mount_row_descriptions() -> None:
    assert MountRow(MountEntry("/dev/sdb1")).description() == "Unmounted"
    assert MountRow(MountEntry("/dev/sdb1", "/mnt")).description() == "Mounted at /mnt"
    assert MountRow(MountEntry("/dev/sdb1")).title() == "/dev/sdb1"


def test_row_item_unwraps_variants() -> None:
    entry = FileListingEntry(path=Path("/a"), name="a", is_dir=False)
    mount = MountEntry("/dev/sdb1")

    assert row_item(FileRow(entry)) is entry
    assert row_item(MountRow(mount)) is mount
