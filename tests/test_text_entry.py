from __future__ import annotations

from pathlib import Path

import pytest

from shelf.core.errors import ShelfError
from shelf.core.fs_controller import FileSystemController
from shelf.core.text_entry import TextEntryController, TextEntryTarget
from shelf.services.file_listing import FileListingEntry


@pytest.fixture
def controller() -> TextEntryController:
    return TextEntryController(FileSystemController())


def test_trailing_separator_creates_directory_with_ancestors(
    controller: TextEntryController, tmp_path: Path
) -> None:
    created = controller.commit(controller.begin_create(), "logs/2024/", tmp_path)

    assert created == tmp_path / "logs" / "2024"
    assert (tmp_path / "logs" / "2024").is_dir()


def test_creates_empty_file_and_missing_parents(
    controller: TextEntryController, tmp_path: Path
) -> None:
    controller.commit(controller.begin_create(), "notes/today.md", tmp_path)

    assert (tmp_path / "notes").is_dir()
    assert (tmp_path / "notes" / "today.md").read_bytes() == b""


def test_create_never_overwrites(controller: TextEntryController, tmp_path: Path) -> None:
    existing = tmp_path / "keep.txt"
    existing.write_text("data")

    with pytest.raises(ShelfError) as excinfo:
        controller.commit(controller.begin_create(), "keep.txt", tmp_path)

    assert excinfo.value.code == "already_exists"
    assert existing.read_text() == "data"


def test_blank_buffer_is_a_no_op(controller: TextEntryController, tmp_path: Path) -> None:
    assert controller.commit(controller.begin_create(), "   ", tmp_path) is None
    assert list(tmp_path.iterdir()) == []


def test_buffer_is_trimmed(controller: TextEntryController, tmp_path: Path) -> None:
    controller.commit(controller.begin_create(), "  spaced.txt \n", tmp_path)

    assert (tmp_path / "spaced.txt").is_file()


def test_leading_separator_stays_relative(
    controller: TextEntryController, tmp_path: Path
) -> None:
    created = controller.commit(controller.begin_create(), "/inside.txt", tmp_path)

    assert created == tmp_path / "inside.txt"
    assert created.is_file()


def test_rename_moves_entry(controller: TextEntryController, tmp_path: Path) -> None:
    source = tmp_path / "a.txt"
    source.write_text("alpha")
    entry = FileListingEntry(path=source, name="a.txt", is_dir=False)
    state = controller.begin_rename(entry)

    assert state.target is TextEntryTarget.RENAME
    assert state.buffer == "a.txt"

    renamed = controller.commit(state, "c.txt", tmp_path)

    assert renamed == tmp_path / "c.txt"
    assert not source.exists()
    assert (tmp_path / "c.txt").read_text() == "alpha"


def test_rename_refuses_existing_destination(
    controller: TextEntryController, tmp_path: Path
) -> None:
    source = tmp_path / "a.txt"
    source.write_text("alpha")
    (tmp_path / "b.txt").write_text("bravo")
    state = controller.begin_rename(FileListingEntry(path=source, name="a.txt", is_dir=False))

    with pytest.raises(ShelfError) as excinfo:
        controller.commit(state, "b.txt", tmp_path)

    assert excinfo.value.code == "already_exists"
    assert excinfo.value.severity == "warning"
    assert source.read_text() == "alpha"
    assert (tmp_path / "b.txt").read_text() == "bravo"


def test_rename_missing_source_reports_failure(
    controller: TextEntryController, tmp_path: Path
) -> None:
    entry = FileListingEntry(path=tmp_path / "ghost.txt", name="ghost.txt", is_dir=False)

    with pytest.raises(ShelfError) as excinfo:
        controller.commit(controller.begin_rename(entry), "real.txt", tmp_path)

    assert excinfo.value.code == "rename_failed"


def test_nul_byte_in_name_is_reported(controller: TextEntryController, tmp_path: Path) -> None:
    with pytest.raises(ShelfError) as excinfo:
        controller.commit(controller.begin_create(), "a\x00b.txt", tmp_path)

    assert excinfo.value.code == "create_failed"
    assert list(tmp_path.iterdir()) == []


def test_nul_byte_in_rename_is_reported(controller: TextEntryController, tmp_path: Path) -> None:
    source = tmp_path / "a.txt"
    source.write_text("alpha")
    state = controller.begin_rename(FileListingEntry(path=source, name="a.txt", is_dir=False))

    with pytest.raises(ShelfError) as excinfo:
        controller.commit(state, "c\x00.txt", tmp_path)

    assert excinfo.value.code == "rename_failed"
    assert source.read_text() == "alpha"


def test_file_ancestor_is_not_reported_as_existing(
    controller: TextEntryController, tmp_path: Path
) -> None:
    (tmp_path / "a").write_text("")

    with pytest.raises(ShelfError) as excinfo:
        controller.commit(controller.begin_create(), "a/b", tmp_path)

    assert excinfo.value.code == "create_failed"
    assert excinfo.value.detail == "'a' is not a directory"


def test_rename_into_own_subtree_leaves_nothing_behind(
    controller: TextEntryController, tmp_path: Path
) -> None:
    source = tmp_path / "d"
    source.mkdir()
    state = controller.begin_rename(FileListingEntry(path=source, name="d", is_dir=True))

    with pytest.raises(ShelfError) as excinfo:
        controller.commit(state, "d/new/x", tmp_path)

    assert excinfo.value.code == "rename_failed"
    assert list(source.iterdir()) == []
