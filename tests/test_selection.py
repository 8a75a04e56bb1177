from __future__ import annotations

from pathlib import Path

from shelf.core.selection import SelectionSet


def test_toggle_twice_restores_membership() -> None:
    selection = SelectionSet()
    path = Path("/tmp/a.txt")

    assert selection.toggle(path) is True
    assert path in selection
    assert selection.toggle(path) is False
    assert path not in selection
    assert len(selection) == 0


def test_snapshot_keeps_marking_order() -> None:
    selection = SelectionSet()
    for name in ("c", "a", "b"):
        selection.toggle(Path("/x") / name)

    assert selection.snapshot() == (Path("/x/c"), Path("/x/a"), Path("/x/b"))


def test_discard_drops_descendants() -> None:
    selection = SelectionSet()
    selection.toggle(Path("/x/d"))
    selection.toggle(Path("/x/d/inner.txt"))
    selection.toggle(Path("/x/dd"))

    selection.discard(Path("/x/d"))

    assert list(selection) == [Path("/x/dd")]


def test_discard_unknown_path_is_harmless() -> None:
    selection = SelectionSet()
    selection.toggle(Path("/x/a"))

    selection.discard(Path("/nowhere"))

    assert list(selection) == [Path("/x/a")]
