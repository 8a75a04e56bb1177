from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from shelf.core.dispatcher import NavigatorDispatcher
from shelf.core.state import NavigatorState, NavigatorStateStore
from shelf.services.mounts import MountController


class FakeRunner:
    """Records commands and replays canned process results."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.outputs: list[str] = []
        self.returncode = 0
        self.stderr = ""
        self.exc: Exception | None = None

    def __call__(self, command, **_kwargs) -> subprocess.CompletedProcess[str]:
        self.calls.append(list(command))
        if self.exc is not None:
            raise self.exc
        stdout = self.outputs.pop(0) if self.outputs else ""
        return subprocess.CompletedProcess(
            args=command,
            returncode=self.returncode,
            stdout=stdout,
            stderr=self.stderr,
        )


class EditorRecorder:
    def __init__(self) -> None:
        self.opened: list[Path] = []
        self.error: Exception | None = None

    def __call__(self, path: Path) -> None:
        self.opened.append(path)
        if self.error is not None:
            raise self.error


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    root = tmp_path / "work"
    root.mkdir()
    (root / "a.txt").write_bytes(b"alpha\n")
    (root / "b.txt").write_bytes(b"bravo\n")
    (root / ".cfg").write_text("hidden")
    (root / "d").mkdir()
    (root / "d" / "inner.txt").write_text("inner")
    return root


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def editor() -> EditorRecorder:
    return EditorRecorder()


@pytest.fixture
def quit_calls() -> list[bool]:
    return []


@pytest.fixture
def dispatcher(
    sample_tree: Path,
    runner: FakeRunner,
    editor: EditorRecorder,
    quit_calls: list[bool],
) -> NavigatorDispatcher:
    store = NavigatorStateStore(NavigatorState(current_directory=sample_tree))
    navigator = NavigatorDispatcher(
        store=store,
        launch_editor=editor,
        request_quit=lambda: quit_calls.append(True),
        mounts=MountController(runner=runner),
    )
    navigator.refresh()
    return navigator
