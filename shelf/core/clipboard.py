from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Iterable

from shelf.core.errors import ShelfError, wrap_error
from shelf.core.fs_controller import FileSystemController
from shelf.core.logging import get_logger, log_event

logger = get_logger(__name__)


class ClipboardMode(Enum):
    NONE = auto()
    COPY = auto()
    CUT = auto()


@dataclass(frozen=True, slots=True)
class ClipboardState:
    mode: ClipboardMode = ClipboardMode.NONE
    paths: tuple[Path, ...] = ()


@dataclass(frozen=True, slots=True)
class PasteFailure:
    source: Path
    error: ShelfError


@dataclass(frozen=True, slots=True)
class PasteReport:
    mode: ClipboardMode
    pasted: tuple[Path, ...] = ()
    failures: tuple[PasteFailure, ...] = field(default_factory=tuple)

    @property
    def attempted(self) -> int:
        return len(self.pasted) + len(self.failures)


class ClipboardController:
    """Holds a snapshot of marked paths and replays it as a copy or a move."""

    def __init__(self, fs_controller: FileSystemController) -> None:
        self._fs = fs_controller
        self._state = ClipboardState()

    @property
    def state(self) -> ClipboardState:
        return self._state

    def yank(self, paths: Iterable[Path]) -> ClipboardState:
        self._state = ClipboardState(ClipboardMode.COPY, tuple(paths))
        return self._state

    def cut(self, paths: Iterable[Path]) -> ClipboardState:
        self._state = ClipboardState(ClipboardMode.CUT, tuple(paths))
        return self._state

    def clear(self) -> None:
        self._state = ClipboardState()

    def paste(self, destination_dir: Path) -> PasteReport:
        """Copy or move every staged path into ``destination_dir``.

        The clipboard is emptied afterwards whatever the per-item outcome.
        """
        staged = self._state
        self.clear()
        if staged.mode is ClipboardMode.NONE or not staged.paths:
            raise ShelfError(
                code="paste_nothing",
                message="Nothing to paste.",
                severity="information",
            )

        pasted: list[Path] = []
        failures: list[PasteFailure] = []
        for source in staged.paths:
            destination = destination_dir / source.name
            try:
                if staged.mode is ClipboardMode.COPY:
                    self._fs.copy_path(source, destination)
                else:
                    self._fs.move_path(source, destination)
            except (OSError, ValueError) as exc:
                failures.append(
                    PasteFailure(
                        source,
                        wrap_error(exc, code="paste_failed", message=f"Unable to paste {source.name}"),
                    )
                )
                continue
            pasted.append(destination)

        log_event(
            logger,
            "paste",
            mode=staged.mode.name.lower(),
            destination=str(destination_dir),
            pasted=len(pasted),
            failed=len(failures),
        )
        return PasteReport(staged.mode, tuple(pasted), tuple(failures))
