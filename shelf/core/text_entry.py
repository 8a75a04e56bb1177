from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path

from shelf.core.errors import ShelfError, wrap_error
from shelf.core.fs_controller import FileSystemController
from shelf.core.logging import get_logger, log_event
from shelf.services.file_listing import FileListingEntry

logger = get_logger(__name__)

_SEPARATORS = tuple(sep for sep in ("/", os.sep, os.altsep) if sep)


class TextEntryTarget(Enum):
    CREATE = auto()
    RENAME = auto()


@dataclass(frozen=True, slots=True)
class TextEntryState:
    target: TextEntryTarget
    entry: FileListingEntry | None = None
    buffer: str = ""


class TextEntryController:
    """Turns a committed text buffer into a create or rename."""

    def __init__(self, fs_controller: FileSystemController) -> None:
        self._fs = fs_controller

    def begin_create(self) -> TextEntryState:
        return TextEntryState(TextEntryTarget.CREATE)

    def begin_rename(self, entry: FileListingEntry) -> TextEntryState:
        return TextEntryState(TextEntryTarget.RENAME, entry=entry, buffer=entry.name)

    def commit(
        self,
        state: TextEntryState,
        buffer: str,
        current_directory: Path,
    ) -> Path | None:
        """Apply ``buffer`` and return the created or renamed path.

        Returns ``None`` when the buffer is blank. Failures raise
        :class:`ShelfError`.
        """
        text = buffer.strip()
        if not text:
            return None
        if state.target is TextEntryTarget.CREATE:
            return self._create(text, current_directory)
        if state.entry is None:
            return None
        return self._rename(state.entry, text, current_directory)

    def _create(self, text: str, current_directory: Path) -> Path:
        target = _resolve(current_directory, text)
        is_directory = text.endswith(_SEPARATORS)
        try:
            self._fs.create_path(target, is_directory=is_directory)
        except FileExistsError as exc:
            raise _existing_path_error(exc, target, current_directory, text, "create_failed") from exc
        except (OSError, ValueError) as exc:
            raise wrap_error(exc, code="create_failed", message=f"Unable to create '{text}'") from exc
        log_event(logger, "create", path=str(target), directory=is_directory)
        return target

    def _rename(self, entry: FileListingEntry, text: str, current_directory: Path) -> Path:
        destination = _resolve(current_directory, text)
        try:
            self._fs.rename_path(entry.path, destination)
        except FileExistsError as exc:
            raise _existing_path_error(
                exc, destination, current_directory, text, "rename_failed"
            ) from exc
        except (OSError, ValueError) as exc:
            raise wrap_error(
                exc, code="rename_failed", message=f"Unable to rename '{entry.name}'"
            ) from exc
        log_event(logger, "rename", source=str(entry.path), destination=str(destination))
        return destination


def _resolve(current_directory: Path, text: str) -> Path:
    # Names are always relative to the current directory, even with a leading separator.
    return current_directory / text.lstrip("".join(_SEPARATORS))


def _existing_path_error(
    exc: FileExistsError,
    target: Path,
    current_directory: Path,
    text: str,
    code: str,
) -> ShelfError:
    if target.exists() or target.is_symlink():
        return ShelfError(
            code="already_exists",
            message=f"'{text}' already exists",
            severity="warning",
        )
    # The collision is an ancestor that exists but is not a directory.
    blocker = next(
        (
            parent
            for parent in reversed(target.parents)
            if current_directory in parent.parents and parent.exists() and not parent.is_dir()
        ),
        None,
    )
    verb = "create" if code == "create_failed" else "rename to"
    if blocker is None:
        return wrap_error(exc, code=code, message=f"Unable to {verb} '{text}'")
    return ShelfError(
        code=code,
        message=f"Unable to {verb} '{text}'",
        detail=f"'{blocker.relative_to(current_directory)}' is not a directory",
    )
