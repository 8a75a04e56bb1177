from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto
from pathlib import Path
from typing import Callable

from shelf.core.errors import Severity


class Mode(Enum):
    BROWSE = auto()
    MOUNTS = auto()
    INPUT = auto()
    VIEW = auto()


@dataclass(frozen=True, slots=True)
class StatusLine:
    message: str
    severity: Severity = "information"


@dataclass(frozen=True, slots=True)
class NavigatorState:
    current_directory: Path
    mode: Mode = Mode.BROWSE
    show_hidden: bool = False
    status: StatusLine | None = None
    listing_token: int = 0


class NavigatorStateStore:
    def __init__(self, initial: NavigatorState) -> None:
        self._state = initial
        self._listeners: set[Callable[[NavigatorState], None]] = set()

    @property
    def state(self) -> NavigatorState:
        return self._state

    def subscribe(self, callback: Callable[[NavigatorState], None]) -> None:
        self._listeners.add(callback)
        callback(self._state)

    def unsubscribe(self, callback: Callable[[NavigatorState], None]) -> None:
        self._listeners.discard(callback)

    def set_mode(self, value: Mode) -> None:
        self._update_state(mode=value)

    def set_current_directory(self, value: Path) -> None:
        self._update_state(current_directory=value)

    def set_show_hidden(self, value: bool) -> None:
        self._update_state(show_hidden=value)

    def set_status(self, value: StatusLine | None) -> None:
        self._update_state(status=value)

    def bump_listing_token(self) -> None:
        self._update_state(listing_token=self._state.listing_token + 1)

    def _update_state(self, **changes: object) -> None:
        new_state = replace(self._state, **changes)
        if new_state == self._state:
            return
        self._state = new_state
        for callback in list(self._listeners):
            callback(self._state)
