from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from shelf.services.file_listing import FileListingEntry
from shelf.services.mounts import MountEntry


class Action(str, Enum):
    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    MARK = "mark"
    YANK = "yank"
    CUT = "cut"
    PASTE = "paste"
    NEW = "new"
    RENAME = "rename"
    DELETE = "delete"
    VIEW = "view"
    MOUNT_MENU = "mount_menu"
    TOGGLE_HIDDEN = "toggle_hidden"
    FILTER = "filter"
    QUIT = "quit"
    BACK = "back"
    UNMOUNT = "unmount"
    COMMIT = "commit"


@dataclass(frozen=True, slots=True)
class InputEvent:
    action: Action
    item: FileListingEntry | MountEntry | None = None
    text: str = ""
