from __future__ import annotations

import os
import re
import subprocess
from dataclasses import dataclass
from typing import Callable, Sequence

from shelf.core.errors import ShelfError
from shelf.core.logging import get_logger, log_event

logger = get_logger(__name__)

Runner = Callable[..., subprocess.CompletedProcess[str]]

_HEX_ESCAPE = re.compile(r"\\x([0-9a-fA-F]{2})")


@dataclass(frozen=True, slots=True)
class MountEntry:
    device: str
    mount_point: str = ""

    @property
    def is_mounted(self) -> bool:
        return bool(self.mount_point)


class MountController:
    """Enumerate block devices and request mounts through external tools."""

    def __init__(
        self,
        *,
        device_list_tool: str = "lsblk",
        mount_tool: str = "udisksctl",
        runner: Runner = subprocess.run,
    ) -> None:
        self._device_list_tool = device_list_tool
        self._mount_tool = mount_tool
        self._runner = runner

    def enumerate(self) -> list[MountEntry]:
        command = [self._device_list_tool, "-nrpo", "NAME,MOUNTPOINT"]
        completed = self._run(command, code="device_list_failed", message="Unable to list devices")
        return parse_device_listing(completed.stdout)

    def mount(self, device: str) -> None:
        self._request("mount", device)

    def unmount(self, device: str) -> None:
        self._request("unmount", device)

    def _request(self, verb: str, device: str) -> None:
        command = [self._mount_tool, verb, "-b", device]
        self._run(command, code=f"{verb}_failed", message=f"Unable to {verb} {device}")
        log_event(logger, verb, device=device)

    def _run(
        self,
        command: Sequence[str],
        *,
        code: str,
        message: str,
    ) -> subprocess.CompletedProcess[str]:
        try:
            completed = self._runner(
                list(command),
                capture_output=True,
                text=True,
                stdin=subprocess.DEVNULL,
                check=False,
            )
        except OSError as exc:
            raise ShelfError(code=code, message=message, detail=str(exc)) from exc
        if completed.returncode != 0:
            detail = (completed.stderr or "").strip() or f"exit status {completed.returncode}"
            raise ShelfError(code=code, message=message, detail=detail)
        return completed


def parse_device_listing(output: str) -> list[MountEntry]:
    entries: list[MountEntry] = []
    for line in output.splitlines():
        fields = line.split()
        if not fields:
            continue
        mount_point = _unescape(fields[1]) if len(fields) > 1 else ""
        entries.append(MountEntry(device=fields[0], mount_point=mount_point))
    return entries


def _unescape(value: str) -> str:
    # lsblk raw output encodes unsafe bytes as \xHH, one escape per byte.
    parts = _HEX_ESCAPE.split(value)
    if len(parts) == 1:
        return value
    raw = b"".join(
        bytes([int(part, 16)]) if index % 2 else os.fsencode(part)
        for index, part in enumerate(parts)
    )
    return os.fsdecode(raw)
