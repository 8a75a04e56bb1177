from __future__ import annotations

import pytest

from shelf.core.errors import ShelfError
from shelf.services.mounts import MountController, MountEntry, parse_device_listing


def test_parse_device_listing() -> None:
    output = "/dev/sda\n/dev/sda1 /boot\n\n   \n/dev/sdb1 /run/media/usb\\x20stick\n"

    assert parse_device_listing(output) == [
        MountEntry("/dev/sda", ""),
        MountEntry("/dev/sda1", "/boot"),
        MountEntry("/dev/sdb1", "/run/media/usb stick"),
    ]


def test_enumerate_invokes_lsblk(runner) -> None:
    runner.outputs.append("/dev/sdb1\n")
    controller = MountController(runner=runner)

    entries = controller.enumerate()

    assert runner.calls == [["lsblk", "-nrpo", "NAME,MOUNTPOINT"]]
    assert entries == [MountEntry("/dev/sdb1")]
    assert not entries[0].is_mounted


def test_mount_and_unmount_commands(runner) -> None:
    controller = MountController(mount_tool="udisksctl", runner=runner)

    controller.mount("/dev/sdb1")
    controller.unmount("/dev/sdb1")

    assert runner.calls == [
        ["udisksctl", "mount", "-b", "/dev/sdb1"],
        ["udisksctl", "unmount", "-b", "/dev/sdb1"],
    ]


def test_nonzero_exit_raises_with_stderr(runner) -> None:
    runner.returncode = 1
    runner.stderr = "Not authorized\n"
    controller = MountController(runner=runner)

    with pytest.raises(ShelfError) as excinfo:
        controller.mount("/dev/sdb1")

    assert excinfo.value.code == "mount_failed"
    assert excinfo.value.detail == "Not authorized"


def test_missing_binary_raises(runner) -> None:
    runner.exc = FileNotFoundError(2, "No such file or directory", "lsblk")
    controller = MountController(runner=runner)

    with pytest.raises(ShelfError) as excinfo:
        controller.enumerate()

    assert excinfo.value.code == "device_list_failed"


def test_parse_device_listing_decodes_multibyte_escapes() -> None:
    output = "/dev/sdb1 /media/Jos\\xc3\\xa9\\x20usb\n"

    assert parse_device_listing(output) == [MountEntry("/dev/sdb1", "/media/José usb")]
