from __future__ import annotations

from pathlib import Path
import shutil

from shelf.core.path_navigation import is_within


class FileSystemController:
    """Encapsulates file-system mutations so the UI stays lean."""

    def create_path(self, target: Path, *, is_directory: bool) -> Path:
        if is_directory:
            target.mkdir(parents=True, exist_ok=True)
            return target

        target.parent.mkdir(parents=True, exist_ok=True)
        # Exclusive create: an existing file is never truncated.
        with target.open("x"):
            pass
        return target

    def delete_path(self, target: Path) -> None:
        if target.is_symlink():
            target.unlink()
            return
        if not target.exists():
            raise FileNotFoundError(f"{target} does not exist")

        if target.is_dir():
            shutil.rmtree(target)
        else:
            target.unlink()

    def rename_path(self, source: Path, destination: Path) -> Path:
        if not source.exists() and not source.is_symlink():
            raise FileNotFoundError(f"{source} does not exist")

        if source == destination:
            return destination

        if destination.exists() or destination.is_symlink():
            raise FileExistsError(f"{destination} already exists")

        if source.is_dir() and not source.is_symlink() and is_within(destination, source):
            raise OSError(f"Cannot move {source} into itself")

        created = _missing_ancestors(destination)
        destination.parent.mkdir(parents=True, exist_ok=True)
        try:
            source.rename(destination)
        except OSError:
            # Leave no empty ancestors behind when the rename itself fails.
            for directory in created:
                try:
                    directory.rmdir()
                except OSError:
                    break
            raise
        return destination

    def copy_path(self, source: Path, destination: Path) -> Path:
        if source.is_dir() and not source.is_symlink():
            if destination.exists() and _same_file(source, destination):
                raise shutil.SameFileError(f"{source} and {destination} are the same directory")
            if source in destination.parents:
                raise OSError(f"Cannot copy {source} into itself")
            shutil.copytree(source, destination, symlinks=True, dirs_exist_ok=True)
            return destination

        shutil.copyfile(source, destination, follow_symlinks=False)
        return destination

    def move_path(self, source: Path, destination: Path) -> Path:
        if not source.exists() and not source.is_symlink():
            raise FileNotFoundError(f"{source} does not exist")
        if source == destination:
            raise shutil.SameFileError(f"{source} is already in place")
        if destination.exists() or destination.is_symlink():
            raise FileExistsError(f"{destination} already exists")
        # shutil.move renames when possible and copies then deletes across volumes.
        shutil.move(str(source), str(destination))
        return destination


def _missing_ancestors(target: Path) -> list[Path]:
    """Ancestors of ``target`` that do not exist yet, deepest first."""
    missing: list[Path] = []
    for parent in target.parents:
        if parent.exists():
            break
        missing.append(parent)
    return missing


def _same_file(first: Path, second: Path) -> bool:
    try:
        return first.samefile(second)
    except OSError:
        return False
