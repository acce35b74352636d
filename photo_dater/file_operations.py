"""
Filesystem operations used by the organizer commands.

Every OS-level failure is raised as FilesystemError naming the offending path.
No operation ever replaces an existing entry.
"""

import errno
import os
import shutil
from pathlib import Path
from typing import List

from .constants import NUISANCE_NAMES, TEMP_SUFFIX, get_logger
from .errors import FilesystemError


def staged_path(path: Path) -> Path:
    """Temporary name a file goes through during a two-phase rename."""
    return path.with_name(f".{path.name}{TEMP_SUFFIX}")


def is_staged(path: Path) -> bool:
    return path.name.startswith('.') and path.name.endswith(TEMP_SUFFIX)


def original_name(path: Path) -> str:
    """Name of a file before it was staged; other names are returned as is."""
    if is_staged(path):
        return path.name[1:-len(TEMP_SUFFIX)]
    return path.name


class FileOperations:
    """Listing, renaming, moving and directory creation with logging."""

    def __init__(self, ignore_hidden: bool = True):
        self.ignore_hidden = ignore_hidden
        self.logger = get_logger()

    def is_candidate(self, path: Path) -> bool:
        """Whether a directory entry should be treated as a photo file.

        Files left under a staged name by an interrupted files-rename are
        always listed, so a later run can finish renaming them.
        """
        name = path.name
        if name.lower() in NUISANCE_NAMES:
            return False
        if is_staged(path):
            return path.is_file()
        if self.ignore_hidden and name.startswith('.'):
            return False
        return path.is_file()

    def list_entries(self, directory: Path) -> List[Path]:
        """Regular files directly inside directory, sorted by name."""
        try:
            entries = list(directory.iterdir())
        except OSError as e:
            raise FilesystemError(directory, e)
        return sorted((p for p in entries if self.is_candidate(p)), key=lambda p: p.name)

    @staticmethod
    def _ensure_free(source: Path, target: Path) -> None:
        """Refuse to overwrite target unless it is source itself (case-only rename)."""
        if not os.path.lexists(target):
            return
        try:
            if os.path.samefile(source, target):
                return
        except OSError:
            pass
        raise FilesystemError(target, FileExistsError(
            errno.EEXIST, os.strerror(errno.EEXIST), str(target)))

    def rename_entry(self, source: Path, target: Path) -> None:
        """Rename a file or directory in place."""
        self._ensure_free(source, target)
        try:
            os.rename(source, target)
        except OSError as e:
            raise FilesystemError(source, e)
        self.logger.info(f"Renamed {source} -> {target}")

    def move_entry(self, source: Path, dest_dir: Path) -> Path:
        """Move a file into dest_dir, keeping its name. Returns the new path."""
        target = dest_dir / source.name
        if not dest_dir.is_dir():
            raise FilesystemError(dest_dir, NotADirectoryError(
                errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(dest_dir)))
        self._ensure_free(source, target)
        try:
            shutil.move(str(source), str(target))
        except OSError as e:
            raise FilesystemError(source, e)

        # Verify the operation
        if not target.exists():
            raise FilesystemError(target, FileNotFoundError(
                errno.ENOENT, "File not found after move", str(target)))

        self.logger.info(f"Moved {source} -> {target}")
        return target

    def create_dir(self, directory: Path) -> None:
        """Create a directory; an existing directory is fine."""
        try:
            directory.mkdir(exist_ok=True)
        except OSError as e:
            raise FilesystemError(directory, e)
        self.logger.info(f"Created directory {directory}")
