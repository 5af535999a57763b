"""
File mover for relocating the selected candidate.

This module is responsible for:
- Moving the selected file into the destination directory under its own name
- Refusing to overwrite an existing file (CollisionError)
- Linking then unlinking when source and destination share a filesystem,
  so an existing destination is never replaced
- Falling back to copy + delete across filesystems
- Reporting a copied-but-not-deleted file as PartialMoveError
- Logging all operations
"""

import errno
import logging
import os
import shutil
import sys
from pathlib import Path
from typing import Union

from .errors import (
    CollisionError,
    CrossDeviceFallbackError,
    MoveError,
    PartialMoveError,
)
from .types import Candidate, MoveResult, MoveStatus
from .utils import is_cross_device_error

logger = logging.getLogger(__name__)


def resolve_destination(destination_dir: Union[str, Path], file_name: str) -> Path:
    """
    Resolve the destination path for a file, refusing collisions.

    Args:
        destination_dir: The directory the file is moved into
        file_name: The file's basename

    Returns:
        destination_dir / file_name

    Raises:
        CollisionError: If something already exists at that path
    """
    dest_path = Path(destination_dir) / file_name
    # lexists so a dangling symlink also counts as taken
    if os.path.lexists(dest_path):
        raise CollisionError(dest_path)
    return dest_path


# link() failures meaning the filesystem (or its policy) does not allow hard links
LINK_UNSUPPORTED_ERRNOS = {
    errno.EPERM,
    errno.EMLINK,
    errno.ENOSYS,
    errno.ENOTSUP,
    errno.EOPNOTSUPP,
}


def _plain_rename(src: Path, dest: Path) -> None:
    """
    Rename src to dest with os.rename.

    On Windows os.rename refuses an existing destination. On POSIX it
    replaces one, so this is only used where hard links are unavailable.

    Raises:
        CollisionError: If the destination exists (Windows)
        CrossDeviceFallbackError: If the rename crosses filesystems
        MoveError: For any other OS error
    """
    try:
        os.rename(src, dest)
    except FileExistsError as e:
        raise CollisionError(dest) from e
    except OSError as e:
        if is_cross_device_error(e):
            raise CrossDeviceFallbackError(str(e)) from e
        logger.error(f"OS error moving {src}: {e}")
        raise MoveError(f"Could not move {src} to {dest}: {e}") from e


def _rename(src: Path, dest: Path) -> None:
    """
    Move src to dest on the same filesystem without replacing an existing dest.

    Hard-links dest to src (which fails if dest exists), then unlinks src.
    Falls back to os.rename on Windows, for symlinked sources, and on
    filesystems without hard links.

    Raises:
        CollisionError: If the destination exists
        CrossDeviceFallbackError: If the move crosses filesystems
        PartialMoveError: If both names remain and the extra one cannot be removed
        MoveError: For any other OS error
    """
    if sys.platform == "win32" or src.is_symlink():
        _plain_rename(src, dest)
        return

    try:
        os.link(src, dest)
    except FileExistsError as e:
        raise CollisionError(dest) from e
    except OSError as e:
        if is_cross_device_error(e):
            raise CrossDeviceFallbackError(str(e)) from e
        if e.errno in LINK_UNSUPPORTED_ERRNOS:
            logger.debug(f"Hard link not possible ({e}), renaming instead")
            _plain_rename(src, dest)
            return
        logger.error(f"OS error moving {src}: {e}")
        raise MoveError(f"Could not move {src} to {dest}: {e}") from e

    try:
        os.unlink(src)
    except OSError as e:
        logger.error(f"Linked {dest} but could not remove {src}: {e}")
        try:
            os.unlink(dest)
        except OSError as cleanup_error:
            raise PartialMoveError(src, dest, str(e)) from cleanup_error
        raise MoveError(f"Could not move {src} to {dest}: {e}") from e


def _copy_and_delete(src: Path, dest: Path) -> None:
    """
    Fall back to copy + delete when rename is not possible.

    The destination is created exclusively, so a file that appeared there
    since the collision check is never replaced.

    Raises:
        CollisionError: If the destination exists
        MoveError: If the copy fails (any partial copy is removed)
        PartialMoveError: If the copy succeeded but the source could not be removed
    """
    created = False
    try:
        with open(src, "rb") as fsrc:
            try:
                fdst = open(dest, "xb")
            except FileExistsError as e:
                raise CollisionError(dest) from e
            created = True
            with fdst:
                shutil.copyfileobj(fsrc, fdst)
        shutil.copystat(src, dest)
    except OSError as e:
        if created:
            _cleanup_partial_copy(dest)
        logger.error(f"Copy failed for {src}: {e}")
        raise MoveError(f"Could not copy {src} to {dest}: {e}") from e

    try:
        os.remove(src)
    except OSError as e:
        logger.error(f"Copied {src} but could not remove it: {e}")
        raise PartialMoveError(src, dest, str(e)) from e

    logger.info("Moved via copy+delete fallback")


def _cleanup_partial_copy(dest: Path) -> None:
    """Attempt to clean up a partial copy on failure."""
    try:
        if dest.exists():
            dest.unlink()
            logger.debug(f"Cleaned up partial copy at {dest}")
    except OSError as e:
        logger.warning(f"Could not clean up partial copy at {dest}: {e}")


def move_file(candidate: Candidate, destination_dir: Union[str, Path]) -> MoveResult:
    """
    Move the selected candidate into destination_dir.

    Args:
        candidate: The file to move
        destination_dir: Target directory (normally the current directory)

    Returns:
        MoveResult describing how the file was moved

    Raises:
        CollisionError: If a file with the same name exists at the destination
        PartialMoveError: If a cross-device copy succeeded but the source remains
        MoveError: If the source is gone or the move fails otherwise
    """
    src_path = Path(candidate.path)

    if not src_path.is_file():
        logger.error(f"Source missing: {src_path}")
        raise MoveError(f"Source file no longer exists: {src_path}")

    dest_path = resolve_destination(destination_dir, candidate.display_name)

    logger.info(f"Moving: {src_path} -> {dest_path}")
    try:
        _rename(src_path, dest_path)
        status = MoveStatus.MOVED
        message = "Moved successfully"
    except CrossDeviceFallbackError as e:
        logger.info(f"Cross-device move detected, using copy+delete: {e}")
        _copy_and_delete(src_path, dest_path)
        status = MoveStatus.MOVED_VIA_COPY
        message = "Moved successfully (via copy+delete)"

    return MoveResult(
        source_path=str(src_path),
        dest_path=str(dest_path),
        status=status,
        message=message,
    )
