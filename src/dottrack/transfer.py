"""Filesystem helpers for moving files between disk and storage."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from .errors import TransferError, UnsupportedOperationError

logger = logging.getLogger(__name__)


def ensure_parent(path: Path) -> None:
    """Ensure the parent directory exists."""

    path.parent.mkdir(parents=True, exist_ok=True)


def copy_file(src: Path, dest: Path, is_directory: bool) -> None:
    """Copy the bytes of ``src`` into ``dest``, replacing any existing file.

    Directory transfers are not implemented and raise
    ``UnsupportedOperationError`` without touching either path.
    """

    if is_directory or src.is_dir():
        raise UnsupportedOperationError(f"Copying directories is not supported yet ('{src}')")
    if dest.is_dir():
        raise UnsupportedOperationError(f"Cannot replace directory '{dest}' with a file")

    logger.info("%s -> %s", src, dest)
    try:
        ensure_parent(dest)
        shutil.copyfile(src, dest)
    except PermissionError:
        raise
    except OSError as exc:
        raise TransferError(f"Failed to copy '{src}' to '{dest}': {exc.strerror or exc}") from exc


def remove_path(path: Path, *, recursive: bool = False) -> bool:
    """Delete ``path`` whether it is a file, directory, or symlink.

    Directories are only removed when ``recursive`` is set. Returns ``True``
    if something was removed.
    """

    if not path.exists() and not path.is_symlink():
        return False
    if path.is_symlink() or path.is_file():
        path.unlink()
        return True
    if not recursive:
        raise UnsupportedOperationError(f"Refusing to delete directory '{path}'")
    shutil.rmtree(path)
    return True
