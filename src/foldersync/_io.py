"""File I/O helpers: listing, hashing, copying, removing.

Each helper performs exactly one filesystem operation and re-raises any
:class:`OSError` as the matching :mod:`foldersync.exceptions` class.
"""

from __future__ import annotations

import hashlib
import os
import shutil

from ._types import Entry, EntryKind
from .exceptions import (
    CopyError,
    DirectoryCreationError,
    ExistenceCheckError,
    HashingError,
    ListingError,
    RemovalError,
)


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------

def list_entries(path: str) -> list[Entry]:
    """Return the immediate children of *path*, sorted by name.

    Anything that is not a directory (after following symlinks) is
    reported as a file.
    """
    try:
        with os.scandir(path) as it:
            entries = [
                Entry(d.name, EntryKind.DIRECTORY if d.is_dir() else EntryKind.FILE)
                for d in it
            ]
    except OSError as exc:
        raise ListingError.from_os_error(exc, path) from exc
    entries.sort(key=lambda e: e.name)
    return entries


def ensure_dir(path: str) -> bool:
    """Create *path* and any missing parents.  Return True if it was created."""
    if os.path.isdir(path):
        return False
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreationError.from_os_error(exc, path) from exc
    return True


# ---------------------------------------------------------------------------
# Hashing
# ---------------------------------------------------------------------------

_HASH_CHUNK_SIZE = 65536


def file_digest(path: str, algorithm: str = "sha256") -> str:
    """Hex digest of the file at *path*, streamed in chunks.

    Raises:
        ValueError: If *algorithm* is not supported by :mod:`hashlib`.
        HashingError: If the file cannot be read.
    """
    h = hashlib.new(algorithm)
    try:
        with open(path, "rb") as f:
            while True:
                chunk = f.read(_HASH_CHUNK_SIZE)
                if not chunk:
                    break
                h.update(chunk)
    except OSError as exc:
        raise HashingError.from_os_error(exc, path) from exc
    return h.hexdigest()


# ---------------------------------------------------------------------------
# Existence / copy / remove
# ---------------------------------------------------------------------------

def file_exists(path: str) -> bool:
    """True if *path* exists.  Errors other than "not found" are raised."""
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    except OSError as exc:
        raise ExistenceCheckError.from_os_error(exc, path) from exc
    return True


def copy_file(src: str, dest: str) -> None:
    """Copy *src* over *dest*, preserving access and modification times."""
    try:
        shutil.copy2(src, dest)
    except OSError as exc:
        raise CopyError.from_os_error(exc, dest) from exc


def remove_entry(path: str, kind: EntryKind) -> None:
    """Delete the file or the whole directory tree at *path*."""
    try:
        if kind is EntryKind.DIRECTORY:
            shutil.rmtree(path)
        else:
            os.unlink(path)
    except OSError as exc:
        raise RemovalError.from_os_error(exc, path) from exc
