"""Exceptions for foldersync.

Every failure during a sync is an I/O failure.  Each collaborator in
:mod:`foldersync._io` re-raises the underlying :class:`OSError` as one
of the classes below, keeping its ``errno``, ``strerror`` and
``filename`` and chaining the original as ``__cause__``.  Code that
already catches :class:`OSError` keeps working.
"""


class FolderSyncError(OSError):
    """Base class for I/O failures raised while synchronizing."""

    @classmethod
    def from_os_error(cls, exc: OSError, path: str) -> "FolderSyncError":
        """Build an instance carrying *exc*'s errno and message for *path*."""
        return cls(exc.errno, exc.strerror or str(exc), path)


class ListingError(FolderSyncError):
    """A source or destination directory could not be listed."""


class DirectoryCreationError(FolderSyncError):
    """A destination directory could not be created."""


class HashingError(FolderSyncError):
    """A file could not be read to compute its digest."""


class ExistenceCheckError(FolderSyncError):
    """Whether a destination file exists could not be determined."""


class CopyError(FolderSyncError):
    """A source file could not be copied onto the destination."""


class RemovalError(FolderSyncError):
    """An extraneous or conflicting destination entry could not be removed."""
