from ._exclude import ExcludeFilter, is_ignored
from ._io import copy_file, ensure_dir, file_digest, file_exists, list_entries, remove_entry
from ._types import (
    ChangeAction,
    ChangeActionKind,
    ChangeReport,
    Entry,
    EntryKind,
    FileEntry,
    SyncOptions,
    SyncTarget,
    format_summary,
)
from ._update import reconcile_file
from .exceptions import (
    CopyError,
    DirectoryCreationError,
    ExistenceCheckError,
    FolderSyncError,
    HashingError,
    ListingError,
    RemovalError,
)
from .sync import sync, sync_async, sync_folder

__all__ = [
    "sync", "sync_folder", "sync_async",
    "ExcludeFilter", "is_ignored", "reconcile_file",
    "list_entries", "ensure_dir", "file_digest", "file_exists", "copy_file", "remove_entry",
    "ChangeAction", "ChangeActionKind", "ChangeReport", "Entry", "EntryKind",
    "FileEntry", "SyncOptions", "SyncTarget", "format_summary",
    "FolderSyncError", "ListingError", "DirectoryCreationError", "HashingError",
    "ExistenceCheckError", "CopyError", "RemovalError",
]
