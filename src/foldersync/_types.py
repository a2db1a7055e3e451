"""Data structures for sync operations."""

from __future__ import annotations

import os
import posixpath
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._exclude import ExcludeFilter


class EntryKind(str, Enum):
    """Kind of a listed directory entry: ``FILE`` or ``DIRECTORY``."""
    FILE = "file"
    DIRECTORY = "directory"

    def __str__(self) -> str:          # noqa: D105
        return self.value


@dataclass(frozen=True)
class Entry:
    """One immediate child of a listed directory."""
    name: str
    kind: EntryKind

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


@dataclass(frozen=True)
class SyncTarget:
    """The directory pair visited by one step of the recursion.

    Attributes:
        source_path: Absolute or caller-relative source directory.
        dest_path: Matching destination directory.
        relative_path: Position below the sync root, always starting
            with ``/`` (the root itself is ``/``).  This is the only
            path ever tested against ignore patterns.
    """
    source_path: str
    dest_path: str
    relative_path: str = "/"

    @classmethod
    def root(cls, source_path: str, dest_path: str) -> SyncTarget:
        return cls(source_path, dest_path, "/")

    def child(self, name: str) -> SyncTarget:
        """Target for the subdirectory *name* of this directory."""
        return SyncTarget(
            source_path=os.path.join(self.source_path, name),
            dest_path=os.path.join(self.dest_path, name),
            relative_path=posixpath.join(self.relative_path, name),
        )

    def report_path(self, name: str) -> str:
        """Destination-relative path of *name* as used in reports."""
        return posixpath.join(self.relative_path, name).lstrip("/")


@dataclass(frozen=True)
class SyncOptions:
    """Settings shared unchanged by every step of one sync.

    Attributes:
        delete_extraneous: Remove destination entries with no source
            counterpart (rsync ``--delete``).
        exclude: Ignore-pattern filter, or ``None`` to include everything.
        dry_run: Report what would change without touching the destination.
        workers: Number of threads used to reconcile the files of one
            directory.  ``1`` keeps everything on the calling thread.
    """
    delete_extraneous: bool = False
    exclude: ExcludeFilter | None = None
    dry_run: bool = False
    workers: int = 1

    def __post_init__(self) -> None:
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")


@dataclass
class FileEntry:
    """A destination path with its kind, used in :class:`ChangeReport` lists.

    Attributes:
        path: Path relative to the destination root (forward slashes,
            no leading slash).
        kind: :class:`EntryKind` of the entry.
    """
    path: str
    kind: EntryKind = EntryKind.FILE


class ChangeActionKind(str, Enum):
    """Kind of change action: ``ADD``, ``UPDATE``, or ``DELETE``."""
    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"

    def __str__(self) -> str:          # noqa: D105
        return self.value


@dataclass
class ChangeAction:
    """A single add/update/delete action in a :class:`ChangeReport`."""
    path: str
    action: ChangeActionKind


@dataclass
class ChangeReport:
    """Result of a sync (or of a dry run).

    Attributes:
        add: Files copied and directories created in the destination.
        update: Files whose content was overwritten.
        delete: Destination entries removed (a removed directory is
            listed once; its contents are not enumerated).
    """
    add: list[FileEntry] = field(default_factory=list)
    update: list[FileEntry] = field(default_factory=list)
    delete: list[FileEntry] = field(default_factory=list)

    @property
    def in_sync(self) -> bool:
        """``True`` if there are no add, update, or delete actions."""
        return not self.add and not self.update and not self.delete

    @property
    def total(self) -> int:
        """Total number of add + update + delete actions."""
        return len(self.add) + len(self.update) + len(self.delete)

    def record(self, action: ChangeActionKind, entry: FileEntry) -> None:
        if action is ChangeActionKind.ADD:
            self.add.append(entry)
        elif action is ChangeActionKind.UPDATE:
            self.update.append(entry)
        else:
            self.delete.append(entry)

    def actions(self) -> list[ChangeAction]:
        """Return all actions as a flat list sorted by path."""
        result: list[ChangeAction] = []
        for e in self.add:
            result.append(ChangeAction(path=e.path, action=ChangeActionKind.ADD))
        for e in self.update:
            result.append(ChangeAction(path=e.path, action=ChangeActionKind.UPDATE))
        for e in self.delete:
            result.append(ChangeAction(path=e.path, action=ChangeActionKind.DELETE))
        result.sort(key=lambda a: a.path)
        return result


def format_summary(report: ChangeReport) -> str:
    """One-line ``+N ~N -N`` summary of *report*."""
    parts = []
    if report.add:
        parts.append(f"+{len(report.add)}")
    if report.update:
        parts.append(f"~{len(report.update)}")
    if report.delete:
        parts.append(f"-{len(report.delete)}")
    return " ".join(parts) if parts else "no changes"
