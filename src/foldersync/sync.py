"""One-way, content-based directory synchronization.

Make a destination directory identical to a source directory
(``sync_folder``), or mirror a folder into a container directory under
its own name (``sync``).  The source is never modified.

Each directory is handled in strictly ordered phases:

1. list the source, create the destination if needed, list it;
2. classify destination entries to remove (kind conflicts always,
   extraneous entries with ``delete_extraneous``) and source entries to
   update (files) or recurse into (directories);
3. remove, then update files, then recurse.

Ignored directories are pruned: nothing below them is listed, hashed or
visited.  No state survives between runs; every call re-derives the
diff from the filesystem, so re-running after a failure resumes where
the previous run stopped.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from ._exclude import ExcludeFilter
from ._io import ensure_dir, file_exists, list_entries, remove_entry
from ._types import (
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

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def _ignored(options: SyncOptions, relative_dir: str, entry: Entry) -> bool:
    if options.exclude is None:
        return False
    return options.exclude.is_entry_excluded(relative_dir, entry)


def _classify_removals(
    target: SyncTarget,
    source_entries: list[Entry],
    dest_entries: list[Entry],
    options: SyncOptions,
) -> list[Entry]:
    """Destination entries that must go before anything is added."""
    by_name = {e.name: e for e in source_entries}
    to_remove: list[Entry] = []
    for dest_entry in dest_entries:
        source_entry = by_name.get(dest_entry.name)
        if source_entry is None:
            # Extraneous: only with --delete, and never when ignored.
            if (options.delete_extraneous
                    and not _ignored(options, target.relative_path, dest_entry)):
                to_remove.append(dest_entry)
        elif source_entry.kind is not dest_entry.kind:
            # Kind conflict: the source entry cannot be materialized over
            # the wrong kind, so remove unless both sides are ignored.
            if (not _ignored(options, target.relative_path, dest_entry)
                    or not _ignored(options, target.relative_path, source_entry)):
                to_remove.append(dest_entry)
    return to_remove


def _classify_additions(
    target: SyncTarget,
    source_entries: list[Entry],
    options: SyncOptions,
) -> tuple[list[str], list[str]]:
    """Split non-ignored source entries into ``(files, directories)``."""
    files: list[str] = []
    dirs: list[str] = []
    for entry in source_entries:
        if _ignored(options, target.relative_path, entry):
            continue
        if entry.kind is EntryKind.FILE:
            files.append(entry.name)
        elif entry.kind is EntryKind.DIRECTORY:
            dirs.append(entry.name)
        else:
            raise AssertionError(f"unhandled entry kind: {entry.kind!r}")
    return files, dirs


# ---------------------------------------------------------------------------
# Recursion
# ---------------------------------------------------------------------------

def _sync_folder(
    target: SyncTarget,
    options: SyncOptions,
    report: ChangeReport,
    pool: ThreadPoolExecutor | None = None,
    *,
    dest_present: bool = True,
) -> None:
    """Reconcile one directory pair, then recurse into its subdirectories.

    *dest_present* is only False during dry runs, for a destination
    directory that does not exist yet (or would just have been removed
    because of a kind conflict); it is then treated as empty.
    """
    source_entries = list_entries(target.source_path)

    if options.dry_run:
        if dest_present and file_exists(target.dest_path):
            dest_entries = list_entries(target.dest_path)
        else:
            dest_entries = []
            if target.relative_path != "/":
                report.add.append(FileEntry(target.relative_path.lstrip("/"),
                                            EntryKind.DIRECTORY))
    else:
        if ensure_dir(target.dest_path) and target.relative_path != "/":
            report.add.append(FileEntry(target.relative_path.lstrip("/"),
                                        EntryKind.DIRECTORY))
        dest_entries = list_entries(target.dest_path)

    to_remove = _classify_removals(target, source_entries, dest_entries, options)
    to_update, to_recurse = _classify_additions(target, source_entries, options)

    # Phase 1: removals (must complete before anything is added).
    removed: set[str] = set()
    for entry in to_remove:
        path = os.path.join(target.dest_path, entry.name)
        if not options.dry_run:
            remove_entry(path, entry.kind)
        logger.debug("remove %s", path)
        removed.add(entry.name)
        report.delete.append(FileEntry(target.report_path(entry.name), entry.kind))

    # Phase 2: file updates.
    present = {e.name for e in dest_entries} - removed

    def update(name: str) -> ChangeActionKind | None:
        return reconcile_file(
            os.path.join(target.source_path, name),
            os.path.join(target.dest_path, name),
            dry_run=options.dry_run,
            dest_present=not options.dry_run or name in present,
        )

    if pool is not None and len(to_update) > 1:
        # map() re-raises the first failure in submission order.
        actions = list(pool.map(update, to_update))
    else:
        actions = [update(name) for name in to_update]
    for name, action in zip(to_update, actions):
        if action is not None:
            report.record(action, FileEntry(target.report_path(name)))

    # Phase 3: subdirectories.
    for name in to_recurse:
        child = target.child(name)
        logger.debug("enter %s", child.relative_path)
        _sync_folder(
            child, options, report, pool,
            dest_present=not options.dry_run or name in present,
        )


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def _check_pair(source_path: str, dest_path: str) -> None:
    """Refuse pairs where one directory contains the other."""
    src = os.path.realpath(source_path)
    dest = os.path.realpath(dest_path)
    if src == dest:
        raise ValueError(f"Source and destination are the same directory: {source_path}")
    common = os.path.commonpath([src, dest])
    if common == src:
        raise ValueError(
            f"Destination {dest_path} is inside source {source_path}"
        )
    if common == dest:
        raise ValueError(
            f"Source {source_path} is inside destination {dest_path}"
        )


def sync_folder(
    source_path: str,
    dest_path: str,
    delete_extraneous: bool = False,
    ignore_globs: Sequence[str] | None = None,
    *,
    exclude_from: str | None = None,
    dry_run: bool = False,
    workers: int = 1,
) -> ChangeReport:
    """Make *dest_path* identical to *source_path*.

    *dest_path* and any missing parents are created.  Files are compared
    by SHA-256 digest only; matching files are left untouched.

    Args:
        source_path: Directory to read from.  Never modified.
        dest_path: Directory to make identical to *source_path*.
        delete_extraneous: Also remove destination entries that have no
            counterpart in the source (ignored entries are kept).
        ignore_globs: gitignore-style patterns, evaluated against paths
            relative to the sync root (e.g. ``/dir1/a.txt``).
        exclude_from: File with one additional pattern per line.
        dry_run: Report the changes without making them.
        workers: Threads used to reconcile the files of one directory.

    Returns:
        A :class:`ChangeReport` of what was (or would be) added, updated
        and deleted.

    Raises:
        ValueError: If the pair is invalid or *workers* is below 1.
        FolderSyncError: The first I/O failure, at any depth.  The
            destination is left as it was at that moment.
    """
    exclude = None
    if ignore_globs or exclude_from:
        exclude = ExcludeFilter(patterns=ignore_globs, exclude_from=exclude_from)
    options = SyncOptions(
        delete_extraneous=delete_extraneous,
        exclude=exclude if exclude is not None and exclude.active else None,
        dry_run=dry_run,
        workers=workers,
    )
    _check_pair(source_path, dest_path)

    report = ChangeReport()
    root = SyncTarget.root(source_path, dest_path)
    if options.workers > 1:
        with ThreadPoolExecutor(max_workers=options.workers) as pool:
            _sync_folder(root, options, report, pool)
    else:
        _sync_folder(root, options, report)

    logger.info("%s %s -> %s: %s", "dry run" if dry_run else "synced",
                source_path, dest_path, format_summary(report))
    return report


def sync(
    source_folder_path: str,
    dest_directory: str,
    delete_extraneous: bool = False,
    ignore_globs: Sequence[str] | None = None,
    **kwargs,
) -> ChangeReport:
    """Mirror the folder *source_folder_path* into *dest_directory*.

    The destination folder is ``dest_directory/<basename of source>``;
    ``sync("/data/photos", "/backup")`` fills ``/backup/photos``.
    Ignore patterns are still relative to the source folder itself, so
    ``/dir3`` matches ``/data/photos/dir3``.  Keyword arguments are
    passed on to :func:`sync_folder`.
    """
    name = os.path.basename(os.path.normpath(source_folder_path))
    return sync_folder(source_folder_path, os.path.join(dest_directory, name),
                       delete_extraneous, ignore_globs, **kwargs)


async def sync_async(
    source_folder_path: str,
    dest_directory: str,
    delete_extraneous: bool = False,
    ignore_globs: Sequence[str] | None = None,
    **kwargs,
) -> ChangeReport:
    """Awaitable form of :func:`sync`.

    Runs the blocking sync in the event loop's default executor.  The
    semantics and exceptions are the same as :func:`sync`.
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(
        sync, source_folder_path, dest_directory,
        delete_extraneous, ignore_globs, **kwargs,
    ))
