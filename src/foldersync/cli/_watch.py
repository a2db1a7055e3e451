"""Watch mode for the sync command."""

from __future__ import annotations

import datetime

import click

from .._types import format_summary


def _import_watchfiles():
    """Lazy-import watchfiles, raising a friendly error if missing."""
    try:
        import watchfiles
        return watchfiles
    except ImportError:
        raise click.ClickException(
            "watchfiles is required for --watch mode.\n"
            "Install it with: pip install foldersync[watch]"
        )


def _run_sync_cycle(source, dest, **kwargs):
    """Run one sync cycle and print a one-line summary."""
    from ..sync import sync_folder

    report = sync_folder(source, dest, **kwargs)
    now = datetime.datetime.now().strftime("%H:%M:%S")
    click.echo(f"[{now}] Sync: {format_summary(report)}")
    return report


def watch_and_sync(source, dest, *, debounce, **kwargs):
    """Watch *source* and sync to *dest* on every change batch.

    A failed cycle is reported on stderr; the next change batch retries.
    """
    watchfiles = _import_watchfiles()

    # Initial sync to catch up with any pending changes
    click.echo(f"Watching {source} -> {dest} (debounce {debounce}ms)")
    try:
        _run_sync_cycle(source, dest, **kwargs)
    except (OSError, ValueError) as exc:
        click.echo(f"ERROR: Initial sync failed: {exc}", err=True)

    try:
        for _changes in watchfiles.watch(source, debounce=debounce):
            try:
                _run_sync_cycle(source, dest, **kwargs)
            except (OSError, ValueError) as exc:
                click.echo(f"ERROR: Sync failed: {exc}", err=True)
    except KeyboardInterrupt:
        click.echo("\nStopped watching.")
