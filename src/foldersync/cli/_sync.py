"""The sync command."""

from __future__ import annotations

import os

import click

from ..exceptions import FolderSyncError
from ._helpers import (
    main,
    _dry_run_option,
    _echo_actions,
    _exclude_options,
    _status,
    _workers_option,
)


def _resolve_dest(source: str, dest: str) -> str:
    """Return the destination folder following the rsync trailing-slash rule.

    ``src/`` means "the contents of src", so *dest* itself is the
    destination folder; ``src`` means "the folder src", which lands in
    ``dest/src``.
    """
    if source.endswith(("/", os.sep)):
        return dest
    name = os.path.basename(os.path.normpath(source))
    return os.path.join(dest, name)


@main.command()
@click.argument("source", type=click.Path(exists=True, file_okay=False))
@click.argument("dest", type=click.Path(file_okay=False))
@click.option("--delete", "delete_extraneous", is_flag=True, default=False,
              help="Delete destination entries that are not in the source.")
@_exclude_options
@_dry_run_option
@_workers_option
@click.option("--watch", "watch", is_flag=True, default=False,
              help="Watch the source for changes and sync continuously.")
@click.option("--debounce", type=int, default=2000,
              help="Debounce delay in ms for --watch (default: 2000).")
@click.pass_context
def sync(ctx, source, dest, delete_extraneous, exclude, exclude_from, dry_run,
         workers, watch, debounce):
    """Make DEST mirror SOURCE (one way, by content).

    \b
    A trailing slash on SOURCE syncs its contents into DEST:
        foldersync sync ./site/ /var/www/site
    Without it, the folder itself is mirrored under DEST:
        foldersync sync ./site /var/www      (-> /var/www/site)

    Ignore patterns use gitignore syntax and are matched against paths
    relative to SOURCE; the first matching pattern wins.
    """
    from ..sync import sync_folder

    if watch:
        if dry_run:
            raise click.ClickException("--watch and --dry-run are incompatible")
        if debounce < 100:
            raise click.ClickException("--debounce must be at least 100 ms")

    dest_folder = _resolve_dest(source, dest)
    kwargs = dict(
        delete_extraneous=delete_extraneous,
        ignore_globs=list(exclude),
        exclude_from=exclude_from,
        workers=workers,
    )

    if watch:
        from ._watch import watch_and_sync
        watch_and_sync(source, dest_folder, debounce=debounce, **kwargs)
        return

    try:
        report = sync_folder(source, dest_folder, dry_run=dry_run, **kwargs)
    except (FolderSyncError, ValueError) as exc:
        raise click.ClickException(str(exc))

    if dry_run:
        _echo_actions(report)
    else:
        if ctx.obj.get("verbose"):
            _echo_actions(report, err=True)
        _status(ctx, f"Synced {source} -> {dest_folder}")
