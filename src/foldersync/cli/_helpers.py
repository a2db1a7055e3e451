"""Shared helpers, option decorators, and the main CLI group."""

from __future__ import annotations

import logging

import click

from .._types import ChangeReport


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _status(ctx, msg):
    """Emit a status message to stderr when verbose mode (-v) is on."""
    if ctx.obj.get("verbose"):
        click.echo(msg, err=True)


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("foldersync").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)


_ACTION_PREFIX = {"add": "+", "update": "~", "delete": "-"}


def _echo_actions(report: ChangeReport, *, err: bool = False) -> None:
    """Print one ``+``/``~``/``-`` line per action, sorted by path."""
    for action in report.actions():
        click.echo(f"{_ACTION_PREFIX[action.action.value]} {action.path}", err=err)


# ---------------------------------------------------------------------------
# Shared options
# ---------------------------------------------------------------------------

def _dry_run_option(f):
    return click.option(
        "--dry-run", "-n", is_flag=True, default=False,
        help="Show what would change without changing anything.",
    )(f)


def _exclude_options(f):
    """--exclude / --exclude-from options."""
    f = click.option(
        "--exclude-from", "exclude_from", type=click.Path(exists=True, dir_okay=False),
        help="Read ignore patterns from file (one per line, # comments).",
    )(f)
    f = click.option(
        "--exclude", multiple=True, envvar="FOLDERSYNC_EXCLUDE",
        help="Ignore paths matching pattern (gitignore syntax, repeatable; "
             "or set FOLDERSYNC_EXCLUDE).",
    )(f)
    return f


def _workers_option(f):
    return click.option(
        "--workers", "-j", type=click.IntRange(min=1), default=1,
        envvar="FOLDERSYNC_WORKERS", show_default=True,
        help="Threads used to compare and copy the files of one directory.",
    )(f)


# ---------------------------------------------------------------------------
# Main group
# ---------------------------------------------------------------------------

@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose output on stderr.")
@click.version_option(package_name="foldersync")
@click.pass_context
def main(ctx, verbose):
    """foldersync: one-way, content-based directory sync.

    Make a destination directory byte-for-byte identical to a source
    directory.  Files are compared by SHA-256 digest, so only changed
    content is copied.  The source is never modified.

    \b
    Quick start:
      foldersync sync ./photos /backup          (fills /backup/photos)
      foldersync sync ./photos/ /backup/pics    (contents only)
      foldersync sync --delete --exclude '*.tmp' ./photos /backup
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose)
