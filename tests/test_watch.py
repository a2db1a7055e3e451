"""Tests for the watch module."""

from __future__ import annotations

import errno
import sys
from unittest.mock import MagicMock, patch

import click
import pytest

from foldersync import ListingError
from foldersync.cli import main
from foldersync.cli._watch import _import_watchfiles, _run_sync_cycle, watch_and_sync

from conftest import RESOURCE_TREE, list_tree


def _fake_watchfiles(batches=1, interrupt=False):
    """A stand-in for the watchfiles module yielding *batches* change sets."""
    def watch(path, debounce):
        for _ in range(batches):
            yield {("modified", path)}
        if interrupt:
            raise KeyboardInterrupt

    module = MagicMock()
    module.watch.side_effect = watch
    return module


# ---------------------------------------------------------------------------
# _run_sync_cycle
# ---------------------------------------------------------------------------

class TestRunSyncCycle:
    def test_reports_summary(self, resource, out, capsys):
        report = _run_sync_cycle(str(resource), str(out))
        assert len(report.add) == 11
        assert "Sync: +11" in capsys.readouterr().out

    def test_no_changes(self, resource, out, capsys):
        _run_sync_cycle(str(resource), str(out))
        capsys.readouterr()
        _run_sync_cycle(str(resource), str(out))
        assert "Sync: no changes" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# watch_and_sync
# ---------------------------------------------------------------------------

class TestWatchAndSync:
    def test_initial_sync_then_one_per_batch(self, resource, out):
        with patch("foldersync.cli._watch._import_watchfiles",
                   return_value=_fake_watchfiles(batches=2)), \
             patch("foldersync.cli._watch._run_sync_cycle") as cycle:
            watch_and_sync(str(resource), str(out), debounce=500,
                           delete_extraneous=True)
        assert cycle.call_count == 3
        cycle.assert_called_with(str(resource), str(out), delete_extraneous=True)

    def test_failed_cycle_is_reported_and_watching_continues(self, resource, out, capsys):
        err = ListingError(errno.ENOENT, "No such file or directory", str(resource))
        with patch("foldersync.cli._watch._import_watchfiles",
                   return_value=_fake_watchfiles(batches=1)), \
             patch("foldersync.cli._watch._run_sync_cycle",
                   side_effect=[err, err]) as cycle:
            watch_and_sync(str(resource), str(out), debounce=500)
        assert cycle.call_count == 2
        captured = capsys.readouterr()
        assert "ERROR: Initial sync failed" in captured.err
        assert "ERROR: Sync failed" in captured.err

    def test_keyboard_interrupt_stops(self, resource, out, capsys):
        with patch("foldersync.cli._watch._import_watchfiles",
                   return_value=_fake_watchfiles(batches=0, interrupt=True)):
            watch_and_sync(str(resource), str(out), debounce=500)
        assert "Stopped watching." in capsys.readouterr().out
        assert list_tree(out) == RESOURCE_TREE

    def test_missing_watchfiles(self):
        with patch.dict(sys.modules, {"watchfiles": None}):
            with pytest.raises(click.ClickException, match="foldersync\\[watch\\]"):
                _import_watchfiles()


def test_cli_watch_flag(runner, resource, out):
    with patch("foldersync.cli._watch._import_watchfiles",
               return_value=_fake_watchfiles(batches=0)):
        result = runner.invoke(main, ["sync", "--watch", "--exclude", "*.md",
                                      str(resource) + "/", str(out)])
    assert result.exit_code == 0, result.output
    assert "Watching" in result.output
    assert "/test3.md" not in list_tree(out)
