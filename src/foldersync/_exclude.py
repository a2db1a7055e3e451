"""Ignore-pattern support for sync operations.

Combines ``ignore_globs`` patterns and ``exclude_from`` files into a
single predicate used by the sync recursion.

Pattern syntax follows gitignore rules (each pattern is compiled by
``dulwich.ignore.IgnoreFilter``):

- ``frotz`` -- no slash, matches a file or directory named ``frotz`` at
  any depth
- ``frotz/`` -- trailing slash, directories only
- ``*.jpg``, ``backup?.dat``, ``bak[0-9a-z]`` -- ``*``, ``?`` and
  character classes match within one path segment; ``*`` may match
  nothing, so ``*.txt`` also matches a file named ``.txt``
- ``/doc/frotz``, ``doc/frotz`` -- a slash anywhere but the end anchors
  the pattern to the sync root
- ``abc/**`` -- everything below the top-level ``abc``
- ``**/abc`` -- same as ``abc``
- ``a/**/b`` -- ``a/b``, ``a/x/b``, ``a/x/y/b``, ...

Unlike a ``.gitignore`` file, patterns are tried in order and the first
one that matches decides: a plain pattern ignores the path, a ``!``
pattern keeps it.
"""

from __future__ import annotations

import posixpath
from pathlib import Path
from typing import Sequence

from dulwich.ignore import IgnoreFilter

from ._types import Entry


def _read_pattern_file(path: str) -> list[str]:
    lines: list[str] = []
    for raw in Path(path).read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if line and not line.startswith("#"):
            lines.append(line)
    return lines


class ExcludeFilter:
    """Ordered list of ignore patterns with first-match semantics."""

    def __init__(
        self,
        *,
        patterns: Sequence[str] | None = None,
        exclude_from: str | None = None,
    ) -> None:
        lines = [p for p in patterns or () if p.strip()]
        if exclude_from is not None:
            lines.extend(_read_pattern_file(exclude_from))
        self.patterns: tuple[str, ...] = tuple(lines)
        # One filter per pattern so that list order, not gitignore's
        # last-match rule, decides.
        self._filters = [IgnoreFilter([p.encode("utf-8")]) for p in lines]

    def __repr__(self) -> str:
        return f"ExcludeFilter(patterns={list(self.patterns)!r})"

    # ------------------------------------------------------------------
    @property
    def active(self) -> bool:
        """True if any pattern is configured."""
        return bool(self._filters)

    # ------------------------------------------------------------------
    def is_excluded(self, rel_path: str, *, is_dir: bool = False) -> bool:
        """Check a root-anchored path such as ``/dir1/test.txt``.

        A leading ``/`` is optional.  *is_dir* enables patterns with a
        trailing slash.
        """
        rel = rel_path.lstrip("/")
        if not rel:
            return False
        check = rel + "/" if is_dir else rel
        for filt in self._filters:
            result = filt.is_ignored(check)
            if result is not None:
                return result
        return False

    # ------------------------------------------------------------------
    def is_entry_excluded(self, relative_dir: str, entry: Entry) -> bool:
        """Check *entry*, listed in the directory at *relative_dir*."""
        return self.is_excluded(posixpath.join(relative_dir, entry.name),
                                is_dir=entry.is_dir)


def is_ignored(
    relative_path: str,
    file_name: str,
    patterns: Sequence[str] | None,
    *,
    is_dir: bool = False,
) -> bool:
    """Return True if ``relative_path/file_name`` matches *patterns*.

    *relative_path* is the root-anchored directory being visited (``/``
    for the sync root).  An empty or missing pattern list ignores
    nothing.
    """
    if not patterns:
        return False
    return ExcludeFilter(patterns=patterns).is_excluded(
        posixpath.join(relative_path, file_name), is_dir=is_dir,
    )
