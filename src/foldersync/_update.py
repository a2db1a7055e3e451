"""Single-file reconciliation by content digest."""

from __future__ import annotations

import logging

from ._io import copy_file, file_digest, file_exists
from ._types import ChangeActionKind

logger = logging.getLogger(__name__)

DIGEST_ALGORITHM = "sha256"


def reconcile_file(
    source_file: str,
    dest_file: str,
    *,
    dry_run: bool = False,
    dest_present: bool = True,
) -> ChangeActionKind | None:
    """Make *dest_file* byte-identical to *source_file*.

    The SHA-256 digests of both files are the only change signal;
    timestamps, sizes and permission bits are never looked at.  Returns
    ``ADD`` when the destination was missing, ``UPDATE`` when it was
    overwritten, and ``None`` when it already matched.

    With *dry_run* nothing is copied but the same action is returned.
    *dest_present* set to False skips the existence check (used by dry
    runs when a conflicting entry would already have been removed).

    Errors from hashing, the existence check or the copy propagate.
    """
    source_digest = file_digest(source_file, DIGEST_ALGORITHM)

    if not dest_present or not file_exists(dest_file):
        action = ChangeActionKind.ADD
    elif file_digest(dest_file, DIGEST_ALGORITHM) == source_digest:
        return None
    else:
        action = ChangeActionKind.UPDATE

    if not dry_run:
        copy_file(source_file, dest_file)
    logger.debug("%s %s -> %s", action, source_file, dest_file)
    return action
