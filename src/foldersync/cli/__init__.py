"""foldersync CLI: one-way, content-based directory sync."""

from ._helpers import main  # noqa: F401

# Import command modules to register Click commands with the main group.
from . import _sync  # noqa: F401
