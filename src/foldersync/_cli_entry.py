"""Console-script entry point; reports a missing click instead of a traceback."""

import sys

_MISSING_CLICK = (
    "Error: the foldersync command group (foldersync sync) is built on click,\n"
    "which ships with the optional 'cli' extra.\n"
    "Install it with:  pip install foldersync[cli]"
)


def main():
    try:
        from .cli import main as cli_main
    except ImportError as exc:
        # Only a missing click is an install problem; anything else is a bug.
        if exc.name != "click":
            raise
        print(_MISSING_CLICK, file=sys.stderr)
        raise SystemExit(1)
    cli_main()
