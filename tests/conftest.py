"""Shared fixtures for foldersync tests."""

import os

import pytest
from click.testing import CliRunner


RESOURCE_TREE = [
    "/dir1",
    "/dir1/dir3",
    "/dir1/dir3/test1-1-1.txt",
    "/dir1/dir3/test1-1-2.txt",
    "/dir1/test1-1.txt",
    "/dir1/test1-2.md",
    "/dir2",
    "/dir2/test2-1.txt",
    "/test1.txt",
    "/test2.txt",
    "/test3.md",
]


def list_tree(root):
    """Sorted root-anchored paths of every file and directory under *root*."""
    result = []
    for dirpath, dirnames, filenames in os.walk(root):
        rel = os.path.relpath(dirpath, root)
        for name in dirnames + filenames:
            path = name if rel == "." else os.path.join(rel, name)
            result.append("/" + path.replace(os.sep, "/"))
    return sorted(result)


@pytest.fixture
def resource(tmp_path):
    """A source folder named 'resource' with 3 directories and 8 files.

    Tree:
        test1.txt, test2.txt, test3.md,
        dir1/test1-1.txt, dir1/test1-2.md,
        dir1/dir3/test1-1-1.txt, dir1/dir3/test1-1-2.txt,
        dir2/test2-1.txt
    """
    root = tmp_path / "resource"
    for rel in RESOURCE_TREE:
        p = root / rel.lstrip("/")
        if "." in p.name:
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text(f"content of {rel}\n")
        else:
            p.mkdir(parents=True, exist_ok=True)
    return root


@pytest.fixture
def out(tmp_path):
    """A not-yet-created destination path outside the source."""
    return tmp_path / "out"


@pytest.fixture
def runner():
    return CliRunner()
