"""Test configuration and fixtures."""

from pathlib import Path
from typing import Dict

import pytest


def snapshot_tree(root: Path) -> Dict[str, bytes]:
    """Map every file under root (relative path) to its contents."""
    return {
        str(path.relative_to(root)): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


@pytest.fixture
def snapshot():
    """Expose snapshot_tree to tests."""
    return snapshot_tree
