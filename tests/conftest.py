# Shared fixtures for filekeep tests.
# Created: 2026-10-19

from pathlib import Path

import pytest

from filekeep.config import Settings
from filekeep.fs import SnapshotBuilder, VisibilityPolicy


@pytest.fixture
def policy():
    return VisibilityPolicy.from_lists(hide_extensions=[".bak", ".DS_Store"], hide_dots=True)


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Root with a visible file, a dot directory, an excluded extension and one subdirectory.

    root/
      report.pdf        500000 bytes
      notes.bak         hidden by extension
      .git/HEAD         hidden dotdir
      archive/old.txt   200 bytes
    """
    (tmp_path / "report.pdf").write_bytes(b"x" * 500_000)
    (tmp_path / "notes.bak").write_text("scratch")
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
    (tmp_path / "archive").mkdir()
    (tmp_path / "archive" / "old.txt").write_bytes(b"y" * 200)
    return tmp_path


@pytest.fixture
def builder(sample_tree, policy):
    return SnapshotBuilder(sample_tree, policy)


@pytest.fixture
def settings(sample_tree):
    return Settings(root=str(sample_tree))
