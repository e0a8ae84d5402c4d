import io
import logging
import shlex
import shutil
import sys
from pathlib import Path

import pytest
from git import Actor, Repo

from vfstest.config import HarnessConfig

FAKE_VFS = Path(__file__).parent / "data" / "fake_vfs.py"

requires_git = pytest.mark.skipif(
    shutil.which("git") is None, reason="git executable not available"
)


@pytest.fixture
def capture_logs():
    """Fixture to capture harness log output during tests."""
    log_stream = io.StringIO()
    handler = logging.StreamHandler(log_stream)
    logger = logging.getLogger("vfstest")
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    yield log_stream

    logger.removeHandler(handler)
    logger.setLevel(previous_level)
    log_stream.close()


@pytest.fixture
def harness_config(tmp_path) -> HarnessConfig:
    """Configuration rooted in a per-test temporary directory."""
    return HarnessConfig(
        vfs_path="gvfs",
        enlistment_root=tmp_path / "base" / "enlistment",
        repo_url="https://example.com/repo.git",
        commitish="main",
        no_shared_cache=False,
        delete_retries=0,
        delete_retry_delay=0.0,
    )


@pytest.fixture
def fake_vfs_path() -> str:
    """Command line running the scripted fake product."""
    return f"{shlex.quote(sys.executable)} {shlex.quote(str(FAKE_VFS))}"


@pytest.fixture
def origin_repo(tmp_path) -> Path:
    """A local repository on branch ``main`` with a root .gitignore."""
    path = tmp_path / "origin"
    path.mkdir()
    repo = Repo.init(path.as_posix())
    (path / ".gitignore").write_text("*.log\n")
    (path / "readme.md").write_text("# test repository\n")
    (path / "docs").mkdir()
    (path / "docs" / "guide.md").write_text("guide\n")
    repo.index.add([".gitignore", "readme.md", "docs/guide.md"])
    author = Actor("Origin Author", "origin@example.com")
    repo.index.commit("initial commit", author=author, committer=author)
    repo.git.branch("-M", "main")
    return path


@pytest.fixture
def fake_product_config(tmp_path, fake_vfs_path, origin_repo) -> HarnessConfig:
    """Configuration driving the fake product against ``origin_repo``."""
    return HarnessConfig(
        vfs_path=fake_vfs_path,
        enlistment_root=tmp_path / "base" / "enlistment",
        repo_url=str(origin_repo),
        commitish="main",
        no_shared_cache=False,
        delete_retries=2,
        delete_retry_delay=0.0,
    )
