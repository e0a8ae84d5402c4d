"""Tests for post-clone git configuration."""

from unittest.mock import MagicMock, call, patch

import pytest
from git import Repo
from git.exc import GitCommandError

from tests.conftest import requires_git
from vfstest.process.git import GitProcess


@pytest.mark.short
@patch("vfstest.process.git.Repo")
def test_configure_after_clone_runs_commands_in_order(mock_repo_class, tmp_path):
    mock_repo = MagicMock()
    mock_repo_class.return_value = mock_repo

    GitProcess(tmp_path / "src").configure_after_clone("feature/x")

    mock_repo_class.assert_called_once_with((tmp_path / "src").as_posix())
    assert mock_repo.git.mock_calls == [
        call.checkout("feature/x"),
        call.branch("--unset-upstream"),
        call.config("core.abbrev", "40"),
        call.config("user.name", "Functional Test User"),
        call.config("user.email", "functional@test.com"),
    ]


@pytest.mark.short
@patch("vfstest.process.git.Repo")
def test_configure_after_clone_stops_on_failure(mock_repo_class, tmp_path):
    mock_repo = MagicMock()
    mock_repo.git.checkout.side_effect = GitCommandError("checkout", 1)
    mock_repo_class.return_value = mock_repo

    with pytest.raises(GitCommandError):
        GitProcess(tmp_path).configure_after_clone("missing")

    mock_repo.git.config.assert_not_called()


@pytest.mark.integration
@requires_git
def test_configure_after_clone_on_real_clone(origin_repo, tmp_path):
    clone_path = tmp_path / "clone"
    Repo.clone_from(origin_repo.as_posix(), clone_path.as_posix(), branch="main")

    GitProcess(clone_path).configure_after_clone("main")

    repo = Repo(clone_path.as_posix())
    assert repo.active_branch.tracking_branch() is None
    assert repo.git.config("core.abbrev") == "40"
    assert repo.git.config("user.name") == "Functional Test User"
    assert repo.git.rev_parse("HEAD") == repo.git.log("-1", "--format=%h")
