import logging
from pathlib import Path

from git import Repo

from vfstest.constants import (
    FULL_HASH_ABBREV,
    FUNCTIONAL_TEST_USER_EMAIL,
    FUNCTIONAL_TEST_USER_NAME,
)

logger = logging.getLogger(__name__)


class GitProcess:
    """Git commands run inside a mounted working tree."""

    def __init__(self, repo_root: Path):
        self.repo_root = Path(repo_root)
        self.repo = Repo(self.repo_root.as_posix())

    def configure_after_clone(self, commitish: str) -> None:
        """
        Put a freshly mounted working tree into the state tests expect.

        Checks out ``commitish``, detaches the branch from its upstream,
        shows full hashes and sets a fixed author identity.

        Raises:
            git.exc.GitCommandError: If any command fails
        """
        logger.info(f"Configuring {self.repo_root} at {commitish}")
        self.repo.git.checkout(commitish)
        self.repo.git.branch("--unset-upstream")
        self.repo.git.config("core.abbrev", FULL_HASH_ABBREV)
        self.repo.git.config("user.name", FUNCTIONAL_TEST_USER_NAME)
        self.repo.git.config("user.email", FUNCTIONAL_TEST_USER_EMAIL)
