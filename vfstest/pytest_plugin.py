"""
pytest fixtures providing mounted enlistments.

Loaded automatically through the ``pytest11`` entry point. Each enlistment
fixture yields a freshly cloned and mounted enlistment and unmounts and
deletes it after the test.
"""

import logging

import pytest

from vfstest.config import load_config
from vfstest.enlistment import (
    clone_and_mount,
    clone_and_mount_with_per_repo_cache,
    clone_and_mount_with_spaces_in_path,
)
from vfstest.exceptions import VFSCommandError

logger = logging.getLogger(__name__)


def pytest_addoption(parser):
    group = parser.getgroup("vfstest")
    group.addoption(
        "--vfstest-config",
        action="store",
        default=None,
        help="Harness configuration file for enlistment fixtures.",
    )


def _teardown(enlistment):
    try:
        enlistment.unmount()
    except VFSCommandError as e:
        logger.warning(f"Unmount of {enlistment.root} failed during teardown: {e}")
    if not enlistment.delete_enlistment():
        logger.warning(f"Enlistment {enlistment.root} left behind after teardown")


@pytest.fixture(scope="session")
def vfstest_config(request):
    """Harness configuration shared by all enlistments of the session."""
    return load_config(request.config.getoption("--vfstest-config"))


@pytest.fixture
def enlistment(vfstest_config):
    """An enlistment using the configured cache policy."""
    instance = clone_and_mount(vfstest_config)
    yield instance
    _teardown(instance)


@pytest.fixture
def enlistment_per_repo_cache(vfstest_config):
    """An enlistment with its own cache nested under its root."""
    instance = clone_and_mount_with_per_repo_cache(vfstest_config)
    yield instance
    _teardown(instance)


@pytest.fixture
def enlistment_with_spaces(vfstest_config):
    """An enlistment whose root contains a space."""
    instance = clone_and_mount_with_spaces_in_path(vfstest_config)
    yield instance
    _teardown(instance)
