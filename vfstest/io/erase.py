"""
Directory removal for enlistment teardown.

Background processes of the product may still hold handles to files in an
enlistment when a test finishes, so removal is retried a bounded number of
times. A failure is reported to the caller and logged, never raised.
"""

import logging
import shutil
import subprocess
import sys
import time
from abc import ABCMeta, abstractmethod
from pathlib import Path
from typing import Callable

from vfstest.core.interfaces import DirectoryEraser

logger = logging.getLogger(__name__)


class _RetryingEraser(metaclass=ABCMeta):
    """Bounded-retry removal; subclasses supply one removal attempt."""

    def __init__(
        self,
        retries: int = 10,
        retry_delay: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.retries = retries
        self.retry_delay = retry_delay
        self.sleep = sleep

    @abstractmethod
    def _remove_once(self, path: Path) -> None:
        """Make one attempt at removing the tree at ``path``."""

    def erase(self, path: Path) -> bool:
        path = Path(path)
        attempts = self.retries + 1
        for attempt in range(1, attempts + 1):
            if not path.exists():
                return True
            try:
                self._remove_once(path)
            except OSError as e:
                logger.debug(f"Attempt {attempt}/{attempts} to delete {path} failed: {e}")
            if not path.exists():
                logger.debug(f"Deleted {path} after {attempt} attempt(s)")
                return True
            if attempt < attempts:
                self.sleep(self.retry_delay)

        logger.warning(f"Could not delete {path} after {attempts} attempts")
        return False


class TombstoneAwareEraser(_RetryingEraser):
    """Deletes through ``cmd``, which handles reparse points and tombstones."""

    def _remove_once(self, path: Path) -> None:
        subprocess.run(
            ["cmd.exe", "/c", "rmdir", "/s", "/q", str(path)],
            capture_output=True,
            text=True,
            check=False,
        )


class PosixEraser(_RetryingEraser):
    """Deletes with ``shutil.rmtree``."""

    def _remove_once(self, path: Path) -> None:
        shutil.rmtree(path)


def select_eraser(
    retries: int = 10, retry_delay: float = 1.0, platform: str = sys.platform
) -> DirectoryEraser:
    """Pick the eraser for the running platform."""
    if platform.startswith("win"):
        return TombstoneAwareEraser(retries=retries, retry_delay=retry_delay)
    return PosixEraser(retries=retries, retry_delay=retry_delay)
