"""
Exception classes for the harness.
"""

from pathlib import Path
from typing import Sequence


class HarnessError(Exception):
    """Base exception for all harness errors."""

    pass


class ConfigError(HarnessError):
    """Raised when a configuration value cannot be interpreted."""

    def __init__(self, key: str, value: str, expected: str):
        self.key = key
        self.value = value
        self.expected = expected
        super().__init__(f"Invalid value for '{key}': '{value}'. Expected {expected}")


class VFSCommandError(HarnessError):
    """Raised when the product exits with a non-zero code."""

    def __init__(self, result):
        self.result = result
        cmd = " ".join(result.command)
        super().__init__(
            f"Command '{cmd}' failed with exit code {result.returncode}:\n{result.output}"
        )


class CacheLayoutError(HarnessError, AssertionError):
    """Raised when a cache root does not hold exactly one cache instance."""

    def __init__(self, cache_root: Path, entries: Sequence[Path], message: str):
        self.cache_root = cache_root
        self.entries = list(entries)
        names = ",".join(entry.name for entry in self.entries)
        super().__init__(f"{message}. Actual items: [{names}]")


class SetupError(HarnessError):
    """Raised when cloning, mounting or configuring an enlistment fails.

    The original failure is always available as ``__cause__``.
    """

    def __init__(self, enlistment, stage: str):
        self.enlistment = enlistment
        self.stage = stage
        super().__init__(
            f"Failed to set up enlistment at {enlistment.root} during {stage}"
        )


class EnlistmentStateError(HarnessError):
    """Raised when an operation is requested on a deleted enlistment."""

    def __init__(self, root: Path, operation: str):
        self.root = root
        self.operation = operation
        super().__init__(f"Cannot {operation}: enlistment {root} has been deleted")
