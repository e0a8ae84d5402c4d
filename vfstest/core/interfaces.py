"""Protocol interfaces for the enlistment's collaborators.

Protocols that decouple the lifecycle from the product executable and from
platform-specific filesystem behaviour.
"""

from pathlib import Path
from typing import Protocol, Tuple


class DirectoryEraser(Protocol):
    """Recursively removes a directory tree."""

    def erase(self, path: Path) -> bool:
        """Remove ``path`` and everything below it.

        Returns:
            True if the tree no longer exists afterwards
        """
        ...


class ProductProcess(Protocol):
    """The product verbs an enlistment drives."""

    def clone(self, repo_url: str, commitish: str) -> str: ...

    def mount(self) -> str: ...

    def try_mount(self) -> Tuple[bool, str]: ...

    def unmount(self) -> str: ...

    def status(self) -> str: ...

    def prefetch(self, args: str, fail_on_error: bool = True) -> str: ...

    def repair(self) -> str: ...

    def diagnose(self) -> str: ...

    def cache_server(self, args: str) -> str: ...


class PostCloneConfigurator(Protocol):
    """Prepares a mounted working tree for tests."""

    def configure_after_clone(self, commitish: str) -> None: ...
