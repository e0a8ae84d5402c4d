"""
Lifecycle of a single test enlistment.

An enlistment is one isolated clone of the test repository, mounted by the
product under a unique root. Setting one up runs, in order:

    1. product clone of the configured repository at a commit-ish
    2. product mount
    3. post-clone git configuration of the working tree
    4. forced hydration of the root .gitignore

If any step fails, the product logs are written to the harness log before a
SetupError (chained to the original exception) reaches the caller.

Usage:
    enlistment = clone_and_mount(config)
    try:
        assert enlistment.wait_for_background_operations()
        ...
    finally:
        enlistment.unmount_and_delete_all()
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Tuple, Union

from vfstest.config import HarnessConfig
from vfstest.constants import (
    CONTROL_DIR_NAME,
    DEFAULT_MAX_WAIT_MS,
    DIAGNOSTICS_DIR_NAME,
    DOT_GIT_OBJECTS_ROOT,
    LOGS_DIR_NAME,
    ROOT_GITIGNORE,
    SRC_DIR_NAME,
)
from vfstest.core.interfaces import DirectoryEraser, PostCloneConfigurator, ProductProcess
from vfstest.enlistment import cache
from vfstest.enlistment.paths import PathTopology
from vfstest.enlistment.polling import (
    background_operations_target,
    lock_held_target,
    wait_for_status,
)
from vfstest.exceptions import EnlistmentStateError, SetupError
from vfstest.io.erase import select_eraser
from vfstest.io.logs import emit_logs
from vfstest.process.git import GitProcess
from vfstest.process.vfs import VFSProcess

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
GitFactory = Callable[[Path], PostCloneConfigurator]


class EnlistmentState(Enum):
    UNBUILT = "unbuilt"
    CLONING = "cloning"
    MOUNTED = "mounted"
    UNMOUNTED = "unmounted"
    DELETED = "deleted"


class Enlistment:
    """
    One enlistment under test and the product operations acting on it.

    Mount state is owned by the product; ``state`` only records what this
    object last asked the product to do.
    """

    def __init__(
        self,
        config: HarnessConfig,
        root: PathLike,
        repo_url: str,
        commitish: str,
        local_cache_root: PathLike,
        process: Optional[ProductProcess] = None,
        eraser: Optional[DirectoryEraser] = None,
        git_factory: GitFactory = GitProcess,
    ):
        self.config = config
        self._root = Path(root)
        self._repo_url = repo_url
        self._commitish = commitish
        self._local_cache_root = Path(local_cache_root)
        self.process = process or VFSProcess(
            config.vfs_path, self._root, self._local_cache_root
        )
        self.eraser = eraser or select_eraser(
            config.delete_retries, config.delete_retry_delay
        )
        self.git_factory = git_factory
        self.state = EnlistmentState.UNBUILT
        self.setup_stage: Optional[str] = None

    @classmethod
    def attach(
        cls,
        config: HarnessConfig,
        root: PathLike,
        local_cache_root: Optional[PathLike] = None,
        commitish: Optional[str] = None,
        **collaborators,
    ) -> "Enlistment":
        """Wrap an enlistment that was set up earlier, e.g. by another process."""
        topology = PathTopology(config)
        root = Path(root)
        if local_cache_root is None:
            local_cache_root = topology.resolve_cache_root(root, config.local_cache_root)
        enlistment = cls(
            config,
            root,
            config.repo_url,
            commitish or config.commitish,
            local_cache_root,
            **collaborators,
        )
        if enlistment.repo_root.is_dir():
            enlistment.state = EnlistmentState.MOUNTED
        return enlistment

    # paths

    @property
    def root(self) -> Path:
        return self._root

    @property
    def repo_url(self) -> str:
        return self._repo_url

    @property
    def commitish(self) -> str:
        return self._commitish

    @property
    def local_cache_root(self) -> Path:
        return self._local_cache_root

    @property
    def repo_root(self) -> Path:
        return self._root / SRC_DIR_NAME

    @property
    def control_root(self) -> Path:
        return self._root / CONTROL_DIR_NAME

    @property
    def logs_root(self) -> Path:
        return self.control_root / LOGS_DIR_NAME

    @property
    def diagnostics_root(self) -> Path:
        return self.control_root / DIAGNOSTICS_DIR_NAME

    def get_virtual_path_to(self, *parts: str) -> Path:
        """
        Path of a file inside the mounted working tree.

        Git-style paths use forward slashes; they are converted to the host
        separator before joining.
        """
        native = [part.replace("/", os.sep) for part in parts]
        return self.repo_root.joinpath(*native)

    def get_object_path_to(self, object_hash: str) -> Path:
        """Loose object path, fanned out on the first two hash characters."""
        if len(object_hash) < 2:
            raise ValueError(f"Object hash too short: '{object_hash}'")
        return self.repo_root / DOT_GIT_OBJECTS_ROOT / object_hash[:2] / object_hash[2:]

    def get_object_root(self) -> Path:
        return cache.object_root(self.local_cache_root)

    def get_pack_root(self) -> Path:
        return cache.pack_root(self.local_cache_root)

    # lifecycle

    def _ensure_live(self, operation: str) -> None:
        if self.state is EnlistmentState.DELETED:
            raise EnlistmentStateError(self.root, operation)

    def clone_and_mount(self) -> None:
        """Clone, mount and configure the enlistment; see the module docstring."""
        self._ensure_live("clone")

        self.setup_stage = "clone"
        if self.root.exists():
            raise FileExistsError(f"Enlistment root {self.root} already exists")
        self.state = EnlistmentState.CLONING
        logger.info(f"Cloning {self.repo_url}@{self.commitish} into {self.root}")
        self.process.clone(self.repo_url, self.commitish)

        self.setup_stage = "mount"
        self.mount()

        self.setup_stage = "configure"
        self.git_factory(self.repo_root).configure_after_clone(self.commitish)

        # A background status scan may hydrate .gitignore at any time while
        # reading ignore rules; hydrate it now so tests see a stable state.
        self.setup_stage = "hydrate"
        if self.get_virtual_path_to(ROOT_GITIGNORE).is_file():
            self.hydrate(ROOT_GITIGNORE)

        self.setup_stage = None

    def hydrate(self, relative_path: str) -> int:
        """Read a working tree file in full so the product hydrates it."""
        data = self.get_virtual_path_to(relative_path).read_bytes()
        logger.debug(f"Hydrated {relative_path} ({len(data)} bytes)")
        return len(data)

    def mount(self) -> None:
        self._ensure_live("mount")
        self.process.mount()
        self.state = EnlistmentState.MOUNTED

    def try_mount(self) -> Tuple[bool, str]:
        self._ensure_live("mount")
        success, output = self.process.try_mount()
        if success:
            self.state = EnlistmentState.MOUNTED
        return success, output

    def unmount(self) -> None:
        self._ensure_live("unmount")
        self.process.unmount()
        self.state = EnlistmentState.UNMOUNTED

    def delete_enlistment(self) -> bool:
        """
        Emit the product logs, then remove the enlistment directory tree.

        Returns:
            True if the tree is gone. A False result has already been logged
            as a warning; cleanup is never assumed to have succeeded.
        """
        emit_logs(self.logs_root)

        deleted = self.eraser.erase(self.root)
        if deleted:
            self.state = EnlistmentState.DELETED
        else:
            logger.warning(f"Enlistment {self.root} was left on disk")
        return deleted

    def unmount_and_delete_all(self) -> bool:
        self.unmount()
        return self.delete_enlistment()

    # product pass-throughs

    def prefetch(self, args: str, fail_on_error: bool = True) -> str:
        return self.process.prefetch(args, fail_on_error)

    def repair(self) -> str:
        return self.process.repair()

    def diagnose(self) -> str:
        return self.process.diagnose()

    def status(self) -> str:
        return self.process.status()

    def get_cache_server(self) -> str:
        return self.process.cache_server("--get")

    def set_cache_server(self, arg: str) -> str:
        return self.process.cache_server("--set " + arg)

    # convergence

    def wait_for_background_operations(
        self, max_wait_ms: int = DEFAULT_MAX_WAIT_MS
    ) -> bool:
        return wait_for_status(self.status, max_wait_ms, background_operations_target())

    def wait_for_lock(self, lock_command: str, max_wait_ms: int = DEFAULT_MAX_WAIT_MS) -> bool:
        return wait_for_status(self.status, max_wait_ms, lock_held_target(lock_command))

    def __repr__(self) -> str:
        return f"Enlistment(root={str(self.root)!r}, state={self.state.value})"


def _clone_and_mount(
    config: HarnessConfig,
    root: Path,
    commitish: Optional[str],
    local_cache_root: Path,
    **collaborators,
) -> Enlistment:
    enlistment = Enlistment(
        config,
        root,
        config.repo_url,
        commitish or config.commitish,
        local_cache_root,
        **collaborators,
    )

    try:
        enlistment.clone_and_mount()
    except Exception as e:
        stage = enlistment.setup_stage or "setup"
        logger.error(f"Unhandled exception in clone_and_mount ({stage}): {e!r}")
        emit_logs(enlistment.logs_root)
        raise SetupError(enlistment, stage) from e

    return enlistment


def clone_and_mount(
    config: HarnessConfig,
    commitish: Optional[str] = None,
    local_cache_root: Optional[PathLike] = None,
    **collaborators,
) -> Enlistment:
    """
    Create a new enlistment with a unique root and set it up.

    Args:
        config: Harness configuration
        commitish: Commit-ish to clone (defaults to the configured one)
        local_cache_root: Cache root to use verbatim (defaults to the
            configured one, else shared or per-repo per ``no_shared_cache``)
        **collaborators: ``process``, ``eraser`` or ``git_factory`` overrides

    Returns:
        The mounted enlistment

    Raises:
        SetupError: If any setup step fails, after the product logs were emitted
    """
    topology = PathTopology(config)
    root = topology.unique_enlistment_root()
    cache_root = topology.resolve_cache_root(
        root, local_cache_root if local_cache_root is not None else config.local_cache_root
    )
    return _clone_and_mount(config, root, commitish, cache_root, **collaborators)


def clone_and_mount_with_per_repo_cache(
    config: HarnessConfig, commitish: Optional[str] = None, **collaborators
) -> Enlistment:
    topology = PathTopology(config)
    root = topology.unique_enlistment_root()
    cache_root = topology.repo_specific_cache_root(root)
    return _clone_and_mount(config, root, commitish, cache_root, **collaborators)


def clone_and_mount_with_spaces_in_path(
    config: HarnessConfig, commitish: Optional[str] = None, **collaborators
) -> Enlistment:
    topology = PathTopology(config)
    root = topology.unique_enlistment_root_with_spaces()
    cache_root = topology.repo_specific_cache_root(root)
    return _clone_and_mount(config, root, commitish, cache_root, **collaborators)
