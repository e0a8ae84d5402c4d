"""
Enlistment management for functional tests.

Path topology, cache discovery, status polling and the setup/teardown
lifecycle of isolated enlistments of the product under test.
"""

from .cache import object_root, pack_root
from .lifecycle import (
    Enlistment,
    EnlistmentState,
    clone_and_mount,
    clone_and_mount_with_per_repo_cache,
    clone_and_mount_with_spaces_in_path,
)
from .paths import (
    PathTopology,
    repo_specific_cache_root,
    resolve_cache_root,
    shared_cache_root,
)
from .polling import background_operations_target, lock_held_target, wait_for_status

__all__ = [
    "Enlistment",
    "EnlistmentState",
    "clone_and_mount",
    "clone_and_mount_with_per_repo_cache",
    "clone_and_mount_with_spaces_in_path",
    "PathTopology",
    "repo_specific_cache_root",
    "resolve_cache_root",
    "shared_cache_root",
    "object_root",
    "pack_root",
    "wait_for_status",
    "background_operations_target",
    "lock_held_target",
]
