"""
Enlistment and object-cache path topology.

Every enlistment lives in its own directory under the configured
enlistment base, named after a fresh random id so that concurrent test
runs never collide:

    <enlistment_root>/
    ├── 7942ca69d7454acbb45e/          # unique_enlistment_root()
    │   ├── src/                       # working tree
    │   └── .gvfs/
    │       └── .gvfsCache/            # repo_specific_cache_root()
    └── test 0b1d2e3f4a5b6c7/          # unique_enlistment_root_with_spaces()
    ../.gvfsCache/                     # shared_cache_root()

The shared cache sits next to the enlistment base so that it survives
enlistment cleanup and is reused by every enlistment of a run.

Nothing in this module touches the disk.
"""

import uuid
from pathlib import Path
from typing import Optional, Union

from vfstest.config import HarnessConfig
from vfstest.constants import (
    CACHE_DIR_NAME,
    CONTROL_DIR_NAME,
    ENLISTMENT_ID_LENGTH,
    SPACED_ENLISTMENT_ID_LENGTH,
    SPACED_ENLISTMENT_PREFIX,
)

PathLike = Union[str, Path]


def new_enlistment_id(length: int = ENLISTMENT_ID_LENGTH) -> str:
    """Return the first ``length`` lowercase hex digits of a random 128-bit id."""
    return uuid.uuid4().hex[:length]


def repo_specific_cache_root(enlistment_root: PathLike) -> Path:
    """Cache root nested under a single enlistment, never shared."""
    return Path(enlistment_root) / CONTROL_DIR_NAME / CACHE_DIR_NAME


def shared_cache_root(enlistment_root_base: PathLike) -> Path:
    """Cache root shared by all enlistments created under ``enlistment_root_base``."""
    return Path(enlistment_root_base) / ".." / CACHE_DIR_NAME


def resolve_cache_root(
    enlistment_root: PathLike,
    explicit_root: Optional[PathLike],
    shared_cache_disabled: bool,
    enlistment_root_base: PathLike,
) -> Path:
    """
    Choose the local cache root for an enlistment.

    Args:
        enlistment_root: Root of the enlistment the cache is for
        explicit_root: Caller-provided cache root; used verbatim when given
        shared_cache_disabled: Use a per-enlistment cache instead of the shared one
        enlistment_root_base: Directory all enlistments of the run live under

    Returns:
        Path to the cache root
    """
    if explicit_root is not None:
        return Path(explicit_root)

    if shared_cache_disabled:
        return repo_specific_cache_root(enlistment_root)

    return shared_cache_root(enlistment_root_base)


class PathTopology:
    """Unique enlistment roots and cache roots for one harness configuration."""

    def __init__(self, config: HarnessConfig):
        self.config = config

    @property
    def enlistment_root_base(self) -> Path:
        return self.config.enlistment_root

    def unique_enlistment_root(self) -> Path:
        return self.enlistment_root_base / new_enlistment_id(ENLISTMENT_ID_LENGTH)

    def unique_enlistment_root_with_spaces(self) -> Path:
        # The space exercises argument quoting in the product under test.
        name = SPACED_ENLISTMENT_PREFIX + new_enlistment_id(SPACED_ENLISTMENT_ID_LENGTH)
        return self.enlistment_root_base / name

    def repo_specific_cache_root(self, enlistment_root: PathLike) -> Path:
        return repo_specific_cache_root(enlistment_root)

    def shared_cache_root(self) -> Path:
        return shared_cache_root(self.enlistment_root_base)

    def resolve_cache_root(
        self,
        enlistment_root: PathLike,
        explicit_root: Optional[PathLike] = None,
        shared_cache_disabled: Optional[bool] = None,
    ) -> Path:
        """
        Resolve the cache root for ``enlistment_root``.

        ``shared_cache_disabled`` defaults to the configured ``no_shared_cache``.
        """
        if shared_cache_disabled is None:
            shared_cache_disabled = self.config.no_shared_cache
        return resolve_cache_root(
            enlistment_root,
            explicit_root,
            shared_cache_disabled,
            self.enlistment_root_base,
        )
