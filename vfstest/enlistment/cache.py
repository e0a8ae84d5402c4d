"""
Discovery of the object store inside a local cache root.

The product names its cache instance directory itself, so the harness
finds it structurally. A healthy cache root holds exactly two entries, one
of which is the instance directory:

    <cache_root>/
    ├── mapping.dat                    # product bookkeeping
    └── 3f0b2c.../                     # cache instance (name not predictable)
        └── gitObjects/
            └── pack/

Any other shape is an environment or product error and aborts the test.
"""

import logging
from pathlib import Path
from typing import List, Union

from vfstest.constants import (
    CACHE_ROOT_ENTRY_COUNT,
    GIT_OBJECTS_DIR_NAME,
    PACK_DIR_NAME,
)
from vfstest.exceptions import CacheLayoutError

logger = logging.getLogger(__name__)


def _list_entries(cache_root: Path) -> List[Path]:
    if not cache_root.is_dir():
        raise CacheLayoutError(
            cache_root, [], f"Expected local cache root {cache_root} to be a directory"
        )
    return sorted(cache_root.iterdir())


def object_root(cache_root: Union[str, Path]) -> Path:
    """
    Locate the object store of the single cache instance under ``cache_root``.

    Args:
        cache_root: Local cache root of an enlistment

    Returns:
        Path to ``<instance>/gitObjects``

    Raises:
        CacheLayoutError: If the cache root does not contain exactly two
            entries, exactly one of them a directory
    """
    cache_root = Path(cache_root)
    entries = _list_entries(cache_root)

    if len(entries) != CACHE_ROOT_ENTRY_COUNT:
        raise CacheLayoutError(
            cache_root,
            entries,
            f"Expected local cache root to contain {CACHE_ROOT_ENTRY_COUNT} items",
        )

    directories = [entry for entry in entries if entry.is_dir()]
    if len(directories) != 1:
        raise CacheLayoutError(
            cache_root,
            entries,
            f"{cache_root} is expected to have only one folder. Actual: {len(directories)}",
        )

    logger.debug(f"Found cache instance {directories[0].name} in {cache_root}")
    return directories[0] / GIT_OBJECTS_DIR_NAME


def pack_root(cache_root: Union[str, Path]) -> Path:
    return object_root(cache_root) / PACK_DIR_NAME
