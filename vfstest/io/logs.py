"""Emission of the product's own logs for postmortem diagnosis."""

import logging
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


def collect_log_files(logs_root: Path) -> List[Path]:
    """Return all regular files below ``logs_root``, sorted by path."""
    logs_root = Path(logs_root)
    if not logs_root.is_dir():
        return []
    return sorted(path for path in logs_root.rglob("*") if path.is_file())


def emit_logs(logs_root: Path) -> int:
    """
    Write every product log file below ``logs_root`` to the harness log.

    Unreadable files are reported and skipped, since this runs while another
    failure is being handled.

    Args:
        logs_root: The enlistment's product log directory

    Returns:
        Number of log files emitted
    """
    files = collect_log_files(logs_root)
    if not files:
        logger.info(f"No product logs found in {logs_root}")
        return 0

    emitted = 0
    for path in files:
        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.warning(f"Could not read product log {path}: {e}")
            continue
        logger.info(f"----- {path} -----\n{content}")
        emitted += 1
    return emitted
