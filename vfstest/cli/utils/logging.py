import logging
import sys
from pathlib import Path
from typing import Optional


logger = logging.getLogger("vfstest")


def configure_logging(debug: bool, log_file: Optional[Path] = None):
    """
    Configures the harness logger for command line use.

    Messages go to stdout undecorated. With ``log_file``, a timestamped
    copy is appended to that file as well, so product logs emitted on
    failure survive the terminal session.
    """
    log_level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(log_level)

    if not logger.hasHandlers():
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    if log_file is not None:
        log_file = Path(log_file)
        if not any(
            isinstance(h, logging.FileHandler)
            and Path(h.baseFilename) == log_file.absolute()
            for h in logger.handlers
        ):
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
            )
            logger.addHandler(file_handler)
