"""Configuration for the harness: product location, enlistment base and cache policy"""

import configparser
import logging
import os
import platform
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

from vfstest.exceptions import ConfigError

APP_NAME = "vfstest"
SECTION = "harness"
ENV_PREFIX = "VFSTEST_"

logger = logging.getLogger(__name__)

_home = os.path.expanduser("~")

xdg_config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.join(_home, ".config")

default_cfg: Dict[str, str] = {
    "vfs_path": "gvfs",
    "enlistment_root": os.path.join(tempfile.gettempdir(), APP_NAME, "enlistment"),
    "repo_url": "https://gvfs.visualstudio.com/ci/_git/ForTests",
    "commitish": "FunctionalTests/20180214",
    "no_shared_cache": "false",
    "local_cache_root": "",
    "delete_retries": "10",
    "delete_retry_delay": "1.0",
}

if platform.system() == "Darwin":
    config_dir = Path("~/Library/Application Support/vfstest").expanduser()
else:
    config_dir = Path(os.path.join(xdg_config_home, APP_NAME))


def get_config_file() -> Path:
    return config_dir / f"{APP_NAME}.cfg"


def read_harness_section(config_path: Optional[Path] = None) -> Dict[str, str]:
    """
    Return the ``[harness]`` section of a config file as a plain dict.

    A missing file or section yields an empty dict, so a harness run works
    with no configuration file at all.

    Args:
        config_path: Config file to read. If None, uses the default path.
    """
    path = get_config_file() if config_path is None else Path(config_path)
    parser = configparser.ConfigParser(interpolation=None)
    if path.exists():
        parser.read(path)
        logger.debug(f"Read harness configuration from {path}")
    if not parser.has_section(SECTION):
        return {}
    return dict(parser[SECTION])


@dataclass(frozen=True)
class HarnessConfig:
    """
    Settings shared by every enlistment of a test run.

    An instance is passed explicitly to the path resolver and to each
    enlistment; nothing in the harness reads these values from globals.
    """

    vfs_path: str
    enlistment_root: Path
    repo_url: str
    commitish: str
    no_shared_cache: bool = False
    local_cache_root: Optional[Path] = None
    delete_retries: int = 10
    delete_retry_delay: float = 1.0


def _parse_bool(key: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered not in configparser.ConfigParser.BOOLEAN_STATES:
        raise ConfigError(key, value, "a boolean (true/false, yes/no, on/off, 1/0)")
    return configparser.ConfigParser.BOOLEAN_STATES[lowered]


def _parse_int(key: str, value: str) -> int:
    try:
        parsed = int(value)
    except ValueError:
        raise ConfigError(key, value, "an integer")
    if parsed < 0:
        raise ConfigError(key, value, "a non-negative integer")
    return parsed


def _parse_float(key: str, value: str) -> float:
    try:
        parsed = float(value)
    except ValueError:
        raise ConfigError(key, value, "a number of seconds")
    if parsed < 0:
        raise ConfigError(key, value, "a non-negative number of seconds")
    return parsed


def load_config(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> HarnessConfig:
    """
    Build a HarnessConfig from the config file and the environment.

    Precedence is environment (``VFSTEST_<KEY>``), then the ``[harness]``
    section of the config file, then the built-in defaults.

    Args:
        config_path: Config file to read. If None, uses the default path.
        environ: Environment mapping. If None, uses os.environ.

    Returns:
        The resolved, validated configuration

    Raises:
        ConfigError: If a value cannot be parsed
    """
    file_values = read_harness_section(config_path)
    env = os.environ if environ is None else environ

    values = {}
    for key, default in default_cfg.items():
        value = env.get(ENV_PREFIX + key.upper())
        if value is None:
            value = file_values.get(key, default)
        values[key] = value

    local_cache_root = values["local_cache_root"].strip()

    config = HarnessConfig(
        vfs_path=values["vfs_path"],
        enlistment_root=Path(values["enlistment_root"]).expanduser().absolute(),
        repo_url=values["repo_url"],
        commitish=values["commitish"],
        no_shared_cache=_parse_bool("no_shared_cache", values["no_shared_cache"]),
        local_cache_root=Path(local_cache_root).expanduser() if local_cache_root else None,
        delete_retries=_parse_int("delete_retries", values["delete_retries"]),
        delete_retry_delay=_parse_float(
            "delete_retry_delay", values["delete_retry_delay"]
        ),
    )
    logger.debug(f"Loaded harness configuration: {config}")
    return config
