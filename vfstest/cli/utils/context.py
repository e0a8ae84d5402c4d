import sys

import click

from vfstest.cli.utils.logging import logger
from vfstest.config import HarnessConfig, load_config
from vfstest.exceptions import ConfigError


def get_config(ctx: click.Context) -> HarnessConfig:
    """Load the harness configuration for the running command, exiting on errors."""
    root_ctx = ctx.find_root()
    root_ctx.ensure_object(dict)
    if "CONFIG" not in root_ctx.obj:
        try:
            root_ctx.obj["CONFIG"] = load_config(root_ctx.obj.get("CONFIG_PATH"))
        except ConfigError as e:
            logger.error(f"Invalid configuration: {e}")
            sys.exit(1)
    return root_ctx.obj["CONFIG"]
