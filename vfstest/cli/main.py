"""vfstest CLI"""

from pathlib import Path

import click

from vfstest import __version__
from vfstest.cli.lifecycle import delete, enlist, status, wait
from vfstest.cli.paths import cache_root, object_root_cmd, root
from vfstest.cli.utils.logging import configure_logging


@click.group()
@click.version_option(__version__, prog_name="vfstest")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Harness configuration file.",
)
@click.option("--debug/--no-debug", default=False, help="Enable debug mode")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also append harness logs to this file.",
)
@click.pass_context
def cli(ctx, config_path, debug: bool, log_file):
    """
    Functional-test harness for the virtual filesystem product.
    """
    ctx.ensure_object(dict)
    ctx.obj["CONFIG_PATH"] = config_path
    configure_logging(debug, log_file)


cli.add_command(root)
cli.add_command(cache_root)
cli.add_command(object_root_cmd)
cli.add_command(enlist)
cli.add_command(status)
cli.add_command(wait)
cli.add_command(delete)

if __name__ == "__main__":
    cli(obj={})
