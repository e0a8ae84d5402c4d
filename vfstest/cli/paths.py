"""CLI commands for enlistment and cache path topology"""

import sys
from pathlib import Path

import click

from vfstest.cli.utils.context import get_config
from vfstest.cli.utils.logging import logger
from vfstest.enlistment import PathTopology, object_root, pack_root
from vfstest.exceptions import CacheLayoutError


@click.command("root")
@click.option(
    "--with-spaces",
    is_flag=True,
    help="Generate a root whose last segment contains a space.",
)
@click.pass_context
def root(ctx, with_spaces: bool):
    """Print a fresh, unique enlistment root."""
    topology = PathTopology(get_config(ctx))
    if with_spaces:
        click.echo(topology.unique_enlistment_root_with_spaces())
    else:
        click.echo(topology.unique_enlistment_root())


@click.command("cache-root")
@click.argument("enlistment_root", type=click.Path(path_type=Path))
@click.option(
    "--cache-root",
    "explicit_root",
    type=click.Path(path_type=Path),
    default=None,
    help="Explicit cache root; always wins.",
)
@click.option(
    "--per-repo/--shared",
    "per_repo",
    default=None,
    help="Force a per-enlistment or shared cache. Defaults to the configuration.",
)
@click.pass_context
def cache_root(ctx, enlistment_root: Path, explicit_root, per_repo):
    """Print the local cache root ENLISTMENT_ROOT would use."""
    config = get_config(ctx)
    topology = PathTopology(config)
    if explicit_root is None:
        explicit_root = config.local_cache_root
    click.echo(topology.resolve_cache_root(enlistment_root, explicit_root, per_repo))


@click.command("object-root")
@click.argument("cache_root", type=click.Path(path_type=Path))
@click.option("--pack", is_flag=True, help="Print the pack directory instead.")
def object_root_cmd(cache_root: Path, pack: bool):
    """Print the object store found under CACHE_ROOT.

    Exits with status 1 if CACHE_ROOT does not hold exactly one cache
    instance.
    """
    try:
        found = pack_root(cache_root) if pack else object_root(cache_root)
    except CacheLayoutError as e:
        logger.error(str(e))
        sys.exit(1)
    click.echo(found)
