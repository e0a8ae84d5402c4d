"""CLI commands driving enlistments through the product"""

import sys
from pathlib import Path

import click

from vfstest.cli.utils.context import get_config
from vfstest.cli.utils.logging import logger
from vfstest.constants import DEFAULT_MAX_WAIT_MS
from vfstest.enlistment import (
    Enlistment,
    clone_and_mount,
    clone_and_mount_with_per_repo_cache,
    clone_and_mount_with_spaces_in_path,
)
from vfstest.exceptions import SetupError, VFSCommandError


@click.command("enlist")
@click.option("--commitish", default=None, help="Commit-ish to clone.")
@click.option(
    "--per-repo-cache",
    is_flag=True,
    help="Use a cache nested in the enlistment instead of the shared one.",
)
@click.option(
    "--with-spaces",
    is_flag=True,
    help="Create the enlistment under a root containing a space.",
)
@click.pass_context
def enlist(ctx, commitish, per_repo_cache: bool, with_spaces: bool):
    """Clone and mount a new enlistment and print its root."""
    config = get_config(ctx)
    try:
        if with_spaces:
            enlistment = clone_and_mount_with_spaces_in_path(config, commitish)
        elif per_repo_cache:
            enlistment = clone_and_mount_with_per_repo_cache(config, commitish)
        else:
            enlistment = clone_and_mount(config, commitish)
    except SetupError as e:
        logger.error(f"{e}: {e.__cause__}")
        sys.exit(1)

    logger.debug(f"Cache root: {enlistment.local_cache_root}")
    click.echo(enlistment.root)


@click.command("status")
@click.argument("enlistment_root", type=click.Path(exists=True, path_type=Path))
@click.pass_context
def status(ctx, enlistment_root: Path):
    """Print the product status of ENLISTMENT_ROOT."""
    enlistment = Enlistment.attach(get_config(ctx), enlistment_root)
    click.echo(enlistment.status(), nl=False)


@click.command("wait")
@click.argument("enlistment_root", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--lock",
    "lock_command",
    default=None,
    help="Wait until the product lock is held by this command instead.",
)
@click.option(
    "--timeout",
    "max_wait_ms",
    type=int,
    default=DEFAULT_MAX_WAIT_MS,
    show_default=True,
    help="Maximum wait in milliseconds.",
)
@click.pass_context
def wait(ctx, enlistment_root: Path, lock_command, max_wait_ms: int):
    """Wait for background operations of ENLISTMENT_ROOT to finish.

    Exits with status 1 if the status did not converge in time.
    """
    enlistment = Enlistment.attach(get_config(ctx), enlistment_root)
    if lock_command:
        converged = enlistment.wait_for_lock(lock_command, max_wait_ms)
    else:
        converged = enlistment.wait_for_background_operations(max_wait_ms)

    if not converged:
        logger.error(f"{enlistment_root} did not converge within {max_wait_ms}ms")
        sys.exit(1)
    click.echo("converged")


@click.command("delete")
@click.argument("enlistment_root", type=click.Path(path_type=Path))
@click.option(
    "--unmount/--no-unmount",
    default=True,
    help="Unmount before deleting.",
)
@click.pass_context
def delete(ctx, enlistment_root: Path, unmount: bool):
    """Unmount and delete ENLISTMENT_ROOT.

    Exits with status 1 if the directory tree could not be removed.
    """
    enlistment = Enlistment.attach(get_config(ctx), enlistment_root)
    if unmount:
        try:
            enlistment.unmount()
        except VFSCommandError as e:
            logger.warning(f"Unmount failed, deleting anyway: {e}")

    if not enlistment.delete_enlistment():
        logger.error(f"Could not delete {enlistment_root}")
        sys.exit(1)
    click.echo(f"deleted {enlistment_root}")
