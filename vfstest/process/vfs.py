"""
Command-line surface of the virtual filesystem product.

Every operation runs the product synchronously against one enlistment root
and returns its combined text output. Arguments are passed as a list, so
roots containing spaces need no quoting.
"""

import logging
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple, Union

from vfstest.exceptions import VFSCommandError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    command: List[str]
    returncode: int
    output: str

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


class VFSProcess:
    """Runs product verbs for a single enlistment."""

    def __init__(
        self,
        vfs_path: Union[str, Sequence[str]],
        enlistment_root: Path,
        local_cache_root: Path,
    ):
        """
        Args:
            vfs_path: Product executable. A string is split with shlex, so it
                may carry an interpreter prefix (``"python fake_vfs.py"``).
            enlistment_root: Enlistment the verbs act on
            local_cache_root: Object cache passed to clone
        """
        if isinstance(vfs_path, str):
            self.executable = shlex.split(vfs_path)
        else:
            self.executable = list(vfs_path)
        self.enlistment_root = Path(enlistment_root)
        self.local_cache_root = Path(local_cache_root)

    def run(self, args: Sequence[str], fail_on_error: bool = True) -> CommandResult:
        """
        Run the product with ``args``.

        Args:
            args: Arguments following the executable
            fail_on_error: Raise on a non-zero exit code

        Returns:
            The captured result

        Raises:
            VFSCommandError: If the product fails and ``fail_on_error`` is set
        """
        command = self.executable + [str(arg) for arg in args]
        logger.debug(f"Running {' '.join(shlex.quote(part) for part in command)}")

        proc = subprocess.run(
            command,
            capture_output=True,
            text=True,
            check=False,
        )
        output = "".join(filter(None, [proc.stdout, proc.stderr]))
        result = CommandResult(command=command, returncode=proc.returncode, output=output)

        if not result.succeeded:
            logger.debug(f"{args[0]} exited with {proc.returncode}:\n{output}")
            if fail_on_error:
                raise VFSCommandError(result)
        return result

    def clone(self, repo_url: str, commitish: str) -> str:
        return self.run(
            [
                "clone",
                repo_url,
                self.enlistment_root,
                "--branch",
                commitish,
                "--local-cache-path",
                self.local_cache_root,
                "--no-mount",
                "--no-prefetch",
            ]
        ).output

    def mount(self) -> str:
        return self.run(["mount", self.enlistment_root]).output

    def try_mount(self) -> Tuple[bool, str]:
        result = self.run(["mount", self.enlistment_root], fail_on_error=False)
        return result.succeeded, result.output

    def unmount(self) -> str:
        return self.run(["unmount", self.enlistment_root]).output

    def status(self) -> str:
        return self.run(["status", self.enlistment_root], fail_on_error=False).output

    def prefetch(self, args: str, fail_on_error: bool = True) -> str:
        return self.run(
            ["prefetch", self.enlistment_root] + shlex.split(args),
            fail_on_error=fail_on_error,
        ).output

    def repair(self) -> str:
        return self.run(
            ["repair", self.enlistment_root, "--confirm"], fail_on_error=False
        ).output

    def diagnose(self) -> str:
        return self.run(["diagnose", self.enlistment_root], fail_on_error=False).output

    def cache_server(self, args: str) -> str:
        return self.run(
            ["cache-server", self.enlistment_root] + shlex.split(args),
            fail_on_error=False,
        ).output
