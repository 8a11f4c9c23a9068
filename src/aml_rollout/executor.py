"""Runs Azure CLI commands as subprocesses and captures their output."""

import shlex
import subprocess
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a single command invocation."""

    args: List[str]
    success: bool
    stdout: str = ""
    stderr: str = ""
    returncode: Optional[int] = None

    @property
    def command_line(self) -> str:
        return shlex.join(self.args)


class CommandExecutor:
    """
    Runs ``az`` commands one at a time.

    Each call blocks until the process exits. A nonzero exit status, or a
    missing executable, produces an unsuccessful result instead of an
    exception.
    """

    def __init__(self, executable: str = "az", extra_args: Optional[Sequence[str]] = None):
        """
        Initialize the executor.

        Args:
            executable: Azure CLI executable name or path
            extra_args: Arguments appended to every command (e.g. ``--subscription``)
        """
        self.executable = executable
        self.extra_args = list(extra_args or [])

    def build(self, args: Sequence[str]) -> List[str]:
        """Return the full argument list for an ``az`` subcommand."""
        return [self.executable, *args, *self.extra_args]

    def run(self, args: Sequence[str]) -> CommandResult:
        """
        Run an ``az`` subcommand.

        Args:
            args: Subcommand arguments without the executable, e.g.
                ``["group", "show", "--name", "rg"]``

        Returns:
            CommandResult with captured stdout and stderr
        """
        cmd = self.build(args)
        logger.debug("Running command", command=shlex.join(cmd))

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=True)
            return CommandResult(
                args=cmd,
                success=True,
                stdout=result.stdout or "",
                stderr=result.stderr or "",
                returncode=result.returncode,
            )
        except subprocess.CalledProcessError as e:
            return CommandResult(
                args=cmd,
                success=False,
                stdout=e.stdout or "",
                stderr=e.stderr or "",
                returncode=e.returncode,
            )
        except OSError as e:
            # az not installed or not executable
            return CommandResult(args=cmd, success=False, stderr=str(e))


class DryRunExecutor(CommandExecutor):
    """Executor that logs commands and reports success without running them."""

    def run(self, args: Sequence[str]) -> CommandResult:
        cmd = self.build(args)
        logger.info("Dry run, command not executed", command=shlex.join(cmd))
        return CommandResult(args=cmd, success=True, returncode=0)
