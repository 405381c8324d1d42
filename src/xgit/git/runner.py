"""Run external commands with an explicit working directory."""

import subprocess
import sys
from pathlib import Path


class ProcessError(RuntimeError):
    """An external command exited non-zero."""

    def __init__(self, args: list[str], returncode: int, stdout: str = "", stderr: str = ""):
        self.command = list(args)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        detail = stderr.strip() or stdout.strip() or f"exit status {returncode}"
        super().__init__(f"`{' '.join(self.command)}` failed: {detail}")


def run_command(
    args: list[str],
    cwd: Path | str,
    check: bool = True,
    verbose: bool = False,
) -> subprocess.CompletedProcess:
    """Run a command and capture stdout/stderr as text.

    Args:
        args: Argument vector, program first.
        cwd: Working directory for the command. Never inherited implicitly.
        check: Raise ProcessError on a non-zero exit status.
        verbose: Echo the command to stderr before running it.

    Returns:
        The CompletedProcess (stdout, stderr, returncode).
    """
    if verbose:
        print(f"+ {' '.join(args)}", file=sys.stderr)
    result = subprocess.run(
        args,
        cwd=cwd,
        capture_output=True,
        text=True,
    )
    if check and result.returncode != 0:
        raise ProcessError(args, result.returncode, result.stdout, result.stderr)
    return result


def run_git(
    args: list[str],
    cwd: Path | str,
    check: bool = True,
    verbose: bool = False,
) -> subprocess.CompletedProcess:
    """Run a git command and return the result."""
    return run_command(["git"] + args, cwd, check=check, verbose=verbose)
