"""Shell, git and console utilities.

Provides simple wrappers around subprocess calls for running shell commands
and git operations, plus the output helpers used for logging. Warnings and
errors are printed as GitHub Actions workflow commands so they show up as
annotations on the run.
"""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Mapping
from pathlib import Path


def git(*args: str, cwd: str | Path | None = None, check: bool = True) -> str:
    """Run a git command and return stdout.

    Args:
        *args: Arguments to pass to git (e.g., "status", "--porcelain").
        cwd: Directory to run in. Defaults to the current directory.
        check: If True (default), raise on non-zero exit.

    Returns:
        Stripped stdout from the git command.
    """
    result = subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=check
    )
    return result.stdout.strip()


def run(
    command: str,
    *,
    cwd: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    check: bool = True,
) -> subprocess.CompletedProcess[bytes]:
    """Run a user-supplied command line through the shell.

    Output is not captured - it streams directly to the job log.

    Args:
        command: Command line, interpreted by the shell.
        cwd: Directory to run in.
        env: Extra variables layered over the inherited environment.
        check: If True (default), raise on non-zero exit.

    Returns:
        CompletedProcess with returncode for checking success.
    """
    full_env = {**os.environ, **env} if env else None
    return subprocess.run(command, shell=True, cwd=cwd, env=full_env, check=check)


def step(msg: str) -> None:
    """Print a visually distinct step header."""
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")


def info(msg: str) -> None:
    print(f"  {msg}")


def warning(msg: str) -> None:
    """Print a warning annotation. The run continues."""
    print(f"::warning::{msg}")


def fatal(msg: str) -> None:
    """Print an error annotation and exit with code 1.

    Use for unrecoverable errors that should fail the workflow step.
    Multi-line messages are escaped so the runner keeps them in one annotation.
    """
    escaped = msg.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
    print(f"::error::{escaped}", file=sys.stderr)
    sys.exit(1)
