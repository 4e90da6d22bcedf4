"""
Git utilities for initializing the generated project's repository.

Every command is best-effort: failures are logged and never abort
project creation.
"""

import subprocess
from pathlib import Path
from typing import List

from go_scaffold.wizard.exceptions import VCSError
from go_scaffold.wizard.logging_config import get_logger


logger = get_logger("git")

GIT_TIMEOUT = 60


def is_git_available() -> bool:
    """Check if git is available on the system.

    Returns:
        True if git command is available
    """
    try:
        result = subprocess.run(
            ["git", "--version"],
            capture_output=True,
            text=True,
            timeout=5
        )
        return result.returncode == 0
    except (subprocess.TimeoutExpired, FileNotFoundError, OSError):
        return False


def _run_git(args: List[str], cwd: Path):
    """Run one git command inside `cwd`.

    Raises:
        VCSError: If the command cannot be run or exits non-zero
    """
    command = ["git"] + args
    try:
        result = subprocess.run(
            command,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=GIT_TIMEOUT
        )
    except (subprocess.TimeoutExpired, FileNotFoundError, OSError) as e:
        raise VCSError(f"Could not run {' '.join(command)}", command=" ".join(command), details=str(e))

    if result.returncode != 0:
        raise VCSError(
            f"{' '.join(command)} exited with status {result.returncode}",
            command=" ".join(command),
            details=result.stderr.strip() or None
        )


def init_repository(
    project_dir: Path,
    author_name: str,
    author_email: str,
    commit_message: str
) -> bool:
    """Create a repository with one initial commit of every file.

    Args:
        project_dir: Directory to initialize
        author_name: Local user.name for the new repository
        author_email: Local user.email for the new repository
        commit_message: Message of the initial commit

    Returns:
        True if every command succeeded
    """
    try:
        _run_git(["init"], project_dir)
    except VCSError as e:
        logger.warning("Skipping git setup: %s", e.message)
        if e.details:
            logger.debug(e.details)
        return False

    commands = [
        ["config", "user.email", author_email],
        ["config", "user.name", author_name],
        ["add", "."],
        ["commit", "-m", commit_message],
    ]

    ok = True
    for args in commands:
        try:
            _run_git(args, project_dir)
        except VCSError as e:
            ok = False
            logger.warning("git step failed: %s", e.message)
            if e.details:
                logger.debug(e.details)

    return ok
