"""Git command runner and repository utilities.

Contains:
- _run_git_command: Run a git command and return its output
- get_repo_root: Get the root directory of a git repository
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional

from gyst.git.exceptions import GitError, IndexLockConflictError, RepositoryError

LOG = logging.getLogger(__name__)

_CORRUPT_INDEX_MARKERS = (
    "index file corrupt",
    "bad index file",
    "index file smaller than expected",
    "bad signature",
)


def _classify_failure(args: list[str], stderr: str) -> GitError:
    """Map git's stderr to the most specific GitError subclass."""
    message = f"Git command failed: git {' '.join(args)}\n{stderr}"
    lowered = stderr.lower()

    if "index.lock" in lowered:
        return IndexLockConflictError(
            "Another git process is using this repository (index.lock exists).\n"
            f"{stderr}"
        )
    if "not a git repository" in lowered:
        return RepositoryError("Not in a git repository. Please run this command from within a git repo.")
    if any(marker in lowered for marker in _CORRUPT_INDEX_MARKERS):
        return RepositoryError(f"The git index could not be read.\n{stderr}")
    return GitError(message)


def _run_git_command(
    args: list[str],
    cwd: Optional[Path] = None,
    input_text: Optional[str] = None,
    strip: bool = True,
) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory to run in. Defaults to the current directory.
        input_text: Optional text fed to the command's stdin.
        strip: Strip surrounding whitespace. When False only trailing
            newlines are removed, so diff context lines survive intact.

    Returns:
        The stdout of the git command.

    Raises:
        GitError: If the command fails. Index-lock conflicts and missing or
            corrupt repositories raise the matching subclasses.
    """
    LOG.debug("running: git %s", " ".join(args))
    try:
        result = subprocess.run(
            ["git"] + args,
            cwd=cwd,
            input=input_text,
            capture_output=True,
            text=True,
            check=True,
        )
        if strip:
            return result.stdout.strip()
        return result.stdout.rstrip("\n")
    except subprocess.CalledProcessError as e:
        raise _classify_failure(args, (e.stderr or "").strip())
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")


def get_repo_root(path: Optional[Path] = None) -> Path:
    """Get the root directory of the git repository containing path.

    Args:
        path: Directory to start from. Defaults to the current directory.

    Returns:
        Path to the repository root.

    Raises:
        RepositoryError: If not in a git repository.
    """
    try:
        root = _run_git_command(["rev-parse", "--show-toplevel"], cwd=path)
    except RepositoryError:
        raise
    except GitError:
        raise RepositoryError("Not in a git repository. Please run this command from within a git repo.")
    return Path(root)
