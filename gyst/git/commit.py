"""Repository mutations.

Contains:
- create_commit: Commit the index with a message
- push_current_branch: Push the current branch to its upstream
"""

from pathlib import Path
from typing import Optional

from gyst.git.runner import _run_git_command


def create_commit(message: str, repo_root: Optional[Path] = None) -> str:
    """Commit the staged changes with the given message.

    The message is passed on stdin so it is recorded verbatim.

    Args:
        message: The final commit message.
        repo_root: Repository directory.

    Returns:
        The abbreviated hash of the new commit.

    Raises:
        IndexLockConflictError: If another git process holds the index lock.
        GitError: If the commit fails for any other reason.
    """
    _run_git_command(["commit", "--file", "-", "--cleanup=whitespace"], cwd=repo_root, input_text=message)
    return _run_git_command(["rev-parse", "--short", "HEAD"], cwd=repo_root)


def push_current_branch(repo_root: Optional[Path] = None) -> str:
    """Push the current branch.

    Returns:
        Output from git push.

    Raises:
        GitError: If the push fails.
    """
    return _run_git_command(["push"], cwd=repo_root)
