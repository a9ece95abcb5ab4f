"""Git access for gyst.

This package provides:
- exceptions: GitError, RepositoryError, NoStagedChangesError, IndexLockConflictError
- runner: _run_git_command, get_repo_root
- status: parse_name_status, has_staged_changes, stage_tracked_changes
- diff: get_staged_diff, parse_numstat
- collector: collect
- commit: create_commit, push_current_branch
"""

from gyst.git.exceptions import (
    GitError,
    IndexLockConflictError,
    NoStagedChangesError,
    RepositoryError,
)
from gyst.git.runner import (
    _run_git_command,
    get_repo_root,
)
from gyst.git.status import (
    get_staged_name_status,
    has_staged_changes,
    has_unstaged_changes,
    parse_name_status,
    stage_tracked_changes,
)
from gyst.git.diff import (
    get_staged_diff,
    get_staged_numstat,
    parse_numstat,
)
from gyst.git.collector import collect
from gyst.git.commit import create_commit, push_current_branch


__all__ = [
    # Exceptions
    "GitError",
    "RepositoryError",
    "NoStagedChangesError",
    "IndexLockConflictError",
    # Runner
    "_run_git_command",
    "get_repo_root",
    # Status
    "get_staged_name_status",
    "parse_name_status",
    "has_staged_changes",
    "has_unstaged_changes",
    "stage_tracked_changes",
    # Diff
    "get_staged_diff",
    "get_staged_numstat",
    "parse_numstat",
    # Collector
    "collect",
    # Commit
    "create_commit",
    "push_current_branch",
]
