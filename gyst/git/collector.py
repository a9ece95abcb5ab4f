"""Staged change collection.

Contains:
- collect: Build the categorized ChangeSet and bounded DiffText for the index
"""

import logging
from pathlib import Path
from typing import Optional

from gyst.git.diff import get_staged_diff, get_staged_numstat, parse_numstat
from gyst.git.exceptions import NoStagedChangesError
from gyst.git.runner import get_repo_root
from gyst.git.status import get_staged_name_status, parse_name_status
from gyst.models import ChangeSet, DiffText

LOG = logging.getLogger(__name__)


def collect(
    repo_root: Optional[Path] = None,
    max_diff_size: int = 1000,
    rename_threshold: int = 50,
) -> tuple[ChangeSet, DiffText]:
    """Collect the staged changes of a repository.

    Args:
        repo_root: Any directory inside the repository. Defaults to the
            current directory.
        max_diff_size: Maximum number of diff lines to keep.
        rename_threshold: Similarity percentage for pairing renames; pairs
            below it are reported as a deletion plus an addition.

    Returns:
        The ChangeSet and the bounded DiffText.

    Raises:
        RepositoryError: If not in a repository or the index is unreadable.
        NoStagedChangesError: If nothing is staged.
    """
    root = get_repo_root(repo_root)

    groups = parse_name_status(get_staged_name_status(root, rename_threshold))
    if not any(groups.values()):
        raise NoStagedChangesError(
            "No staged changes found. Stage your changes first with: git add <files>"
        )

    stats = parse_numstat(get_staged_numstat(root, rename_threshold))
    changes = ChangeSet(
        added=frozenset(groups["added"]),
        modified=frozenset(groups["modified"]),
        deleted=frozenset(groups["deleted"]),
        renamed=frozenset(groups["renamed"]),
        stats=stats,
    )

    diff = get_staged_diff(max_diff_size, root, rename_threshold)
    if diff.truncated:
        LOG.info(
            "staged diff truncated to %d of %d lines", diff.content_lines, diff.total_lines
        )

    return changes, diff
