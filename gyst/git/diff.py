"""Git diff utilities.

Contains:
- get_staged_diff: The staged diff bounded to a maximum number of lines
- get_staged_numstat: Insertions and deletions per staged file
- parse_numstat: Sum `--numstat` output into DiffStats
"""

from pathlib import Path
from typing import Optional

from gyst.git.runner import _run_git_command
from gyst.git.status import rename_args
from gyst.models import DiffStats, DiffText


def get_staged_diff(
    max_lines: int = 1000,
    repo_root: Optional[Path] = None,
    rename_threshold: int = 50,
) -> DiffText:
    """Get the staged diff, truncated to max_lines.

    When the diff is longer than max_lines the result keeps exactly
    max_lines lines followed by one truncation marker line and has
    ``truncated`` set.

    Args:
        max_lines: Maximum number of diff lines.
        repo_root: Repository directory.
        rename_threshold: Similarity percentage for pairing renames.

    Returns:
        The bounded DiffText.
    """
    raw = _run_git_command(
        ["diff", "--cached", "--no-color", "--no-ext-diff"] + rename_args(rename_threshold),
        cwd=repo_root,
        strip=False,
    )
    return DiffText.bounded(raw, max_lines)


def get_staged_numstat(repo_root: Optional[Path] = None, rename_threshold: int = 50) -> str:
    """Get `git diff --cached --numstat` output."""
    return _run_git_command(
        ["diff", "--cached", "--numstat"] + rename_args(rename_threshold),
        cwd=repo_root,
    )


def parse_numstat(output: str) -> DiffStats:
    """Sum numstat lines into DiffStats.

    Binary files report "-" for both counts and contribute zero lines.

    Args:
        output: Raw numstat output, one "<ins>\\t<del>\\t<path>" per line.

    Returns:
        Totals across all files.
    """
    files = insertions = deletions = 0
    for line in output.splitlines():
        parts = line.split("\t")
        if len(parts) < 3:
            continue
        files += 1
        if parts[0].isdigit():
            insertions += int(parts[0])
        if parts[1].isdigit():
            deletions += int(parts[1])

    return DiffStats(files_changed=files, insertions=insertions, deletions=deletions)
