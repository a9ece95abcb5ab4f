"""Git status utilities.

Contains:
- get_staged_name_status: Raw NUL-separated name-status of the index vs HEAD
- parse_name_status: Categorize name-status output into path groups
- has_staged_changes / has_unstaged_changes: Quick state checks
- stage_tracked_changes: Stage modifications and deletions of tracked files
"""

from pathlib import Path
from typing import Optional

from gyst.git.runner import _run_git_command


def rename_args(rename_threshold: int) -> list[str]:
    """Build the rename-detection flag for a similarity threshold.

    A threshold of 0 disables rename detection entirely.
    """
    if rename_threshold <= 0:
        return ["--no-renames"]
    return [f"-M{rename_threshold}%"]


def get_staged_name_status(repo_root: Optional[Path] = None, rename_threshold: int = 50) -> str:
    """Get `git diff --cached --name-status -z` output.

    Args:
        repo_root: Repository directory.
        rename_threshold: Similarity percentage for pairing renames.

    Returns:
        NUL-separated name-status records.
    """
    args = ["diff", "--cached", "--name-status", "-z"] + rename_args(rename_threshold)
    return _run_git_command(args, cwd=repo_root)


def parse_name_status(output: str) -> dict:
    """Categorize NUL-separated name-status output.

    Status letters: A added, M modified, T type change (treated as
    modified), D deleted, R renamed (old, new), C copied (new path counts as
    added). Renames and copies carry a similarity score and two paths.

    Args:
        output: Raw output of get_staged_name_status().

    Returns:
        Dict with "added", "modified", "deleted" (sets of paths) and
        "renamed" (set of (old, new) tuples).
    """
    groups = {"added": set(), "modified": set(), "deleted": set(), "renamed": set()}
    fields = [f for f in output.split("\0") if f]

    i = 0
    while i < len(fields):
        status = fields[i].strip()
        code = status[:1]
        if code in ("R", "C"):
            old_path, new_path = fields[i + 1], fields[i + 2]
            i += 3
            if code == "R":
                groups["renamed"].add((old_path, new_path))
            else:
                groups["added"].add(new_path)
            continue

        path = fields[i + 1]
        i += 2
        if code == "A":
            groups["added"].add(path)
        elif code == "D":
            groups["deleted"].add(path)
        elif code in ("M", "T", "U"):
            groups["modified"].add(path)

    return groups


def has_staged_changes(repo_root: Optional[Path] = None) -> bool:
    """Check whether the index differs from HEAD."""
    return bool(_run_git_command(["diff", "--cached", "--name-only"], cwd=repo_root))


def has_unstaged_changes(repo_root: Optional[Path] = None) -> bool:
    """Check whether tracked files have modifications that are not staged."""
    return bool(_run_git_command(["diff", "--name-only"], cwd=repo_root))


def stage_tracked_changes(repo_root: Optional[Path] = None) -> None:
    """Stage every modification and deletion of already-tracked files."""
    _run_git_command(["add", "--update"], cwd=repo_root)
