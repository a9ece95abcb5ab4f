"""Git-related exception classes.

Contains all exception classes for Git operations:
- GitError: Base exception for git-related errors
- RepositoryError: Not a repository, or the index cannot be read
- NoStagedChangesError: Raised when there are no staged changes
- IndexLockConflictError: Another git process holds the index lock
"""


class GitError(Exception):
    """Custom exception for git-related errors."""

    pass


class RepositoryError(GitError):
    """Raised when the path is not a git repository or its index is unreadable."""

    pass


class NoStagedChangesError(GitError):
    """Raised when there are no staged changes."""

    pass


class IndexLockConflictError(GitError):
    """Raised when index.lock exists, i.e. another git process is committing."""

    pass
