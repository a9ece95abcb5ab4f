"""Data models shared by the generation pipeline.

Contains Pydantic models for:
- ChangeSet / DiffStats: categorized staged paths with statistics
- DiffText: the bounded staged diff
- Task / GenerationRequest: what the AI is asked to do
- Candidate / GenerationResult: normalized AI output
- CommitDecision: the user's answer to a presented candidate
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


TRUNCATION_MARKER_PREFIX = "... [diff truncated:"


class DiffStats(BaseModel):
    """Summary numbers for the staged diff."""

    model_config = ConfigDict(frozen=True)

    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0

    def describe(self) -> str:
        """Render stats the way `git diff --shortstat` does."""
        files = "file" if self.files_changed == 1 else "files"
        ins = "insertion(+)" if self.insertions == 1 else "insertions(+)"
        dels = "deletion(-)" if self.deletions == 1 else "deletions(-)"
        return (
            f"{self.files_changed} {files}, {self.insertions} {ins}, "
            f"{self.deletions} {dels}"
        )


class ChangeSet(BaseModel):
    """Categorized summary of staged paths.

    A path appears in exactly one of added, modified, deleted or as the old
    side of a rename.
    """

    model_config = ConfigDict(frozen=True)

    added: frozenset[str] = frozenset()
    modified: frozenset[str] = frozenset()
    deleted: frozenset[str] = frozenset()
    renamed: frozenset[tuple[str, str]] = frozenset()
    stats: DiffStats = Field(default_factory=DiffStats)

    @model_validator(mode="after")
    def paths_are_disjoint(self) -> "ChangeSet":
        """Reject a path that shows up in more than one category."""
        seen: set[str] = set()
        groups = [self.added, self.modified, self.deleted, {old for old, _ in self.renamed}]
        for group in groups:
            overlap = seen & group
            if overlap:
                raise ValueError(f"Path listed in more than one category: {sorted(overlap)[0]}")
            seen |= group
        return self

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.modified or self.deleted or self.renamed)

    def to_payload(self) -> dict:
        """Serialize to the relay's JSON shape with a stable ordering."""
        return {
            "added": sorted(self.added),
            "modified": sorted(self.modified),
            "deleted": sorted(self.deleted),
            "renamed": [[old, new] for old, new in sorted(self.renamed)],
            "stats": {
                "files_changed": self.stats.files_changed,
                "insertions": self.stats.insertions,
                "deletions": self.stats.deletions,
            },
        }


class DiffText(BaseModel):
    """Unified diff text bounded to a maximum number of lines."""

    model_config = ConfigDict(frozen=True)

    text: str = ""
    truncated: bool = False
    total_lines: int = 0

    @classmethod
    def bounded(cls, raw: str, max_lines: int) -> "DiffText":
        """Build a DiffText, cutting to max_lines plus a truncation marker.

        Args:
            raw: The full unified diff.
            max_lines: Maximum number of diff lines to keep.

        Returns:
            A DiffText whose ``truncated`` flag is set whenever lines were dropped.
        """
        lines = raw.splitlines()
        total = len(lines)
        if total <= max_lines:
            return cls(text="\n".join(lines), truncated=False, total_lines=total)

        marker = (
            f"{TRUNCATION_MARKER_PREFIX} showing {max_lines} of {total} lines, "
            f"{total - max_lines} omitted]"
        )
        return cls(
            text="\n".join(lines[:max_lines] + [marker]),
            truncated=True,
            total_lines=total,
        )

    @property
    def content_lines(self) -> int:
        """Number of diff lines kept, not counting the marker."""
        count = len(self.text.splitlines())
        return count - 1 if self.truncated else count


class TaskKind(Enum):
    """What the AI backend is asked to produce."""

    COMMIT_MESSAGE = "commit_message"
    SUGGESTIONS = "suggestions"
    COMMAND_EXPLAIN = "command_explain"


class Task(BaseModel):
    """A task kind with its parameters."""

    model_config = ConfigDict(frozen=True)

    kind: TaskKind
    count: int = Field(default=1, ge=1, le=10)
    description: Optional[str] = None

    @classmethod
    def commit_message(cls) -> "Task":
        return cls(kind=TaskKind.COMMIT_MESSAGE)

    @classmethod
    def suggestions(cls, count: int) -> "Task":
        return cls(kind=TaskKind.SUGGESTIONS, count=count)

    @classmethod
    def command_explain(cls, description: str) -> "Task":
        return cls(kind=TaskKind.COMMAND_EXPLAIN, description=description)


class GenerationRequest(BaseModel):
    """Everything needed to build a prompt for one invocation."""

    model_config = ConfigDict(frozen=True)

    changes: ChangeSet = Field(default_factory=ChangeSet)
    diff: DiffText = Field(default_factory=DiffText)
    task: Task


class Candidate(BaseModel):
    """A single normalized commit message."""

    model_config = ConfigDict(frozen=True)

    message: str
    backend: str
    truncated: bool = False
    issues: tuple[str, ...] = ()

    @property
    def subject(self) -> str:
        return self.message.split("\n", 1)[0]


class GenerationResult(BaseModel):
    """Ordered, deduplicated candidates from one generation call."""

    model_config = ConfigDict(frozen=True)

    candidates: tuple[Candidate, ...] = ()

    @property
    def first(self) -> Candidate:
        return self.candidates[0]


class DecisionKind(Enum):
    """User answers to a presented candidate."""

    ACCEPT = "accept"
    EDIT = "edit"
    REJECT = "reject"


class CommitDecision(BaseModel):
    """Accept, Reject, or Edit(text)."""

    model_config = ConfigDict(frozen=True)

    kind: DecisionKind
    text: Optional[str] = None

    @classmethod
    def accept(cls) -> "CommitDecision":
        return cls(kind=DecisionKind.ACCEPT)

    @classmethod
    def reject(cls) -> "CommitDecision":
        return cls(kind=DecisionKind.REJECT)

    @classmethod
    def edit(cls, text: Optional[str] = None) -> "CommitDecision":
        return cls(kind=DecisionKind.EDIT, text=text)
