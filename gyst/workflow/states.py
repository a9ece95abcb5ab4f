"""Workflow states, the transition table and the run outcome."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class WorkflowState(Enum):
    """States of the commit workflow."""

    COLLECTING = "collecting"
    GENERATING = "generating"
    PRESENTING = "presenting"
    EDITING = "editing"
    COMMITTING = "committing"
    COMMITTED = "committed"
    ABORTED = "aborted"
    FAILED = "failed"


# Only COMMITTING may touch the repository's history
TRANSITIONS = {
    WorkflowState.COLLECTING: {WorkflowState.GENERATING, WorkflowState.ABORTED, WorkflowState.FAILED},
    WorkflowState.GENERATING: {WorkflowState.PRESENTING, WorkflowState.ABORTED, WorkflowState.FAILED},
    WorkflowState.PRESENTING: {
        WorkflowState.COMMITTING,
        WorkflowState.EDITING,
        WorkflowState.ABORTED,
        WorkflowState.FAILED,
    },
    WorkflowState.EDITING: {WorkflowState.PRESENTING, WorkflowState.COMMITTING, WorkflowState.ABORTED},
    WorkflowState.COMMITTING: {WorkflowState.COMMITTED, WorkflowState.FAILED},
    WorkflowState.COMMITTED: set(),
    WorkflowState.ABORTED: set(),
    WorkflowState.FAILED: set(),
}

TERMINAL_STATES = {WorkflowState.COMMITTED, WorkflowState.ABORTED, WorkflowState.FAILED}

# States a user interrupt may cancel
CANCELLABLE_STATES = {
    WorkflowState.COLLECTING,
    WorkflowState.GENERATING,
    WorkflowState.PRESENTING,
    WorkflowState.EDITING,
}

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INTERRUPTED = 130


class InvalidTransitionError(RuntimeError):
    """Raised when the workflow attempts a move the transition table forbids."""

    pass


class UserAborted(Exception):
    """Raised when the user cancels an interactive prompt."""

    pass


@dataclass
class WorkflowResult:
    """Outcome of one workflow run.

    Attributes:
        state: The terminal state reached.
        message: The committed message, if any.
        commit_sha: Abbreviated hash of the new commit, if any.
        error: The error that caused FAILED, if any.
        push_error: Push failure after a successful commit, if any.
        interrupted: Whether the user interrupted the run.
        history: Every state visited, in order.
    """

    state: WorkflowState
    message: Optional[str] = None
    commit_sha: Optional[str] = None
    error: Optional[Exception] = None
    push_error: Optional[Exception] = None
    interrupted: bool = False
    history: list[WorkflowState] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        if self.state == WorkflowState.FAILED:
            return EXIT_FAILED
        if self.state == WorkflowState.ABORTED and self.interrupted:
            return EXIT_INTERRUPTED
        return EXIT_OK
