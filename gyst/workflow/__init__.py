"""Interactive commit workflows for gyst.

This package provides:
- states: WorkflowState, TRANSITIONS, WorkflowResult and exit codes
- commit: CommitWorkflow (single message, optional quick mode)
- suggest: SuggestionWorkflow (pick one of several messages)
- editor: find_editor, edit_message
- ui: TerminalUI
"""

from gyst.workflow.states import (
    EXIT_FAILED,
    EXIT_INTERRUPTED,
    EXIT_OK,
    CANCELLABLE_STATES,
    TERMINAL_STATES,
    TRANSITIONS,
    InvalidTransitionError,
    UserAborted,
    WorkflowResult,
    WorkflowState,
)
from gyst.workflow.editor import EditorError, edit_message, find_editor
from gyst.workflow.ui import TerminalUI
from gyst.workflow.commit import CommitWorkflow
from gyst.workflow.suggest import DEFAULT_SUGGESTION_COUNT, SuggestionWorkflow


__all__ = [
    # States
    "WorkflowState",
    "TRANSITIONS",
    "TERMINAL_STATES",
    "CANCELLABLE_STATES",
    "WorkflowResult",
    "InvalidTransitionError",
    "UserAborted",
    "EXIT_OK",
    "EXIT_FAILED",
    "EXIT_INTERRUPTED",
    # Editor
    "EditorError",
    "find_editor",
    "edit_message",
    # UI
    "TerminalUI",
    # Workflows
    "CommitWorkflow",
    "SuggestionWorkflow",
    "DEFAULT_SUGGESTION_COUNT",
]
