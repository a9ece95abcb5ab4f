"""The commit workflow: collect, generate, present, edit, commit.

Each state has one handler that returns the next state. Every move is
checked against TRANSITIONS, and only the COMMITTING handler mutates the
repository's history.
"""

import logging
import signal
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Optional

from gyst.config import BackendConfig
from gyst.git import (
    GitError,
    IndexLockConflictError,
    NoStagedChangesError,
    collect,
    create_commit,
    get_repo_root,
    has_unstaged_changes,
    push_current_branch,
    stage_tracked_changes,
)
from gyst.llm import BaseProvider, LLMError, generate_candidates, get_provider
from gyst.models import (
    Candidate,
    ChangeSet,
    DecisionKind,
    DiffText,
    GenerationRequest,
    GenerationResult,
    Task,
)
from gyst.workflow.editor import EditorError, edit_message
from gyst.workflow.states import (
    CANCELLABLE_STATES,
    TERMINAL_STATES,
    TRANSITIONS,
    InvalidTransitionError,
    UserAborted,
    WorkflowResult,
    WorkflowState,
)
from gyst.workflow.ui import TerminalUI

LOG = logging.getLogger(__name__)


@contextmanager
def deferred_interrupts():
    """Hold back SIGINT until the block finishes.

    Yields a list that receives the signal number if an interrupt arrived.
    Outside the main thread signal handlers cannot be installed, so the
    block runs unprotected.
    """
    received: list[int] = []
    if threading.current_thread() is not threading.main_thread():
        yield received
        return

    previous = signal.signal(signal.SIGINT, lambda signum, frame: received.append(signum))
    try:
        yield received
    finally:
        signal.signal(signal.SIGINT, previous)


class CommitWorkflow:
    """Single-message commit workflow.

    Args:
        config: Resolved backend configuration.
        ui: Terminal interaction; defaults to TerminalUI.
        provider: Backend to use; resolved from config when omitted.
        repo_root: Directory inside the repository; defaults to cwd.
        quick: Commit the first candidate without asking.
        push: Push after a successful commit.
        editor_fn: Replaces edit_message(initial, editor) for editing.
    """

    def __init__(
        self,
        config: BackendConfig,
        ui: Optional[TerminalUI] = None,
        provider: Optional[BaseProvider] = None,
        repo_root: Optional[Path] = None,
        quick: bool = False,
        push: bool = False,
        editor_fn: Optional[Callable[[str, Optional[str]], str]] = None,
    ):
        self.config = config
        self.ui = ui or TerminalUI()
        self.provider = provider
        self.repo_root = repo_root
        self.quick = quick
        self.push = push
        self.editor_fn = editor_fn or edit_message

        self.state = WorkflowState.COLLECTING
        self.history = [self.state]
        self.changes = ChangeSet()
        self.diff = DiffText()
        self.result: Optional[GenerationResult] = None
        self.candidate: Optional[Candidate] = None
        self.pending_edit: Optional[str] = None
        self.final_message: Optional[str] = None
        self.commit_sha: Optional[str] = None
        self.error: Optional[Exception] = None
        self.push_error: Optional[Exception] = None
        self.interrupted = False

    def task(self) -> Task:
        return Task.commit_message()

    def run(self) -> WorkflowResult:
        """Drive the workflow until it reaches a terminal state."""
        handlers = {
            WorkflowState.COLLECTING: self._collect,
            WorkflowState.GENERATING: self._generate,
            WorkflowState.PRESENTING: self._present,
            WorkflowState.EDITING: self._edit,
            WorkflowState.COMMITTING: self._commit,
        }

        try:
            while self.state not in TERMINAL_STATES:
                self._transition(handlers[self.state]())
        except (KeyboardInterrupt, UserAborted):
            if self.state not in CANCELLABLE_STATES:
                raise
            # Nothing has been written before COMMITTING
            self.interrupted = True
            self.ui.info("\nInterrupted. No commit was made.")
            self._transition(WorkflowState.ABORTED)

        return WorkflowResult(
            state=self.state,
            message=self.final_message if self.state == WorkflowState.COMMITTED else None,
            commit_sha=self.commit_sha,
            error=self.error,
            push_error=self.push_error,
            interrupted=self.interrupted,
            history=list(self.history),
        )

    def _transition(self, target: WorkflowState) -> None:
        if target not in TRANSITIONS[self.state]:
            raise InvalidTransitionError(f"{self.state.value} -> {target.value}")
        LOG.debug("workflow: %s -> %s", self.state.value, target.value)
        self.state = target
        self.history.append(target)

    def _fail(self, error: Exception) -> WorkflowState:
        self.error = error
        return WorkflowState.FAILED

    def _collect(self) -> WorkflowState:
        try:
            self.repo_root = get_repo_root(self.repo_root)
            # Backend misconfiguration is reported before anything else happens
            if self.provider is None:
                self.provider = get_provider(self.config)
        except (GitError, LLMError) as e:
            return self._fail(e)

        try:
            self.changes, self.diff = self._collect_changes()
            return WorkflowState.GENERATING
        except NoStagedChangesError:
            pass
        except GitError as e:
            return self._fail(e)

        try:
            if not has_unstaged_changes(self.repo_root):
                self.ui.info("Nothing to commit. Stage your changes first with: git add <files>")
                return WorkflowState.ABORTED
            if not self.ui.confirm_stage_all():
                self.ui.info("No changes staged. Nothing was committed.")
                return WorkflowState.ABORTED
            stage_tracked_changes(self.repo_root)
            self.changes, self.diff = self._collect_changes()
        except GitError as e:
            return self._fail(e)
        return WorkflowState.GENERATING

    def _collect_changes(self) -> tuple[ChangeSet, DiffText]:
        return collect(
            self.repo_root,
            max_diff_size=self.config.max_diff_size,
            rename_threshold=self.config.rename_threshold,
        )

    def _generate(self) -> WorkflowState:
        self.ui.info(f"Staged: {self.changes.stats.describe()}")
        if self.diff.truncated:
            self.ui.warn(
                f"Diff truncated to {self.diff.content_lines} of {self.diff.total_lines} lines; "
                "the message may not cover every change."
            )
        self.ui.info(f"Generating commit message ({self.provider.name})...")

        request = GenerationRequest(changes=self.changes, diff=self.diff, task=self.task())
        try:
            self.result = generate_candidates(
                request, self.provider, self.config.max_subject_length
            )
        except LLMError as e:
            return self._fail(e)

        for candidate in self.result.candidates:
            for issue in candidate.issues:
                LOG.info("normalized candidate: %s", issue)
        self.candidate = self.result.first
        return WorkflowState.PRESENTING

    def _present(self) -> WorkflowState:
        if self.quick:
            self.final_message = self.candidate.message
            return WorkflowState.COMMITTING

        self.ui.show_candidate(self.candidate)
        decision = self.ui.ask_decision()

        if decision.kind == DecisionKind.ACCEPT:
            self.final_message = self.candidate.message
            return WorkflowState.COMMITTING
        if decision.kind == DecisionKind.EDIT:
            self.pending_edit = decision.text
            return WorkflowState.EDITING

        self.ui.info("Commit cancelled.")
        return WorkflowState.ABORTED

    def _edit(self) -> WorkflowState:
        text, self.pending_edit = self.pending_edit, None
        if text is None:
            try:
                text = self.editor_fn(self.candidate.message, self.config.editor)
            except EditorError as e:
                self.ui.warn(str(e))
                return WorkflowState.PRESENTING

        text = text.strip()
        if not text:
            self.ui.warn("Edited message is empty.")
            return WorkflowState.PRESENTING

        self.final_message = text
        return WorkflowState.COMMITTING

    def _commit(self) -> WorkflowState:
        with deferred_interrupts() as received:
            try:
                self.commit_sha = create_commit(self.final_message, self.repo_root)
            except IndexLockConflictError as e:
                self.ui.warn("Another git process is running. Wait for it to finish and retry.")
                return self._fail(e)
            except GitError as e:
                return self._fail(e)
        if received:
            LOG.info("interrupt received during commit; commit completed")

        self.ui.show_committed(self.commit_sha, self.final_message)

        if self.push:
            self.ui.info("Pushing...")
            try:
                push_current_branch(self.repo_root)
                self.ui.info("Pushed.")
            except GitError as e:
                self.push_error = e
                self.ui.warn(f"Commit created but push failed: {e}")
            except KeyboardInterrupt:
                self.push_error = GitError("push interrupted")
                self.ui.warn(f"Commit {self.commit_sha} created but push was interrupted.")

        return WorkflowState.COMMITTED
