"""Multi-candidate variant of the commit workflow."""

from typing import Optional

from gyst.models import Task
from gyst.workflow.commit import CommitWorkflow
from gyst.workflow.states import WorkflowState

DEFAULT_SUGGESTION_COUNT = 3


class SuggestionWorkflow(CommitWorkflow):
    """Generate several candidates and commit the one the user picks.

    Shares every state with CommitWorkflow except PRESENTING, which shows a
    numbered list instead of a single message. Quick mode does not apply.
    """

    def __init__(self, *args, count: int = DEFAULT_SUGGESTION_COUNT, **kwargs):
        kwargs["quick"] = False
        super().__init__(*args, **kwargs)
        self.count = count

    def task(self) -> Task:
        return Task.suggestions(self.count)

    def _present(self) -> WorkflowState:
        candidates = self.result.candidates
        if len(candidates) < self.count:
            self.ui.info(f"Got {len(candidates)} distinct suggestion(s).")

        self.ui.show_candidates(candidates)
        index: Optional[int] = self.ui.choose_candidate(candidates)
        if index is None:
            self.ui.info("No message selected. Nothing was committed.")
            return WorkflowState.ABORTED

        self.candidate = candidates[index]
        self.final_message = self.candidate.message
        return WorkflowState.COMMITTING
