"""Provider-agnostic prompt construction.

build_prompt is a pure function: identical inputs always produce an
identical Prompt, so either backend can be swapped in without changing
what the model is asked.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from gyst.constants import ALTERNATIVES_DELIMITER, CONVENTIONAL_TYPES
from gyst.llm.prompts.commit import (
    ALTERNATIVES_INSTRUCTION,
    CHANGES_HEADER,
    DIFF_HEADER,
    SINGLE_MESSAGE_INSTRUCTION,
    TRUNCATION_CAVEAT,
)
from gyst.llm.prompts.system import COMMAND_SYSTEM_PROMPT, COMMIT_SYSTEM_PROMPT
from gyst.models import ChangeSet, DiffText, Task, TaskKind

# Relay endpoints per task kind
RELAY_COMMIT_ENDPOINT = "/api/commit"
RELAY_SUGGESTIONS_ENDPOINT = "/api/commit/suggestions"
RELAY_COMMAND_ENDPOINT = "/api/command"

COMMIT_MAX_TOKENS = 200
COMMAND_MAX_TOKENS = 500


class Prompt(BaseModel):
    """A request payload both backends can send.

    Attributes:
        task: The task this prompt was built for.
        system: System prompt for the direct backend.
        user: User message for the direct backend.
        max_tokens: Output budget for the direct backend.
        temperature: Sampling temperature for the direct backend.
        delimiter: Separator between alternatives, when several are requested.
        relay_endpoint: Relay path for this task.
        relay_body: JSON body for the relay.
    """

    model_config = ConfigDict(frozen=True)

    task: Task
    system: str
    user: str
    max_tokens: int
    temperature: float
    delimiter: Optional[str] = None
    relay_endpoint: str
    relay_body: dict


def format_changes(changes: ChangeSet) -> str:
    """Render the categorized file list."""
    sections = [f"Summary: {changes.stats.describe()}"]

    if changes.added:
        sections.append("Added files:\n" + "\n".join(f"  + {p}" for p in sorted(changes.added)))
    if changes.modified:
        sections.append("Modified files:\n" + "\n".join(f"  * {p}" for p in sorted(changes.modified)))
    if changes.deleted:
        sections.append("Deleted files:\n" + "\n".join(f"  - {p}" for p in sorted(changes.deleted)))
    if changes.renamed:
        sections.append(
            "Renamed files:\n"
            + "\n".join(f"  {old} -> {new}" for old, new in sorted(changes.renamed))
        )

    return "\n\n".join(sections)


def _commit_user_prompt(changes: ChangeSet, diff: DiffText, instruction: str) -> str:
    parts = [
        CHANGES_HEADER,
        format_changes(changes),
        DIFF_HEADER,
        diff.text or "(empty diff)",
    ]
    if diff.truncated:
        parts.append(TRUNCATION_CAVEAT.format(shown=diff.content_lines, total=diff.total_lines))
    parts.append(instruction)
    return "\n\n".join(parts)


def build_prompt(
    changes: ChangeSet,
    diff: DiffText,
    task: Task,
    max_subject_length: int = 72,
) -> Prompt:
    """Build the prompt for a generation task.

    Args:
        changes: The categorized staged changes (unused for command tasks).
        diff: The bounded staged diff (unused for command tasks).
        task: What to generate.
        max_subject_length: Subject-line ceiling stated to the model.

    Returns:
        A Prompt carrying both the direct and the relay request shapes.
    """
    if task.kind == TaskKind.COMMAND_EXPLAIN:
        description = (task.description or "").strip()
        return Prompt(
            task=task,
            system=COMMAND_SYSTEM_PROMPT,
            user=description,
            max_tokens=COMMAND_MAX_TOKENS,
            temperature=0.2,
            relay_endpoint=RELAY_COMMAND_ENDPOINT,
            relay_body={"description": description},
        )

    system = COMMIT_SYSTEM_PROMPT.format(
        max_subject_length=max_subject_length,
        types=", ".join(CONVENTIONAL_TYPES),
    )
    body = {"changes": changes.to_payload(), "diff": diff.text}

    if task.kind == TaskKind.SUGGESTIONS:
        instruction = ALTERNATIVES_INSTRUCTION.format(
            count=task.count, delimiter=ALTERNATIVES_DELIMITER
        )
        return Prompt(
            task=task,
            system=system,
            user=_commit_user_prompt(changes, diff, instruction),
            max_tokens=COMMIT_MAX_TOKENS * task.count,
            temperature=0.7,
            delimiter=ALTERNATIVES_DELIMITER,
            relay_endpoint=RELAY_SUGGESTIONS_ENDPOINT,
            relay_body={**body, "count": task.count},
        )

    return Prompt(
        task=task,
        system=system,
        user=_commit_user_prompt(changes, diff, SINGLE_MESSAGE_INSTRUCTION),
        max_tokens=COMMIT_MAX_TOKENS,
        temperature=0.0,
        relay_endpoint=RELAY_COMMIT_ENDPOINT,
        relay_body=body,
    )
