"""Prompt templates and the prompt builder.

This package contains:
- system: System prompts for commit and command tasks
- commit: User prompt pieces for commit message tasks
- builder: Prompt model and build_prompt
"""

from gyst.llm.prompts.system import COMMAND_SYSTEM_PROMPT, COMMIT_SYSTEM_PROMPT
from gyst.llm.prompts.builder import (
    RELAY_COMMAND_ENDPOINT,
    RELAY_COMMIT_ENDPOINT,
    RELAY_SUGGESTIONS_ENDPOINT,
    Prompt,
    build_prompt,
    format_changes,
)


__all__ = [
    "COMMIT_SYSTEM_PROMPT",
    "COMMAND_SYSTEM_PROMPT",
    "Prompt",
    "build_prompt",
    "format_changes",
    "RELAY_COMMIT_ENDPOINT",
    "RELAY_SUGGESTIONS_ENDPOINT",
    "RELAY_COMMAND_ENDPOINT",
]
