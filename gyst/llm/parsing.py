"""Normalization and validation of raw AI output.

Contains:
- strip_wrapping: Remove code fences, quotes and list markers around a message
- normalize_message: Turn raw text into a conventional-commit Candidate
- dedupe_candidates: Drop exact duplicates, keeping first-seen order
- split_alternatives: Split a multi-message response on its delimiter
- parse_command_suggestion: Split COMMAND/EXPLANATION/NOTE output into steps
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from gyst.constants import CONVENTIONAL_TYPES, DEFAULT_COMMIT_TYPE, WARNING_KEYWORDS
from gyst.llm.exceptions import MalformedResponseError, ValidationError
from gyst.models import Candidate

HEADER_RE = re.compile(
    r"^(?P<type>[A-Za-z]+)(?:\((?P<scope>[\w-]+)\))?(?P<bang>!)?:\s+(?P<description>\S.*)$"
)
_ENUMERATION_RE = re.compile(r"^\s*\d+[.)]\s+")
_QUOTE_PAIRS = [('"', '"'), ("'", "'"), ("`", "`"), ("“", "”")]

TRUNCATION_SUFFIX = "..."


def strip_wrapping(raw: str) -> str:
    """Remove formatting artifacts wrapped around a message.

    Handles markdown code fences (with or without a language tag), matching
    surrounding quotes, and a leading enumeration such as "1. ".

    Args:
        raw: The raw text from the backend.

    Returns:
        The cleaned text, possibly empty.
    """
    cleaned = raw.strip()

    while True:
        before = cleaned

        if cleaned.startswith("```"):
            lines = cleaned.split("\n")
            # Remove first line (```text or ```)
            lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines).strip()
        elif cleaned.endswith("```"):
            cleaned = cleaned[:-3].strip()

        for opening, closing in _QUOTE_PAIRS:
            if len(cleaned) >= 2 and cleaned.startswith(opening) and cleaned.endswith(closing):
                cleaned = cleaned[len(opening):-len(closing)].strip()
                break

        cleaned = _ENUMERATION_RE.sub("", cleaned, count=1)

        if cleaned == before:
            return cleaned


def _match_header(line: str) -> Optional[re.Match]:
    match = HEADER_RE.match(line.strip())
    if match and match.group("type").lower() in CONVENTIONAL_TYPES:
        return match
    return None


def _truncate_subject(subject: str, max_length: int, prefix_length: int) -> str:
    """Cut a subject to max_length at the last word boundary, marking the cut."""
    budget = max_length - len(TRUNCATION_SUFFIX)
    cut = subject[:budget]
    if subject[budget:budget + 1] != " ":
        space = cut.rfind(" ")
        if space > prefix_length:
            cut = cut[:space]
    return cut.rstrip(" ,;:-") + TRUNCATION_SUFFIX


def normalize_message(
    raw: str,
    max_subject_length: int = 72,
    backend: str = "unknown",
    strict: bool = False,
) -> Candidate:
    """Normalize raw backend text into a conventional-commit Candidate.

    Steps: strip wrapping; drop any chatty preamble before the first
    conventional header; lowercase the type; apply the default type when no
    prefix is present; drop a trailing period; cut an overlong subject at a
    word boundary and mark it with "...".

    Args:
        raw: The raw text from the backend.
        max_subject_length: Ceiling for the first line, prefix included.
        backend: Name of the backend that produced the text.
        strict: Raise ValidationError instead of repairing silently.

    Returns:
        The normalized Candidate; ``issues`` lists every repair made.

    Raises:
        MalformedResponseError: If nothing is left after cleanup.
        ValidationError: In strict mode, if any repair was needed.
    """
    cleaned = strip_wrapping(raw)
    lines = [line.rstrip() for line in cleaned.split("\n")]
    while lines and not lines[0].strip():
        lines.pop(0)
    if not lines:
        raise MalformedResponseError(f"Backend returned an empty message: {raw!r}")

    issues = []

    header_index = next((i for i, line in enumerate(lines) if _match_header(line)), None)
    if header_index:
        lines = lines[header_index:]
        issues.append("dropped text before the commit header")

    subject = lines[0].strip()
    body = lines[1:]

    match = _match_header(subject)
    if match:
        commit_type = match.group("type").lower()
        scope = match.group("scope")
        bang = match.group("bang") or ""
        description = match.group("description").strip()
    else:
        commit_type, scope, bang, description = DEFAULT_COMMIT_TYPE, None, "", subject
        issues.append(f"missing type prefix, applied '{DEFAULT_COMMIT_TYPE}'")

    if description.endswith(".") and not description.endswith(TRUNCATION_SUFFIX):
        description = description.rstrip(".").rstrip()
        issues.append("removed trailing period")
    if not description:
        raise MalformedResponseError(f"Backend returned a message without a description: {raw!r}")

    prefix = f"{commit_type}({scope}){bang}: " if scope else f"{commit_type}{bang}: "
    subject = prefix + description

    truncated = False
    if len(subject) > max_subject_length:
        subject = _truncate_subject(subject, max_subject_length, len(prefix))
        truncated = True
        issues.append(f"subject cut to {max_subject_length} characters")

    # Exactly one blank line between subject and body
    while body and not body[0].strip():
        body.pop(0)
    while body and not body[-1].strip():
        body.pop()
    message = subject if not body else subject + "\n\n" + "\n".join(body)

    if strict and issues:
        raise ValidationError(f"Message needed repair: {'; '.join(issues)}", issues=tuple(issues))

    return Candidate(message=message, backend=backend, truncated=truncated, issues=tuple(issues))


def dedupe_candidates(candidates: Iterable[Candidate]) -> list[Candidate]:
    """Remove candidates whose message text was already seen."""
    seen = set()
    result = []
    for candidate in candidates:
        if candidate.message in seen:
            continue
        seen.add(candidate.message)
        result.append(candidate)
    return result


def split_alternatives(text: str, delimiter: str) -> list[str]:
    """Split a response holding several messages on delimiter lines."""
    chunks = []
    current: list[str] = []
    for line in text.split("\n"):
        if line.strip() == delimiter:
            chunks.append("\n".join(current))
            current = []
        else:
            current.append(line)
    chunks.append("\n".join(current))
    return [chunk.strip() for chunk in chunks if chunk.strip()]


def is_important(text: str) -> bool:
    """Whether a note or tip carries a warning worth showing."""
    return any(keyword in text for keyword in WARNING_KEYWORDS)


@dataclass
class CommandStep:
    """One suggested git command."""

    command: str
    explanation: str = ""
    note: Optional[str] = None

    @property
    def important_note(self) -> Optional[str]:
        if self.note and is_important(self.note):
            return self.note
        return None


@dataclass
class CommandSuggestion:
    """Parsed natural-language-to-git-command answer."""

    intro: str = ""
    steps: list[CommandStep] = field(default_factory=list)
    tip: Optional[str] = None
    raw: str = ""

    @property
    def important_tip(self) -> Optional[str]:
        if self.tip and is_important(self.tip):
            return self.tip
        return None


def parse_command_suggestion(text: str) -> CommandSuggestion:
    """Parse COMMAND:/EXPLANATION:/NOTE: formatted output.

    Args:
        text: The raw suggestion text.

    Returns:
        The parsed suggestion. Text without any COMMAND section becomes the
        intro with no steps.

    Raises:
        MalformedResponseError: If the text is empty.
    """
    cleaned = strip_wrapping(text)
    if not cleaned:
        raise MalformedResponseError("Backend returned an empty command suggestion")

    tip = None
    tip_index = cleaned.find("ADDITIONAL TIP:")
    if tip_index != -1:
        tip = cleaned[tip_index + len("ADDITIONAL TIP:"):].strip() or None
        cleaned = cleaned[:tip_index].rstrip()

    sections = ("\n" + cleaned).split("\nCOMMAND:")
    suggestion = CommandSuggestion(intro=sections[0].strip(), tip=tip, raw=text)

    for section in sections[1:]:
        command_part, _, rest = section.partition("\nEXPLANATION:")
        explanation, _, note = rest.partition("\nNOTE:")
        suggestion.steps.append(
            CommandStep(
                command=command_part.strip(),
                explanation=explanation.strip(),
                note=note.strip() or None,
            )
        )

    return suggestion
