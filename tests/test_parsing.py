"""Tests for gyst.llm.parsing module."""

import re

import pytest

from gyst.llm import MalformedResponseError, ValidationError
from gyst.llm.parsing import (
    dedupe_candidates,
    is_important,
    normalize_message,
    parse_command_suggestion,
    split_alternatives,
    strip_wrapping,
)

CONVENTIONAL_SUBJECT = re.compile(r"^\w+(\([\w-]+\))?: .+")


class TestStripWrapping:
    """Tests for strip_wrapping."""

    def test_removes_code_fence_with_language(self):
        assert strip_wrapping("```text\nfeat: add x\n```") == "feat: add x"

    def test_removes_code_fence_without_language(self):
        assert strip_wrapping("```\nfix: y\n```") == "fix: y"

    def test_removes_quotes(self):
        assert strip_wrapping('"docs: update readme"') == "docs: update readme"

    def test_removes_enumeration(self):
        assert strip_wrapping("1. feat: add x") == "feat: add x"

    def test_nested_wrapping(self):
        assert strip_wrapping('```\n"feat: add x"\n```') == "feat: add x"


class TestNormalizeMessage:
    """Tests for normalize_message."""

    def test_applies_default_type(self):
        """A message without a type prefix gets one."""
        candidate = normalize_message("Added new feature")

        assert CONVENTIONAL_SUBJECT.match(candidate.subject)
        assert candidate.subject == "chore: Added new feature"
        assert candidate.issues

    def test_keeps_valid_message(self):
        candidate = normalize_message("feat(core): add caching layer", backend="relay")

        assert candidate.message == "feat(core): add caching layer"
        assert candidate.backend == "relay"
        assert candidate.issues == ()
        assert not candidate.truncated

    def test_lowercases_type(self):
        assert normalize_message("FIX: handle empty input").subject == "fix: handle empty input"

    def test_keeps_breaking_change_marker(self):
        assert normalize_message("feat(api)!: drop v1").subject == "feat(api)!: drop v1"

    def test_removes_trailing_period(self):
        assert normalize_message("fix: handle empty input.").subject == "fix: handle empty input"

    def test_drops_preamble(self):
        raw = "Here is a commit message for your changes:\n\nfeat: add login page"
        assert normalize_message(raw).message == "feat: add login page"

    def test_scope_with_path_separator_is_not_a_header(self):
        candidate = normalize_message("feat(ui/x): add toolbar")
        assert candidate.subject == "chore: feat(ui/x): add toolbar"

    def test_hyphenated_scope(self):
        assert normalize_message("fix(cli-args): accept -q").subject == "fix(cli-args): accept -q"

    def test_unknown_type_is_not_a_header(self):
        candidate = normalize_message("update: bump deps")
        assert candidate.subject == "chore: update: bump deps"

    def test_long_subject_cut_at_word_boundary(self):
        """An overlong subject is cut at a word boundary and marked."""
        original = (
            "feat(core): add a caching layer that keeps rendered templates around "
            "between requests to cut latency"
        )
        candidate = normalize_message(original, max_subject_length=72)

        assert len(candidate.subject) <= 72
        assert candidate.subject.endswith("...")
        assert candidate.truncated
        head = candidate.subject[:-3]
        assert original.startswith(head)
        assert original[len(head)] == " "

    def test_body_separated_by_one_blank_line(self):
        raw = "feat: add x\n\n\n\n- first point\n- second point\n\n"
        candidate = normalize_message(raw)

        assert candidate.message == "feat: add x\n\n- first point\n- second point"

    def test_body_without_blank_line(self):
        candidate = normalize_message("fix: y\ndetails here")
        assert candidate.message == "fix: y\n\ndetails here"

    def test_empty_response_raises(self):
        with pytest.raises(MalformedResponseError):
            normalize_message("  \n ```\n```  ")

    def test_strict_mode_raises_on_repair(self):
        with pytest.raises(ValidationError) as exc_info:
            normalize_message("Added new feature", strict=True)
        assert exc_info.value.issues

    def test_strict_mode_accepts_clean_message(self):
        assert normalize_message("test: cover parser", strict=True).issues == ()


class TestAlternatives:
    """Tests for split_alternatives and dedupe_candidates."""

    def test_split_on_delimiter_lines(self):
        text = "feat: a\n---\nfix: b\n\nbody of b\n---\n\n---\ndocs: c"
        assert split_alternatives(text, "---") == ["feat: a", "fix: b\n\nbody of b", "docs: c"]

    def test_dedupe_keeps_first_seen_order(self):
        candidates = [normalize_message(t) for t in ["feat: a", "fix: b", "feat: a"]]
        assert [c.message for c in dedupe_candidates(candidates)] == ["feat: a", "fix: b"]


class TestParseCommandSuggestion:
    """Tests for parse_command_suggestion."""

    def test_parses_steps_notes_and_tip(self):
        text = (
            "To undo the last commit:\n"
            "COMMAND: git reset --soft HEAD~1\n"
            "EXPLANATION: Moves HEAD back one commit and keeps changes staged\n"
            "NOTE: WARNING: do not do this after pushing\n"
            "COMMAND: git status\n"
            "EXPLANATION: Check what is staged\n"
            "NOTE: harmless\n"
            "ADDITIONAL TIP: Be CAREFUL with --hard"
        )
        suggestion = parse_command_suggestion(text)

        assert suggestion.intro == "To undo the last commit:"
        assert [s.command for s in suggestion.steps] == ["git reset --soft HEAD~1", "git status"]
        assert suggestion.steps[0].important_note == "WARNING: do not do this after pushing"
        assert suggestion.steps[1].note == "harmless"
        assert suggestion.steps[1].important_note is None
        assert suggestion.important_tip == "Be CAREFUL with --hard"

    def test_plain_text_becomes_intro(self):
        suggestion = parse_command_suggestion("Use git stash to shelve changes.")
        assert suggestion.steps == []
        assert suggestion.intro == "Use git stash to shelve changes."

    def test_empty_raises(self):
        with pytest.raises(MalformedResponseError):
            parse_command_suggestion("   ")

    def test_is_important(self):
        assert is_important("IMPORTANT: back up first")
        assert is_important("use with caution")
        assert not is_important("just a hint")
