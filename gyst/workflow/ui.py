"""Terminal interaction for the commit workflows."""

from typing import Optional, Sequence

import typer

from gyst.models import Candidate, CommitDecision
from gyst.workflow.states import UserAborted

RULE = "=" * 60


def _ask(text: str, **kwargs):
    """typer.prompt that turns Ctrl-C or Ctrl-D into UserAborted."""
    try:
        return typer.prompt(text, **kwargs)
    except typer.Abort:
        raise UserAborted()


class TerminalUI:
    """Prompts and status output for an interactive terminal session.

    Status lines go to stderr; the candidate message itself goes to stdout.
    """

    def info(self, message: str) -> None:
        typer.echo(message, err=True)

    def warn(self, message: str) -> None:
        typer.echo(f"Warning: {message}", err=True)

    def show_candidate(self, candidate: Candidate) -> None:
        typer.echo("")
        typer.echo(RULE)
        typer.echo(candidate.message)
        typer.echo(RULE)

    def show_candidates(self, candidates: Sequence[Candidate]) -> None:
        typer.echo("")
        typer.echo("Suggested commit messages:")
        for index, candidate in enumerate(candidates, start=1):
            typer.echo("")
            typer.echo(f"{index}. {candidate.subject}")
            body = candidate.message[len(candidate.subject):].strip()
            for line in body.splitlines():
                typer.echo(f"   {line}")

    def confirm_stage_all(self) -> bool:
        typer.echo("No staged changes found.", err=True)
        try:
            return typer.confirm("Would you like to stage all tracked changes?", default=False)
        except typer.Abort:
            raise UserAborted()

    def ask_decision(self) -> CommitDecision:
        """Ask whether to use, edit or reject the shown message."""
        while True:
            answer = _ask(
                "Use this message? [Y/n/e(edit)]",
                default="y",
                show_default=False,
            ).strip().lower()
            if answer in ("y", "yes", ""):
                return CommitDecision.accept()
            if answer in ("n", "no"):
                return CommitDecision.reject()
            if answer in ("e", "edit"):
                return CommitDecision.edit()
            typer.echo("Please answer y, n or e.", err=True)

    def choose_candidate(self, candidates: Sequence[Candidate]) -> Optional[int]:
        """Ask for a 1-based choice among candidates.

        Returns:
            The 0-based index of the chosen candidate, or None when the user
            enters 0 to cancel.
        """
        while True:
            choice = _ask(
                f"Select a commit message (1-{len(candidates)}, 0 to cancel)",
                type=int,
                default=1,
            )
            if choice == 0:
                return None
            if 1 <= choice <= len(candidates):
                return choice - 1
            typer.echo(f"Please enter a number between 0 and {len(candidates)}.", err=True)

    def show_committed(self, sha: str, message: str) -> None:
        subject = message.split("\n", 1)[0]
        typer.echo(f"Committed {sha}: {subject}", err=True)
