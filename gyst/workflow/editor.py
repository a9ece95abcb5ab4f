"""External editor session for commit messages."""

import logging
import os
import shlex
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Optional

LOG = logging.getLogger(__name__)

EDIT_INSTRUCTIONS = """
# Edit the commit message above.
# Lines starting with '#' are ignored; an empty message returns to the prompt.
"""


class EditorError(Exception):
    """Raised when the editor cannot be started or exits abnormally."""

    pass


def find_editor(preferred: Optional[str] = None) -> list[str]:
    """Find an available text editor.

    Preference order:
    1. The configured editor
    2. $VISUAL, then $EDITOR
    3. nano, then vi

    Returns:
        List of command parts to run the editor.
    """
    for candidate in (preferred, os.environ.get("VISUAL"), os.environ.get("EDITOR")):
        if candidate and candidate.strip():
            return shlex.split(candidate)

    # noinspection PyArgumentList
    if shutil.which("nano"):
        return ["nano"]

    return ["vi"]


def strip_comments(text: str) -> str:
    """Drop comment lines and surrounding whitespace from edited text."""
    lines = [line for line in text.splitlines() if not line.lstrip().startswith("#")]
    return "\n".join(lines).strip()


def edit_message(initial: str, editor: Optional[str] = None) -> str:
    """Let the user edit a message in an external editor.

    The message is written to a temporary file that is removed on every
    exit path, including an editor crash. The file is read back only after
    the editor process has exited successfully.

    Args:
        initial: Text to seed the buffer with.
        editor: Editor command; falls back to find_editor().

    Returns:
        The edited message with comment lines removed (possibly empty).

    Raises:
        EditorError: If the editor is missing or exits with a non-zero code.
    """
    editor_cmd = find_editor(editor)

    fd, name = tempfile.mkstemp(prefix="gyst-commit-", suffix=".txt")
    path = Path(name)
    try:
        with os.fdopen(fd, "w") as f:
            f.write(initial.rstrip("\n") + "\n" + EDIT_INSTRUCTIONS)

        LOG.debug("opening editor: %s", " ".join(editor_cmd))
        try:
            result = subprocess.run(editor_cmd + [str(path)], check=False)
        except FileNotFoundError:
            raise EditorError(f"Editor not found: {editor_cmd[0]}")

        if result.returncode != 0:
            raise EditorError(f"Editor exited with code {result.returncode}")

        return strip_comments(path.read_text())
    finally:
        path.unlink(missing_ok=True)
