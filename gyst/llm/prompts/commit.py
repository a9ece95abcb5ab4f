"""User prompt pieces for commit message tasks."""

CHANGES_HEADER = "Here are the changes to commit:"

DIFF_HEADER = "Here's the detailed diff:"

TRUNCATION_CAVEAT = """NOTE: The diff above was truncated to {shown} of {total} lines because it exceeded the configured limit.
Base the message on the visible changes and the file list; do not guess at the omitted content."""

SINGLE_MESSAGE_INSTRUCTION = "Please generate a commit message following the conventional commit format."

ALTERNATIVES_INSTRUCTION = """Please generate exactly {count} alternative commit messages following the conventional commit format.
Each alternative must take a different angle on the same changes.
Separate alternatives with a line containing only {delimiter}
Do not number the alternatives or add any other text."""
