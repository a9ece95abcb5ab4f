"""Constants shared across gyst.

Contains:
- CONVENTIONAL_TYPES: Valid conventional commit types
- DEFAULT_COMMIT_TYPE: Type applied when a message has no type prefix
- ALTERNATIVES_DELIMITER: Separator line between alternative messages
- WARNING_KEYWORDS: Words that make a command note worth showing
"""

CONVENTIONAL_TYPES = [
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "perf",
    "test",
    "chore",
    "ci",
    "build",
    "revert",
]

DEFAULT_COMMIT_TYPE = "chore"

ALTERNATIVES_DELIMITER = "---"

WARNING_KEYWORDS = ["CAREFUL", "WARNING", "IMPORTANT", "DO NOT", "caution"]
