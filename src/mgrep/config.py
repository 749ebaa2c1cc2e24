# src/mgrep/config.py

IGNORE_CASE_ENV = "IGNORE_CASE"

HELP_TOKENS = ("-h", "--help")
IGNORE_CASE_FLAGS = ("-i", "--ignore-case")
NO_IGNORE_CASE_FLAGS = ("-ni", "--no-ignore-case")

PATH_SEPARATORS = ("/", "\\")

COLOR_CHOICES = ("auto", "always", "never")

# ANSI SGR: red foreground / reset
HIGHLIGHT_START = "\x1b[31m"
HIGHLIGHT_END = "\x1b[0m"

BINARY_PROBE_SIZE = 1024

DEFAULT_IGNORE_PATTERNS = [
    "# Hidden files and directories (.git, .venv, caches)",
    ".*",
    "node_modules/",
    "venv/",
    "__pycache__/",
    "*.pyc",
]

USAGE = """\
Usage:
    mgrep QUERY [-i | --ignore-case | -ni | --no-ignore-case] [--color=WHEN] [PATH]

Print every line containing QUERY.

    PATH must contain a path separator ('/' or '\\'), e.g. ./poem.txt.
    A directory PATH searches every non-ignored text file beneath it.
    Without PATH the text is read from standard input:

        echo "the text" | mgrep QUERY
        cat poem.txt | IGNORE_CASE=1 mgrep QUERY

Options:
    -i, --ignore-case        Match without regard to case.
    -ni, --no-ignore-case    Match case exactly (overrides -i and IGNORE_CASE).
    --color=WHEN             Highlight matches: auto (default), always, never.
                             Give WHEN with "=" or as the next word;
                             "--color PATH" is read as an invalid WHEN.
    -h, --help               Show this message.

Environment:
    IGNORE_CASE              If set to any value, behave as if -i was given.
"""
