# src/mgrep/core/resolver.py
import argparse
import os
import sys
from typing import Mapping, Optional, Sequence, TextIO, Union

from mgrep.config import (
    COLOR_CHOICES,
    HELP_TOKENS,
    IGNORE_CASE_ENV,
    IGNORE_CASE_FLAGS,
    NO_IGNORE_CASE_FLAGS,
    PATH_SEPARATORS,
    USAGE,
)
from mgrep.models import (
    Config,
    ConfigError,
    FilePath,
    HelpRequested,
    InputReadFailure,
    InputSource,
    LiteralText,
    MissingQuery,
)


class _FlagParser(argparse.ArgumentParser):
    """ArgumentParser that raises ConfigError instead of exiting the process."""

    def error(self, message):
        raise ConfigError(message)


def create_flag_parser() -> argparse.ArgumentParser:
    parser = _FlagParser(prog="mgrep", add_help=False, allow_abbrev=False)
    parser.add_argument(*HELP_TOKENS, dest="help", action="store_true")
    parser.add_argument(*IGNORE_CASE_FLAGS, dest="ignore_case", action="store_true")
    parser.add_argument(*NO_IGNORE_CASE_FLAGS, dest="no_ignore_case", action="store_true")
    parser.add_argument("--color", choices=COLOR_CHOICES, default="auto")
    return parser


def resolve_ignore_case(ignore_case: bool, no_ignore_case: bool, env: Mapping[str, str]) -> bool:
    """
    Precedence: --no-ignore-case > --ignore-case > IGNORE_CASE in the environment.
    Any value of IGNORE_CASE, including the empty string, counts as set.
    """
    if no_ignore_case:
        return False
    if ignore_case:
        return True
    return IGNORE_CASE_ENV in env


def strip_outer_quotes(text: str) -> str:
    """Removes at most one leading and one trailing double quote."""
    if text.startswith('"'):
        text = text[1:]
    if text.endswith('"'):
        text = text[:-1]
    return text


def is_path_like(token: str) -> bool:
    return any(sep in token for sep in PATH_SEPARATORS)


def select_input(tokens: Sequence[str], stdin: TextIO) -> InputSource:
    for token in tokens:
        if is_path_like(token):
            return FilePath(token)

    try:
        raw = stdin.read()
    except UnicodeDecodeError as e:
        raise InputReadFailure("standard input is not valid UTF-8 text") from e
    except OSError as e:
        raise InputReadFailure(f"could not read standard input: {e}") from e
    return LiteralText(strip_outer_quotes(raw))


def build(
    tokens: Sequence[str],
    env: Optional[Mapping[str, str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> Union[Config, HelpRequested]:
    """
    Resolves the raw command line (program name first) into a Config.

    Standard input is only read when no path-like token is present, and never
    when help was requested. Raises MissingQuery, ConfigError or InputReadFailure.
    """
    env = os.environ if env is None else env
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout

    remaining = list(tokens[1:])
    if not remaining:
        raise MissingQuery()

    query, rest = remaining[0], remaining[1:]
    if query in HELP_TOKENS:
        return _help(stdout)

    args, leftovers = create_flag_parser().parse_known_args(rest)
    if args.help:
        return _help(stdout)

    ignore_case = resolve_ignore_case(args.ignore_case, args.no_ignore_case, env)
    source = select_input(leftovers, stdin)

    return Config(query=query, ignore_case=ignore_case, input=source, color=args.color)


def _help(stdout: TextIO) -> HelpRequested:
    print(USAGE, end="", file=stdout)
    return HelpRequested(USAGE)
