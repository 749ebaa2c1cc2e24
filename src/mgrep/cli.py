# src/mgrep/cli.py
import sys
from typing import Iterable, Optional, Sequence

# Module imports
from mgrep.core.highlight import render
from mgrep.core.resolver import build
from mgrep.core.search import search
from mgrep.core.source import read_sources
from mgrep.models import Config, ConfigError, HelpRequested, InputReadFailure, SourceText


def should_highlight(color: str, stream) -> bool:
    if color == "always":
        return True
    if color == "never":
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def format_matches(config: Config, source: SourceText, highlight: bool) -> Iterable[str]:
    """Yields newline-terminated output lines for one source."""
    prefix = f"{source.label}:" if source.label is not None else ""
    for line in search(config.query, config.ignore_case, source.content):
        if highlight:
            yield prefix + render(config.query, config.ignore_case, line)
        else:
            yield f"{prefix}{line}\n"


def run(config: Config) -> int:
    """Reads every source up front, then prints matches. Returns the match count."""
    sources = read_sources(config.input)
    highlight = should_highlight(config.color, sys.stdout)

    count = 0
    for source in sources:
        for out_line in format_matches(config, source, highlight):
            sys.stdout.write(out_line)
            count += 1
    return count


def main(argv: Optional[Sequence[str]] = None):
    tokens = list(sys.argv if argv is None else argv)
    try:
        # 1. Configuration
        try:
            config = build(tokens)
        except ConfigError as e:
            print(f"Problem parsing arguments: {e}", file=sys.stderr)
            sys.exit(1)

        # Help is not an error, but the exit status stays 1
        if isinstance(config, HelpRequested):
            sys.exit(1)

        # 2. Search & output
        run(config)

    except InputReadFailure as e:
        print(f"Application error: {e}", file=sys.stderr)
        sys.exit(1)

    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        sys.exit(1)

    except Exception as e:
        print(f"An unexpected error occurred: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
