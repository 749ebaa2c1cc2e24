# src/mgrep/core/ignore.py
import sys
from pathlib import Path
from typing import Iterable, Optional

import pathspec

from mgrep.config import DEFAULT_IGNORE_PATTERNS


def load_ignore_spec(root_dir: Path, extra_patterns: Optional[Iterable[str]] = None) -> pathspec.PathSpec:
    """
    Builds the ignore rules for a directory search: the built-in defaults,
    then the root's .gitignore (if any), then any extra patterns.
    Later rules win, so a .gitignore can re-include a default with '!'.
    """
    lines = list(DEFAULT_IGNORE_PATTERNS)

    gitignore_file = root_dir / ".gitignore"
    if gitignore_file.is_file():
        try:
            lines.extend(gitignore_file.read_text(encoding="utf-8").splitlines())
        except (OSError, UnicodeDecodeError) as e:
            print(f"Warning: could not read {gitignore_file}: {e}", file=sys.stderr)

    if extra_patterns:
        lines.extend(extra_patterns)

    return pathspec.GitIgnoreSpec.from_lines(lines)


def is_path_ignored(spec: pathspec.PathSpec, rel_path: Path, is_directory: bool = False) -> bool:
    # gitignore directory patterns ("venv/") only match paths with a trailing slash
    candidate = rel_path.as_posix()
    if is_directory:
        candidate += "/"
    return spec.match_file(candidate)
