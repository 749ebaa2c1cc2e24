# src/mgrep/core/source.py
from pathlib import Path
from typing import List

from mgrep.core.ignore import load_ignore_spec
from mgrep.core.scanner import TreeScanner
from mgrep.models import FilePath, InputReadFailure, InputSource, LiteralText, SourceText


def read_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise InputReadFailure(f"No such file or directory: '{path}'") from e
    except UnicodeDecodeError as e:
        raise InputReadFailure(f"'{path}' is not valid UTF-8 text") from e
    except OSError as e:
        raise InputReadFailure(f"could not read '{path}': {e.strerror or e}") from e


def read_sources(source: InputSource) -> List[SourceText]:
    """
    Loads everything a search needs into memory before any matching starts.
    A directory expands to its non-ignored text files; any other read failure
    raises InputReadFailure.
    """
    if isinstance(source, LiteralText):
        return [SourceText(content=source.text)]

    if not isinstance(source, FilePath):
        raise TypeError(f"unsupported input source: {source!r}")

    path = Path(source.path)
    if path.is_dir():
        return list(TreeScanner(path, load_ignore_spec(path)).scan())

    return [SourceText(content=read_file(path))]
