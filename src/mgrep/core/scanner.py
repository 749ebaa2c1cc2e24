# src/mgrep/core/scanner.py
import os
import sys
from pathlib import Path
from typing import Iterator

import pathspec

from mgrep.config import BINARY_PROBE_SIZE
from mgrep.core.ignore import is_path_ignored
from mgrep.models import SourceText


class TreeScanner:
    def __init__(self, root_dir: Path, ignore_spec: pathspec.PathSpec):
        self.root_dir = root_dir
        self.ignore_spec = ignore_spec

    def _is_binary_file(self, path: Path) -> bool:
        """A NUL byte near the start of the file marks it as binary."""
        try:
            with path.open("rb") as f:
                return b"\0" in f.read(BINARY_PROBE_SIZE)
        except OSError:
            return True

    def scan(self) -> Iterator[SourceText]:
        """
        Walks the tree in sorted order, pruning ignored directories, and
        yields one labelled SourceText per readable text file.
        """
        for root, dirs, files in os.walk(self.root_dir):
            root_path = Path(root)

            # os.walk descends into whatever is left in dirs
            kept = []
            for d in sorted(dirs):
                rel_dir = (root_path / d).relative_to(self.root_dir)
                if not is_path_ignored(self.ignore_spec, rel_dir, is_directory=True):
                    kept.append(d)
            dirs[:] = kept

            for f in sorted(files):
                file_path = root_path / f
                rel_path = file_path.relative_to(self.root_dir)

                if is_path_ignored(self.ignore_spec, rel_path):
                    continue
                # FIFOs, sockets and devices would block or never end
                if not file_path.is_file():
                    continue
                if self._is_binary_file(file_path):
                    continue

                try:
                    content = file_path.read_text(encoding="utf-8")
                except UnicodeDecodeError:
                    continue
                except OSError as e:
                    print(f"  > [Warning] Skipping {rel_path.as_posix()} (read error: {e})", file=sys.stderr)
                    continue

                yield SourceText(content=content, label=rel_path.as_posix())
