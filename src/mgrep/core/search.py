# src/mgrep/core/search.py
from typing import List


def fold(text: str) -> str:
    """Canonical form used for case-insensitive comparison."""
    return text.lower()


def split_lines(contents: str) -> List[str]:
    """
    Splits on "\n" only, dropping one "\r" before each "\n". A final newline
    does not produce an empty last line. Form feeds and Unicode line
    separators stay inside their line.
    """
    lines = contents.split("\n")
    tail = lines.pop()
    lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    if tail:
        lines.append(tail)
    return lines


def search(query: str, ignore_case: bool, contents: str) -> List[str]:
    """
    Returns every line of contents that contains query, in document order.

    Lines keep their original casing; folding only affects the comparison.
    An empty query matches every line.
    """
    lines = split_lines(contents)

    if not ignore_case:
        return [line for line in lines if query in line]

    needle = fold(query)
    return [line for line in lines if needle in fold(line)]
