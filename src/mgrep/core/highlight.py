# src/mgrep/core/highlight.py
"""
Marks every occurrence of the query inside a matching line.

Occurrences are located on the folded line when ignoring case, but the text
that gets emitted is always sliced from the original line. Folding can change
length (``"İ".lower()`` is two code points), so folded offsets are mapped
back to the original characters that produced them instead of assuming the
query has the same length on both sides.
"""
from typing import List, Tuple

from mgrep.config import HIGHLIGHT_END, HIGHLIGHT_START
from mgrep.core.search import fold

Span = Tuple[int, int]


def _fold_offsets(line: str) -> Tuple[List[int], List[int]]:
    """
    owners[j] is the index in line of the character that produced folded[j].
    starts[i] is the folded index where character i begins (starts[len(line)]
    is the folded length).
    """
    owners: List[int] = []
    starts: List[int] = []
    for i, ch in enumerate(line):
        starts.append(len(owners))
        owners.extend([i] * len(fold(ch)))
    starts.append(len(owners))
    return owners, starts


def _exact_spans(needle: str, line: str) -> List[Span]:
    spans = []
    cursor = 0
    while True:
        idx = line.find(needle, cursor)
        if idx < 0:
            return spans
        cursor = idx + len(needle)
        spans.append((idx, cursor))


def find_spans(query: str, ignore_case: bool, line: str) -> List[Span]:
    """Non-overlapping (start, end) spans of query in line, left to right."""
    # find("") succeeds at every position and would never advance
    if not query:
        return []
    if not ignore_case:
        return _exact_spans(query, line)

    needle = fold(query)
    folded = fold(line)
    if len(folded) == len(line):
        return _exact_spans(needle, folded)

    owners, starts = _fold_offsets(line)
    spans = []
    cursor = 0
    while True:
        idx = folded.find(needle, cursor)
        if idx < 0:
            return spans
        begin = owners[idx]
        end = owners[idx + len(needle) - 1] + 1
        spans.append((begin, end))
        cursor = starts[end]


def segments(query: str, ignore_case: bool, line: str) -> List[Tuple[str, bool]]:
    """Splits line into (text, is_match) pieces that concatenate back to line."""
    pieces = []
    cursor = 0
    for begin, end in find_spans(query, ignore_case, line):
        if begin > cursor:
            pieces.append((line[cursor:begin], False))
        pieces.append((line[begin:end], True))
        cursor = end
    if cursor < len(line):
        pieces.append((line[cursor:], False))
    return pieces


def render(
    query: str,
    ignore_case: bool,
    line: str,
    start: str = HIGHLIGHT_START,
    end: str = HIGHLIGHT_END,
) -> str:
    """Returns line with each match wrapped in start/end, plus a trailing newline."""
    out = []
    for text, is_match in segments(query, ignore_case, line):
        out.append(f"{start}{text}{end}" if is_match else text)
    out.append("\n")
    return "".join(out)
