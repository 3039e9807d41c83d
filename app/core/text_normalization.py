"""
Line normalization for extracted resume text.

PDF/DOCX/TXT extractors hand us one string; the scanner wants trimmed, non-empty
lines with a stable ordinal. Whitespace oddities common in extracted text
(non-breaking spaces, tabs, runs of spaces) are collapsed here so that the
pattern matching downstream only ever sees single spaces.
"""

import re
from typing import List, NamedTuple


# ============================================================================
# Line model
# ============================================================================

class Line(NamedTuple):
    """A single trimmed, non-empty line of the source document."""
    index: int
    text: str


LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
# \s already matches NBSP; zero-width and BOM characters need stripping
INVISIBLE_RE = re.compile("[\\u200b\\u200c\\u200d\\ufeff]")
WHITESPACE_RE = re.compile(r"\s+")


def normalize_line(text: str) -> str:
    """
    Trim and collapse whitespace inside a single line.

    Examples:
      '  Senior Engineer  ' -> 'Senior Engineer'
      'Acme\tCorp' -> 'Acme Corp'
    """
    t = INVISIBLE_RE.sub("", text)
    return WHITESPACE_RE.sub(" ", t).strip()


def normalize_lines(text: str) -> List[Line]:
    """
    Split document text into normalized lines, dropping empties.

    Ordinals are assigned after blank lines are removed, so they index the
    returned list directly.
    """
    if not isinstance(text, str):
        raise TypeError(
            f"resume text must be a str, got {type(text).__name__}"
        )

    out: List[Line] = []
    for raw in LINE_BREAK_RE.split(text):
        t = normalize_line(raw)
        if t:
            out.append(Line(index=len(out), text=t))
    return out
