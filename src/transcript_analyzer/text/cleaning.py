"""Transcript normalization applied before any analysis.

Court reporter output carries pagination and line-numbering artefacts that
inflate token counts without adding content.  ``clean_transcript`` removes
them in a fixed order:

1. Collapse three or more consecutive newlines to a single blank line.
2. Blank out standalone ``Page N`` lines.
3. Strip leading line-number prefixes (``  12   THE COURT: ...``).
4. Collapse runs of spaces and tabs to one space.
5. Trim the whole text.
"""

from __future__ import annotations

import re

_EXCESS_BLANK_LINES_RE = re.compile(r"\n{3,}")
_PAGE_NUMBER_RE = re.compile(r"^Page \d+$", re.MULTILINE)
_LINE_NUMBER_RE = re.compile(r"^\s*\d+\s+", re.MULTILINE)
_HORIZONTAL_SPACE_RE = re.compile(r"[ \t]+")


def clean_transcript(text: str) -> str:
    """Return *text* with pagination and spacing artefacts removed."""
    cleaned = _EXCESS_BLANK_LINES_RE.sub("\n\n", text)
    cleaned = _PAGE_NUMBER_RE.sub("", cleaned)
    cleaned = _LINE_NUMBER_RE.sub("", cleaned)
    cleaned = _HORIZONTAL_SPACE_RE.sub(" ", cleaned)
    return cleaned.strip()
