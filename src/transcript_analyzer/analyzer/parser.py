"""Parser for the three-section analysis format.

Generated responses are asked to contain ``KEY TAKEAWAYS:``, ``SUMMARY:``
and ``ACTION ITEMS:`` headers.  Models reorder, drop or re-case them, so
parsing is tolerant: headers may come in any order, any may be missing, and
malformed input yields empty fields instead of an error.
"""

from __future__ import annotations

import re

from transcript_analyzer.analyzer.types import ParsedAnalysis

_LABELS: tuple[tuple[str, str], ...] = (
    ("key_takeaways", "KEY TAKEAWAYS:"),
    ("summary", "SUMMARY:"),
    ("action_items", "ACTION ITEMS:"),
)

_SECTION_SPLIT_RE = re.compile(
    r"\n[ \t]*(?=" + "|".join(re.escape(label) for _, label in _LABELS) + r")",
    re.IGNORECASE,
)
_LABEL_RES: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (field, re.compile(r"^\s*" + re.escape(label) + r"\s*", re.IGNORECASE))
    for field, label in _LABELS
)


def parse_structured_response(content: str | None) -> ParsedAnalysis:
    """Extract the labelled sections from *content*.

    Text is split at every newline followed by a label; a piece beginning
    with a label is assigned (label stripped, trimmed) to that field.
    Pieces without a label are ignored.  A later duplicate label wins.
    """
    fields = {field: "" for field, _ in _LABELS}
    if not content:
        return ParsedAnalysis()

    for section in _SECTION_SPLIT_RE.split(content):
        for field, label_re in _LABEL_RES:
            match = label_re.match(section)
            if match:
                fields[field] = section[match.end():].strip()
                break

    return ParsedAnalysis(**fields)
