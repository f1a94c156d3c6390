"""Structure extraction for legal transcripts.

Scans the text once and tests every line independently against three
patterns (a line may hit more than one):

- **Speaker**: an uppercase/space/period run at line start followed by a
  colon, e.g. ``JUDGE SMITH:`` or ``MR. DOE:``.
- **Timestamp**: ``H:MM`` or ``H:MM:SS`` anywhere, optionally followed by
  AM/PM.  Sticky -- once seen, ``has_timestamps`` stays true.
- **Section header**: one of the examination/argument headers below at
  line start, case-insensitive, recorded as written.
"""

from __future__ import annotations

import logging
import re

from transcript_analyzer.text.tokens import estimate_tokens
from transcript_analyzer.text.types import Structure

logger = logging.getLogger(__name__)

SECTION_HEADERS: tuple[str, ...] = (
    "DIRECT EXAMINATION",
    "CROSS EXAMINATION",
    "REDIRECT",
    "RECROSS",
    "OPENING STATEMENT",
    "CLOSING ARGUMENT",
    "VOIR DIRE",
)

_SPEAKER_RE = re.compile(r"^([A-Z\s.]+):\s*")
_TIMESTAMP_RE = re.compile(r"\d{1,2}:\d{2}(:\d{2})?(\s?[AP]M)?")
_SECTION_RE = re.compile(
    r"^(" + "|".join(re.escape(h) for h in SECTION_HEADERS) + r")",
    re.IGNORECASE,
)


def extract_structure(text: str) -> Structure:
    """Derive speakers, sections, timestamp presence and size from *text*.

    Args:
        text: Cleaned transcript text.

    Returns:
        Immutable Structure.  Empty text yields no speakers, no sections,
        ``has_timestamps=False``, ``line_count=1`` and zero tokens.
    """
    lines = text.split("\n")
    speakers: set[str] = set()
    sections: list[str] = []
    has_timestamps = False

    for line in lines:
        speaker_match = _SPEAKER_RE.match(line)
        if speaker_match:
            speaker = speaker_match.group(1).strip()
            if speaker:
                speakers.add(speaker)

        if _TIMESTAMP_RE.search(line):
            has_timestamps = True

        section_match = _SECTION_RE.match(line)
        if section_match:
            sections.append(section_match.group(1))

    structure = Structure(
        speakers=frozenset(speakers),
        sections=tuple(sections),
        has_timestamps=has_timestamps,
        line_count=len(lines),
        estimated_tokens=estimate_tokens(text),
    )
    logger.debug(
        "Structure: %d lines, %d speakers, %d sections, ~%d tokens",
        structure.line_count,
        len(structure.speakers),
        len(structure.sections),
        structure.estimated_tokens,
    )
    return structure
