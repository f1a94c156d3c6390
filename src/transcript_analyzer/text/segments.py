"""Key-segment identification for legal transcripts.

Classifies each line against an ordered rule table (first match wins) and
groups contiguous lines into typed segments:

- A matching line of a new type closes the open segment and opens another.
- A matching line of the open segment's type extends it.
- A non-matching line is kept as trailing context of the open segment; once
  the segment holds ``MAX_SEGMENT_LINES`` lines it is closed.
- A non-matching line with no segment open is ignored.

Recorded line numbers are derived from the buffer length at closing time.
``start_line`` is one less than the 1-based number of the segment's first
line when a new type closes it, and two less when the context limit or the
end of input closes it.
"""

from __future__ import annotations

import logging
import re

from transcript_analyzer.text.types import Segment, SegmentType

logger = logging.getLogger(__name__)

MAX_SEGMENT_LINES = 10

SEGMENT_RULES: tuple[tuple[SegmentType, re.Pattern[str]], ...] = (
    (
        SegmentType.MOTION,
        re.compile(
            r"\b(motion|move to|moving for|objection|sustained|overruled)\b",
            re.IGNORECASE,
        ),
    ),
    (
        SegmentType.RULING,
        re.compile(
            r"\b(court orders|court rules|granted|denied|the court)\b",
            re.IGNORECASE,
        ),
    ),
    (
        SegmentType.EVIDENCE,
        re.compile(
            r"\b(exhibit|marked for identification|admitted|foundation|authentication)\b",
            re.IGNORECASE,
        ),
    ),
    (
        SegmentType.TESTIMONY,
        re.compile(r"\b(sworn|testimony|witness|testified)\b", re.IGNORECASE),
    ),
    (
        SegmentType.DEADLINE,
        re.compile(
            r"\b(deadline|due date|by|within.*days|must file)\b", re.IGNORECASE
        ),
    ),
)


def classify_line(line: str) -> SegmentType | None:
    """Return the first segment type whose rule matches *line*, or None."""
    for segment_type, pattern in SEGMENT_RULES:
        if pattern.search(line):
            return segment_type
    return None


def _close(
    segment_type: SegmentType, buffer: list[str], line_num: int, end_line: int
) -> Segment:
    return Segment(
        type=segment_type,
        content="\n".join(buffer).strip(),
        start_line=line_num - len(buffer) - 1,
        end_line=end_line,
    )


def identify_segments(text: str) -> list[Segment]:
    """Group legally significant lines of *text* into typed segments.

    Args:
        text: Cleaned transcript text.

    Returns:
        Non-overlapping segments in document order.  Empty when no line
        matches any rule.
    """
    segments: list[Segment] = []
    buffer: list[str] = []
    current_type: SegmentType | None = None
    line_num = 0

    for line in text.split("\n"):
        line_num += 1
        matched_type = classify_line(line)

        if matched_type is not None:
            if matched_type is not current_type:
                if current_type is not None and buffer:
                    segments.append(_close(current_type, buffer, line_num, line_num - 1))
                current_type = matched_type
                buffer = [line]
            else:
                buffer.append(line)
            continue

        if current_type is None:
            continue

        buffer.append(line)
        if len(buffer) >= MAX_SEGMENT_LINES:
            segments.append(_close(current_type, buffer, line_num, line_num))
            current_type = None
            buffer = []

    if current_type is not None and buffer:
        segments.append(_close(current_type, buffer, line_num, line_num))

    logger.debug("Identified %d key segments over %d lines", len(segments), line_num)
    return segments
