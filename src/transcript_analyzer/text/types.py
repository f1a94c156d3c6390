"""Shared types for transcript text processing.

Defines Structure, Segment, SegmentType and Chunk used by the structure
analyzer, segment identifier, chunker and the analysis orchestrator.  All
are frozen: they are derived once per document and never mutated.
"""

from dataclasses import dataclass, field
from enum import Enum

from transcript_analyzer.text.tokens import estimate_tokens


class SegmentType(str, Enum):
    """Semantic category of a key transcript segment.

    Declaration order is matching priority: when a line could match more
    than one category, the first one listed wins.
    """

    MOTION = "motion"
    RULING = "ruling"
    EVIDENCE = "evidence"
    TESTIMONY = "testimony"
    DEADLINE = "deadline"


@dataclass(frozen=True)
class Structure:
    """Derived summary of a transcript's shape.

    Attributes:
        speakers: Distinct speaker labels (e.g. ``"JUDGE SMITH"``).
        sections: Section headers in encounter order, duplicates kept.
        has_timestamps: Whether any line carries an ``H:MM`` time.
        line_count: Number of newline-separated lines (``""`` has one).
        estimated_tokens: ``ceil(len(text) / 4)``.
    """

    speakers: frozenset[str] = field(default_factory=frozenset)
    sections: tuple[str, ...] = ()
    has_timestamps: bool = False
    line_count: int = 1
    estimated_tokens: int = 0


@dataclass(frozen=True)
class Segment:
    """A contiguous run of lines classified under one category."""

    type: SegmentType
    content: str
    start_line: int
    end_line: int


@dataclass(frozen=True)
class Chunk:
    """A token-budgeted slice of a transcript."""

    text: str
    index: int = 0

    @property
    def estimated_tokens(self) -> int:
        return estimate_tokens(self.text)
