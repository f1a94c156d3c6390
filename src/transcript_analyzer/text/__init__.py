"""Transcript text processing -- normalization, structure, segments, chunks.

Pure, non-suspending computation over raw transcript text.  Every function
here is deterministic and side-effect free apart from debug logging.

Public API:
    clean_transcript(text)                       -> str
    estimate_tokens(text)                        -> int
    extract_structure(text)                      -> Structure
    identify_segments(text)                      -> list[Segment]
    chunk_by_token_budget(text, max_tokens)      -> list[Chunk]
"""

from transcript_analyzer.text.chunking import chunk_by_token_budget
from transcript_analyzer.text.cleaning import clean_transcript
from transcript_analyzer.text.segments import classify_line, identify_segments
from transcript_analyzer.text.structure import SECTION_HEADERS, extract_structure
from transcript_analyzer.text.tokens import estimate_tokens
from transcript_analyzer.text.types import Chunk, Segment, SegmentType, Structure

__all__ = [
    "Chunk",
    "SECTION_HEADERS",
    "Segment",
    "SegmentType",
    "Structure",
    "chunk_by_token_budget",
    "classify_line",
    "clean_transcript",
    "estimate_tokens",
    "extract_structure",
    "identify_segments",
]
