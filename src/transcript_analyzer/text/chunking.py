"""Token-budgeted chunking that never splits or reorders lines."""

from __future__ import annotations

import logging

from transcript_analyzer.text.tokens import estimate_tokens
from transcript_analyzer.text.types import Chunk

logger = logging.getLogger(__name__)


def chunk_by_token_budget(text: str, max_tokens_per_chunk: int = 1000) -> list[Chunk]:
    """Greedily pack whole lines of *text* into chunks of at most *max_tokens_per_chunk*.

    Before a line is appended, the accumulator is flushed if the line would
    push it over budget and it already holds non-blank content.  A single
    line larger than the budget therefore lands in a chunk of its own.
    Chunk text is trimmed; blank-only chunks are never emitted.

    Args:
        text: Cleaned transcript text.
        max_tokens_per_chunk: Per-chunk budget in estimated tokens.

    Returns:
        Chunks in document order.

    Raises:
        ValueError: If *max_tokens_per_chunk* is not positive.
    """
    if max_tokens_per_chunk <= 0:
        msg = f"max_tokens_per_chunk must be positive, got {max_tokens_per_chunk}"
        raise ValueError(msg)

    chunks: list[Chunk] = []
    current: list[str] = []
    current_tokens = 0
    has_content = False

    for line in text.split("\n"):
        line_tokens = estimate_tokens(line)

        if current_tokens + line_tokens > max_tokens_per_chunk and has_content:
            chunks.append(Chunk(text="\n".join(current).strip(), index=len(chunks)))
            current = []
            current_tokens = 0
            has_content = False

        current.append(line)
        current_tokens += line_tokens
        has_content = has_content or bool(line.strip())

    if has_content:
        chunks.append(Chunk(text="\n".join(current).strip(), index=len(chunks)))

    logger.debug(
        "Chunked %d chars into %d chunks (budget %d tokens)",
        len(text),
        len(chunks),
        max_tokens_per_chunk,
    )
    return chunks
