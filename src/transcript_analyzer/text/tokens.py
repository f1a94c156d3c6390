"""Character-count token estimate used everywhere token counts matter."""

import math

CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> int:
    """Return ``ceil(len(text) / 4)``.

    A fixed, deterministic heuristic rather than a real tokenizer, so
    strategy decisions and chunk budgets are reproducible across providers.
    """
    return math.ceil(len(text) / CHARS_PER_TOKEN)
