"""Coarse token-count estimate stored alongside each chunk.

This is a heuristic (roughly four characters per token for English text) kept
as storage metadata only. Chunk boundaries are computed in characters and never
depend on it.
"""

import math

CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> int:
    """Return ``ceil(len(text) / 4)``."""
    return math.ceil(len(text) / CHARS_PER_TOKEN)
