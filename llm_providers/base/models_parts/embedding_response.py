"""
EmbeddingResponse: vectors for an ordered batch of input texts.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .usage_statistics import UsageStatistics


@dataclass(frozen=True)
class EmbeddingResponse:
    """One float vector per input text, in input order.

    ``usage.completion_tokens`` is always 0 for embeddings.
    """

    embeddings: Tuple[Tuple[float, ...], ...]
    model: str
    usage: UsageStatistics = field(default_factory=UsageStatistics)
    provider: str = ""

    @property
    def vector(self) -> Tuple[float, ...]:
        """First vector, or an empty tuple when there are none."""
        return self.embeddings[0] if self.embeddings else ()

    @property
    def count(self) -> int:
        return len(self.embeddings)

    @property
    def dimensions(self) -> int:
        return len(self.vector)

    @staticmethod
    def normalize_vector(vector: Sequence[float]) -> List[float]:
        """Scale ``vector`` to unit length; a zero vector is returned unchanged."""
        norm = math.sqrt(sum(v * v for v in vector))
        if norm == 0:
            return list(vector)
        return [v / norm for v in vector]

    @staticmethod
    def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
        """Cosine similarity of two equal-length vectors.

        Raises:
            ValueError: the vectors have different lengths.
        """
        if len(a) != len(b):
            raise ValueError(f"Vectors must have the same dimensions ({len(a)} != {len(b)})")
        dot = sum(x * y for x, y in zip(a, b))
        norm_a = math.sqrt(sum(x * x for x in a))
        norm_b = math.sqrt(sum(y * y for y in b))
        if norm_a == 0 or norm_b == 0:
            return 0.0
        return dot / (norm_a * norm_b)


__all__ = ["EmbeddingResponse"]
