"""
Scoring of encode attempts against a closed size interval.

In-range results always outrank undersized ones; within the range, sizes
near the top (higher quality) score higher. Oversized results are rejected.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class SweepState:
    """Best attempt seen so far in a sweep."""
    best_score: float = -1.0
    best_buffer: Optional[bytes] = None

    def offer(self, score: float, buffer: bytes) -> "SweepState":
        """Return the state after seeing an attempt; ties keep the earlier one."""
        if score > self.best_score:
            return SweepState(score, buffer)
        return self

    @property
    def found(self) -> bool:
        return self.best_buffer is not None


def range_position(size: int, min_bytes: int, max_bytes: int) -> float:
    """Relative position of an in-range size, 0 at min_bytes and 1 at max_bytes."""
    if max_bytes == min_bytes:
        return 1.0
    return (size - min_bytes) / (max_bytes - min_bytes)


def score_attempt(size: int, min_bytes: int, max_bytes: int,
                  scoring: Dict[str, Any]) -> Optional[float]:
    """
    Score an encoded size against [min_bytes, max_bytes].

    Args:
        size: Encoded byte length
        min_bytes: Lower bound of the target (positive)
        max_bytes: Upper bound of the target
        scoring: Weights from the ``range_fit.scoring`` config table

    Returns:
        Score, or None when the size exceeds max_bytes
    """
    if size > max_bytes:
        return None

    if size >= min_bytes:
        position = range_position(size, min_bytes, max_bytes)
        score = scoring["in_range_base"] + position * scoring["in_range_span"]
        if position > scoring["upper_position"]:
            score += scoring["upper_bonus"]
        return score

    return scoring["under_base"] + (size / min_bytes) * scoring["under_span"]
