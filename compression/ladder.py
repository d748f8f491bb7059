"""
Resolution ladders for the size-fitting search.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

from compression.models import SizeTarget


Resolution = Tuple[int, int]


@dataclass(frozen=True)
class RangeProfile:
    """Ladder tables and early-exit threshold for one class of range target."""
    name: str
    scales: Tuple[float, ...]
    qualities: Tuple[float, ...]
    early_exit_score: float


def working_resolution(width: int, height: int, width_limit: int) -> Resolution:
    """
    Limit the source width, scaling the height by the same ratio.

    Args:
        width: Source width
        height: Source height
        width_limit: Maximum working width

    Returns:
        (width, height) to start the ladder from
    """
    if width <= width_limit:
        return width, height

    ratio = width_limit / width
    return width_limit, math.floor(height * ratio)


def scale_resolution(width: int, height: int, scale: float) -> Resolution:
    return math.floor(width * scale), math.floor(height * scale)


def build_resolution_ladder(width: int, height: int,
                            scales: Sequence[float],
                            min_dimension: int) -> List[Resolution]:
    """
    Geometric downscaling ladder, largest first.

    Args:
        width: Working width
        height: Working height
        scales: Scale factors in the order they should be tried
        min_dimension: Resolutions with either side below this are skipped

    Returns:
        List of (width, height) pairs
    """
    ladder = []
    for scale in scales:
        w, h = scale_resolution(width, height, scale)
        if w < min_dimension or h < min_dimension:
            continue
        ladder.append((w, h))
    return ladder


def is_large_range(target: SizeTarget, threshold: int) -> bool:
    return target.max_bytes >= threshold


def select_range_profile(target: SizeTarget, range_config: Dict[str, Any]) -> RangeProfile:
    """Pick the large or small range tables for a closed-interval target."""
    name = "large" if is_large_range(target, range_config["large_range_threshold"]) else "small"
    tables = range_config[name]
    return RangeProfile(
        name=name,
        scales=tuple(tables["scales"]),
        qualities=tuple(tables["qualities"]),
        early_exit_score=tables["early_exit_score"],
    )
