"""
Binary search over JPEG quality at a fixed resolution.

Assumes encoded size does not decrease as quality rises. The assumption is
not checked; a non-monotonic encoder can lead the search away from the range.
"""

import logging
from typing import Any, Callable, Dict, Optional

from compression.models import EncodeError


logger = logging.getLogger(__name__)

EncodeFn = Callable[[int, int, float], bytes]


def binary_search_quality(encode: EncodeFn,
                          width: int, height: int,
                          min_bytes: int, max_bytes: int,
                          settings: Dict[str, Any]) -> Optional[bytes]:
    """
    Bisect quality to land inside [min_bytes, max_bytes].

    In-range results are recorded and the search keeps pushing quality up to
    find a larger in-range result.

    Args:
        encode: Callable (width, height, quality) -> bytes
        width: Fixed output width
        height: Fixed output height
        min_bytes: Lower bound of the target
        max_bytes: Upper bound of the target
        settings: The ``refiner`` config table

    Returns:
        Last in-range buffer found, or None
    """
    low = settings["low_quality"]
    high = settings["high_quality"]
    max_iterations = settings["max_iterations"]
    min_gap = settings["min_gap"]

    best = None
    iterations = 0

    while iterations < max_iterations and high - low > min_gap:
        mid = (low + high) / 2

        try:
            data = encode(width, height, mid)
        except EncodeError as exc:
            logger.warning("Binary search stopped at quality %.3f: %s", mid, exc)
            break

        size = len(data)
        if min_bytes <= size <= max_bytes:
            best = data
            low = mid
        elif size > max_bytes:
            high = mid
        else:
            low = mid

        logger.debug("Binary search step %d: q=%.3f size=%d window=[%.3f, %.3f]",
                     iterations + 1, mid, size, low, high)
        iterations += 1

    return best
