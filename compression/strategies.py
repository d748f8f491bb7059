"""
Search strategies for fitting an encoded image into a size target.

- Upper-bound ("under X"): first fit, highest resolution and quality first.
- Closed interval ("min-max"): score every attempt, keep the best, and fall
  back to a quality bisection for large ranges when the ladder comes up short.

Both strategies talk to the encoder through a callable
``encode(width, height, quality) -> bytes`` bound to one decoded source.
"""

import logging
import math
from typing import Any, Callable, Dict, Optional, Sequence

from compression.ladder import build_resolution_ladder, select_range_profile
from compression.models import Candidate, EncodeError, SizeTarget
from compression.refiner import binary_search_quality
from compression.scoring import SweepState, score_attempt


logger = logging.getLogger(__name__)

EncodeFn = Callable[[int, int, float], bytes]


def attempt_encode(encode: EncodeFn, candidate: Candidate) -> Optional[bytes]:
    """Run one encode, returning None instead of raising on failure."""
    try:
        return encode(candidate.width, candidate.height, candidate.quality)
    except EncodeError as exc:
        logger.warning("Compression attempt %dx%d q=%.2f failed: %s",
                       candidate.width, candidate.height, candidate.quality, exc)
        return None


def compress_under_target(encode: EncodeFn, width: int, height: int,
                          target: SizeTarget,
                          config: Dict[str, Any]) -> Optional[bytes]:
    """
    Find the first encoding no larger than target.max_bytes.

    Args:
        encode: Bound encoder callable
        width: Working width
        height: Working height
        target: Upper-bound target
        config: Full configuration (uses ``under_target``)

    Returns:
        Encoded bytes, or None if even the fallback encode failed
    """
    settings = config["under_target"]
    ladder = build_resolution_ladder(width, height, settings["scales"], settings["min_dimension"])

    for w, h in ladder:
        for quality in settings["qualities"]:
            data = attempt_encode(encode, Candidate(w, h, quality))
            if data is not None and len(data) <= target.max_bytes:
                logger.info("Found %d bytes at %dx%d q=%.2f (limit %d)",
                            len(data), w, h, quality, target.max_bytes)
                return data

    # Nothing fit: one aggressive encode, accepted whatever its size
    fallback = settings["fallback"]
    fallback_w = max(fallback["min_dimension"], math.floor(width * fallback["scale"]))
    fallback_h = max(fallback["min_dimension"], math.floor(height * fallback["scale"]))
    data = attempt_encode(encode, Candidate(fallback_w, fallback_h, fallback["quality"]))
    if data is None:
        logger.warning("Fallback compression failed")
    else:
        logger.info("Using fallback encode: %d bytes at %dx%d", len(data), fallback_w, fallback_h)
    return data


def sweep_qualities(encode: EncodeFn, width: int, height: int,
                    qualities: Sequence[float],
                    target: SizeTarget,
                    scoring: Dict[str, Any],
                    early_exit_score: float,
                    state: SweepState) -> SweepState:
    """
    Try each quality at one resolution, folding scored attempts into state.

    Stops early once an attempt scores at least early_exit_score.
    """
    for quality in qualities:
        data = attempt_encode(encode, Candidate(width, height, quality))
        if data is None:
            continue

        score = score_attempt(len(data), target.min_bytes, target.max_bytes, scoring)
        if score is None:
            continue

        state = state.offer(score, data)

        if score >= early_exit_score:
            logger.info("Found good match: %.2fKB at %dx%d quality %.2f",
                        len(data) / 1024, width, height, quality)
            break

    return state


def compress_to_range(encode: EncodeFn, width: int, height: int,
                      target: SizeTarget,
                      config: Dict[str, Any]) -> Optional[bytes]:
    """
    Find the highest scoring encoding for a closed interval target.

    Args:
        encode: Bound encoder callable
        width: Working width
        height: Working height
        target: Target with min_bytes > 0
        config: Full configuration (uses ``range_fit`` and ``refiner``)

    Returns:
        Best encoded bytes (possibly under min_bytes), or None
    """
    range_config = config["range_fit"]
    profile = select_range_profile(target, range_config)
    ladder = build_resolution_ladder(width, height, profile.scales, range_config["min_dimension"])

    logger.debug("Range %d-%d uses %s profile (%d resolutions)",
                 target.min_bytes, target.max_bytes, profile.name, len(ladder))

    state = SweepState()
    for w, h in ladder:
        state = sweep_qualities(encode, w, h, profile.qualities, target,
                                range_config["scoring"], profile.early_exit_score, state)
        if state.best_score >= profile.early_exit_score:
            break

    if profile.name == "large" and state.best_score < range_config["refine_below_score"]:
        logger.info("Trying binary search approach for large range...")
        refined = binary_search_quality(encode, width, height,
                                        target.min_bytes, target.max_bytes,
                                        config["refiner"])
        if refined is not None:
            state = SweepState(state.best_score, refined)

    if state.found:
        logger.info("Final result: %.2fKB (target: %g-%gKB)",
                    len(state.best_buffer) / 1024,
                    target.min_bytes / 1024, target.max_bytes / 1024)
    return state.best_buffer
