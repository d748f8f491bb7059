"""
JPEG encode/decode collaborators for the size-fitting search.
The encoder is the black-box oracle: geometry + quality in, bytes out.
"""

import logging
from typing import Any, Tuple

import cv2
import numpy as np

from compression.models import DecodeError, EncodeError
from utils.image_utils import bytes_to_image, image_to_bytes, resize_image


logger = logging.getLogger(__name__)


def to_jpeg_quality(quality: float) -> int:
    """Map a (0, 1] quality to the 1-100 scale OpenCV expects."""
    return max(1, min(100, int(round(quality * 100))))


def decode_image(data: bytes) -> Tuple[np.ndarray, int, int]:
    """
    Decode raw image bytes.

    Args:
        data: Encoded image bytes (any format OpenCV reads)

    Returns:
        Tuple of (BGR pixels, width, height)

    Raises:
        DecodeError: if the bytes are not a readable image
    """
    try:
        image = bytes_to_image(data)
    except (ValueError, cv2.error) as exc:
        raise DecodeError(str(exc)) from exc

    height, width = image.shape[:2]
    return image, width, height


class JPEGEncoder:
    """
    Resize-and-encode oracle.

    Each call works on a fresh resized copy, so the decoded source can be
    encoded repeatedly at different sizes and qualities.
    """

    def encode(self, pixels: Any, width: int, height: int, quality: float) -> bytes:
        """
        Encode pixels at the given size and quality.

        Args:
            pixels: BGR numpy array of the decoded source
            width: Output width in pixels
            height: Output height in pixels
            quality: JPEG quality in (0, 1]

        Returns:
            JPEG bytes

        Raises:
            EncodeError: on invalid geometry/quality or codec failure
        """
        if width < 1 or height < 1:
            raise EncodeError(f"Unsupported dimensions: {width}x{height}")
        if not 0 < quality <= 1:
            raise EncodeError(f"Unsupported quality: {quality}")

        try:
            resized = resize_image(pixels, width=width, height=height)
            data = image_to_bytes(resized, "JPEG", to_jpeg_quality(quality))
        except (ValueError, cv2.error) as exc:
            raise EncodeError(f"Encoding {width}x{height} at {quality} failed: {exc}") from exc

        logger.debug("Encoded %dx%d q=%.2f -> %d bytes", width, height, quality, len(data))
        return data
