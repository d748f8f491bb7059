"""
Common image utility functions for the size-fitting compressor.
"""

import os

import cv2
import numpy as np


def bytes_to_image(data: bytes) -> np.ndarray:
    """
    Convert bytes to image.

    Args:
        data: Image bytes

    Returns:
        BGR numpy array
    """
    if not data:
        raise ValueError("Failed to decode image from bytes: empty input")

    nparr = np.frombuffer(data, np.uint8)
    image = cv2.imdecode(nparr, cv2.IMREAD_COLOR)

    if image is None:
        raise ValueError("Failed to decode image from bytes")

    return image


def resize_image(image: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Resize image to explicit dimensions.

    Args:
        image: Input image
        width: Target width
        height: Target height

    Returns:
        Resized image (the input itself when no resize is needed)
    """
    h, w = image.shape[:2]
    if (width, height) == (w, h):
        return image

    # Choose interpolation based on scaling direction
    if width < w or height < h:
        interp = cv2.INTER_AREA
    else:
        interp = cv2.INTER_LANCZOS4

    return cv2.resize(image, (width, height), interpolation=interp)


def image_to_bytes(image: np.ndarray,
                   format: str = "JPEG",
                   quality: int = 95) -> bytes:
    """
    Convert image to bytes.

    Args:
        image: BGR numpy array
        format: Output format (JPEG, PNG)
        quality: Compression quality (1-100)

    Returns:
        Image bytes
    """
    if format.upper() == "JPEG":
        params = [cv2.IMWRITE_JPEG_QUALITY, quality]
        ext = ".jpg"
    elif format.upper() == "PNG":
        params = [cv2.IMWRITE_PNG_COMPRESSION, 9 - int(quality / 12)]
        ext = ".png"
    else:
        params = []
        ext = f".{format.lower()}"

    success, buffer = cv2.imencode(ext, image, params)
    if not success:
        raise ValueError(f"Failed to encode image as {format}")

    return buffer.tobytes()


def replace_extension(filename: str, extension: str) -> str:
    """Swap the file extension, e.g. photo.png -> photo.jpg."""
    stem, _ = os.path.splitext(filename)
    return stem + extension


def format_size(num_bytes: int) -> str:
    """Human readable size in KB with two decimals."""
    return f"{num_bytes / 1024:.2f} KB"
