"""Utility modules for image handling and visualization."""

from .image_utils import (
    bytes_to_image,
    resize_image,
    image_to_bytes,
    replace_extension,
    format_size
)

__all__ = [
    'bytes_to_image',
    'resize_image',
    'image_to_bytes',
    'replace_extension',
    'format_size'
]
