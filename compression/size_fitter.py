"""
Fit an image into a byte-size budget by searching over resolution and
JPEG quality. Entry point for single images.
"""

import functools
import logging
from typing import Any, Callable, Dict, Optional, Tuple

from config import get_default_config, merge_configs
from compression.jpeg_compressor import JPEGEncoder, decode_image
from compression.ladder import working_resolution
from compression.models import CompressionResult, SizeTarget, SourceImage
from compression.strategies import compress_to_range, compress_under_target
from utils.image_utils import replace_extension


logger = logging.getLogger(__name__)

Decoder = Callable[[bytes], Tuple[Any, int, int]]


class SizeFitCompressor:
    """
    Compress images to a size target.

    Features:
    - Short-circuit for inputs that already satisfy the target
    - First-fit ladder search for "under X" targets
    - Scored ladder search with binary search fallback for "min-max" targets
    - Original input returned when nothing fits
    """

    def __init__(self, encoder: Optional[Any] = None,
                 decoder: Optional[Decoder] = None,
                 config: Optional[Dict[str, Any]] = None):
        """
        Initialize compressor.

        Args:
            encoder: Object with ``encode(pixels, width, height, quality)``
                (default: JPEGEncoder)
            decoder: Callable ``bytes -> (pixels, width, height)``
                (default: decode_image)
            config: Overrides merged into the default configuration
        """
        self.encoder = encoder if encoder is not None else JPEGEncoder()
        self.decoder = decoder if decoder is not None else decode_image
        self.config = merge_configs(get_default_config(), config or {})

    @property
    def extension(self) -> str:
        return self.config["codec"]["extension"]

    @property
    def mime(self) -> str:
        return self.config["codec"]["mime"]

    def decode(self, data: bytes, filename: str) -> SourceImage:
        """Decode raw bytes; DecodeError propagates to the caller."""
        pixels, width, height = self.decoder(data)
        return SourceImage(data=data, filename=filename, pixels=pixels,
                           width=width, height=height)

    def compress(self, data: bytes, filename: str, target: SizeTarget,
                 width_limit: Optional[int] = None) -> CompressionResult:
        """
        Compress raw image bytes to the target.

        Args:
            data: Original file bytes
            filename: Original file name
            target: Size target
            width_limit: Maximum working width (default from config)

        Returns:
            CompressionResult; unchanged input when it already fits or nothing fits
        """
        if target.contains(len(data)):
            logger.debug("%s already within %s", filename, target.label)
            return self._unchanged(data, filename)

        source = self.decode(data, filename)
        return self.compress_source(source, target, width_limit)

    def compress_source(self, source: SourceImage, target: SizeTarget,
                        width_limit: Optional[int] = None) -> CompressionResult:
        """Run the search on an already decoded source."""
        if target.contains(source.original_size):
            return self._unchanged(source.data, source.filename)

        if width_limit is None:
            width_limit = self.config["width_limit"]

        width, height = working_resolution(source.width, source.height, width_limit)
        encode = functools.partial(self.encoder.encode, source.pixels)

        if target.is_upper_bound:
            buffer = compress_under_target(encode, width, height, target, self.config)
        else:
            buffer = compress_to_range(encode, width, height, target, self.config)

        if buffer is None:
            logger.warning("%s: no candidate satisfied %s, keeping original",
                           source.filename, target.label)
            return self._unchanged(source.data, source.filename)

        logger.info("%s: %d -> %d bytes (%s)", source.filename,
                    source.original_size, len(buffer), target.label)
        return CompressionResult(
            output_bytes=buffer,
            output_filename=replace_extension(source.filename, self.extension),
            original_size=source.original_size,
            reencoded=True,
        )

    @staticmethod
    def _unchanged(data: bytes, filename: str) -> CompressionResult:
        return CompressionResult(output_bytes=data, output_filename=filename,
                                 original_size=len(data), reencoded=False)


def compress_to_size(data: bytes, filename: str, target: SizeTarget,
                     width_limit: int = 1200) -> CompressionResult:
    """
    Convenience function to compress image bytes to a size target.

    Args:
        data: Original file bytes
        filename: Original file name
        target: Size target
        width_limit: Maximum working width

    Returns:
        CompressionResult
    """
    compressor = SizeFitCompressor()
    return compressor.compress(data, filename, target, width_limit)
