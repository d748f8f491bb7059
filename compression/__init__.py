"""Size-targeted image compression."""

from .models import (
    SizeTarget,
    Candidate,
    SourceImage,
    CompressionResult,
    CompressionError,
    DecodeError,
    EncodeError,
)
from .jpeg_compressor import JPEGEncoder, decode_image
from .size_fitter import SizeFitCompressor, compress_to_size
from .batch import BatchItemResult, compress_batch, create_download_package, generate_report

__all__ = [
    'SizeTarget',
    'Candidate',
    'SourceImage',
    'CompressionResult',
    'CompressionError',
    'DecodeError',
    'EncodeError',
    'JPEGEncoder',
    'decode_image',
    'SizeFitCompressor',
    'compress_to_size',
    'BatchItemResult',
    'compress_batch',
    'create_download_package',
    'generate_report',
]
