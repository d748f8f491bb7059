"""
Sequential batch compression with progress reporting, plus ZIP packaging
and a plain-text report of the results.
"""

import io
import logging
import os
import zipfile
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from compression.models import SizeTarget
from compression.size_fitter import SizeFitCompressor
from utils.image_utils import format_size


logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class BatchItemResult:
    """Outcome for one file of a batch."""
    filename: str
    output_filename: str
    output_bytes: bytes
    original_size: int
    reencoded: bool
    error: Optional[str] = None

    @property
    def compressed_size(self) -> int:
        return len(self.output_bytes)

    @property
    def saved_percent(self) -> float:
        if self.original_size == 0:
            return 0.0
        return (self.original_size - self.compressed_size) / self.original_size * 100

    def in_target(self, target: SizeTarget) -> bool:
        return target.contains(self.compressed_size)


def compress_batch(files: Iterable[Tuple[str, bytes]],
                   target: SizeTarget,
                   compressor: Optional[SizeFitCompressor] = None,
                   progress: Optional[ProgressCallback] = None,
                   width_limit: Optional[int] = None) -> List[BatchItemResult]:
    """
    Compress files one at a time, in order.

    A file that cannot be processed, for whatever reason, is passed through
    unchanged with the error recorded; the batch always runs to the end.

    Args:
        files: (filename, bytes) pairs
        target: Size target applied to every file
        compressor: Compressor to use (default: SizeFitCompressor())
        progress: Called as progress(index, total) after each file, 1-based
        width_limit: Maximum working width (default from config)

    Returns:
        One BatchItemResult per input file, in input order
    """
    if compressor is None:
        compressor = SizeFitCompressor()

    items = list(files)
    total = len(items)
    results = []

    for index, (filename, data) in enumerate(items, start=1):
        logger.info("Processing %d/%d - %s", index, total, filename)
        try:
            result = compressor.compress(data, filename, target, width_limit)
            results.append(BatchItemResult(
                filename=filename,
                output_filename=result.output_filename,
                output_bytes=result.output_bytes,
                original_size=result.original_size,
                reencoded=result.reencoded,
            ))
        except Exception as exc:
            logger.exception("Error compressing %s", filename)
            results.append(BatchItemResult(
                filename=filename,
                output_filename=filename,
                output_bytes=data,
                original_size=len(data),
                reencoded=False,
                error=str(exc) or exc.__class__.__name__,
            ))

        if progress is not None:
            progress(index, total)

    return results


def _unique_name(name: str, used: set) -> str:
    if name not in used:
        return name
    stem, ext = os.path.splitext(name)
    counter = 1
    while f"{stem}_{counter}{ext}" in used:
        counter += 1
    return f"{stem}_{counter}{ext}"


def create_download_package(results: List[BatchItemResult]) -> bytes:
    """Create a ZIP archive holding every output file."""
    buffer = io.BytesIO()
    used = set()

    with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as zf:
        for result in results:
            name = _unique_name(result.output_filename, used)
            used.add(name)
            zf.writestr(name, result.output_bytes)

    buffer.seek(0)
    return buffer.getvalue()


def generate_report(results: List[BatchItemResult], target: SizeTarget) -> str:
    """Generate a text report of a batch run."""
    lines = [
        "=" * 60,
        "IMAGE SIZE COMPRESSION REPORT",
        "=" * 60,
        "",
        f"Target: {target.label}",
        f"Images: {len(results)}",
        "-" * 40,
    ]

    for result in results:
        if result.error:
            status = "!"
        elif result.in_target(target):
            status = "✓"
        else:
            status = "✗"
        lines.append(f"\n{status} {result.output_filename}")
        lines.append(f"  Original: {format_size(result.original_size)}")
        lines.append(f"  Compressed: {format_size(result.compressed_size)}")
        lines.append(f"  Saved: {result.saved_percent:.1f}%")
        if not result.reencoded:
            lines.append("  Kept original file")
        if result.error:
            lines.append(f"  Error: {result.error}")

    total_before = sum(r.original_size for r in results)
    total_after = sum(r.compressed_size for r in results)
    lines.extend([
        "",
        "-" * 40,
        f"Total: {format_size(total_before)} -> {format_size(total_after)}",
        "=" * 60,
    ])

    return "\n".join(lines)
