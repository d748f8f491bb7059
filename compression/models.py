"""
Data model shared by the size-fitting search: targets, candidates,
decoded sources, results and the error types raised around them.
"""

from dataclasses import dataclass
from typing import Any

from config import KB, MB


class CompressionError(Exception):
    """Base class for compression failures."""


class DecodeError(CompressionError, ValueError):
    """Source bytes could not be decoded into pixels."""


class EncodeError(CompressionError):
    """A single encode attempt failed (unsupported geometry, codec error)."""


def _format_kb(num_bytes: int) -> str:
    if num_bytes >= MB and num_bytes % MB == 0:
        return f"{num_bytes // MB} MB"
    return f"{num_bytes / KB:g} KB"


@dataclass(frozen=True)
class SizeTarget:
    """
    Acceptable output size interval in bytes.

    A min_bytes of 0 means upper-bound-only mode ("under X").
    """
    min_bytes: int
    max_bytes: int

    def __post_init__(self):
        if self.max_bytes <= 0:
            raise ValueError(f"max_bytes must be positive, got {self.max_bytes}")
        if self.min_bytes < 0:
            raise ValueError(f"min_bytes must not be negative, got {self.min_bytes}")
        if self.min_bytes > self.max_bytes:
            raise ValueError(
                f"min_bytes ({self.min_bytes}) exceeds max_bytes ({self.max_bytes})"
            )

    @property
    def is_upper_bound(self) -> bool:
        return self.min_bytes == 0

    def contains(self, size: int) -> bool:
        """True when a payload of this size already satisfies the target."""
        if self.is_upper_bound:
            return size <= self.max_bytes
        return self.min_bytes <= size <= self.max_bytes

    @property
    def label(self) -> str:
        if self.is_upper_bound:
            return f"Under {_format_kb(self.max_bytes)}"
        return f"{_format_kb(self.min_bytes)} - {_format_kb(self.max_bytes)}"

    @classmethod
    def from_preset(cls, value: str) -> "SizeTarget":
        """
        Build a target from a preset value.

        Accepted forms:
            "1024"        -> under 1 MB
            "0-<kb>"      -> under <kb> KB
            "<min>-<max>" -> between <min> and <max> KB

        Args:
            value: Preset value string

        Returns:
            SizeTarget in bytes
        """
        value = (value or "").strip()

        if value == "1024":
            return cls(0, MB)

        parts = value.split("-")
        if len(parts) != 2:
            raise ValueError(f"Unrecognized size range: {value!r}")

        try:
            min_kb, max_kb = (int(p) for p in parts)
        except ValueError as exc:
            raise ValueError(f"Unrecognized size range: {value!r}") from exc

        return cls(min_kb * KB, max_kb * KB)


@dataclass(frozen=True)
class Candidate:
    """A (width, height, quality) triple proposed for encoding."""
    width: int
    height: int
    quality: float

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Invalid candidate size: {self.width}x{self.height}")
        if not 0 < self.quality <= 1:
            raise ValueError(f"Quality must be in (0, 1], got {self.quality}")


@dataclass(frozen=True)
class SourceImage:
    """Decoded input image. Never mutated during compression."""
    data: bytes
    filename: str
    pixels: Any
    width: int
    height: int

    @property
    def original_size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class CompressionResult:
    """Output of one compression call: re-encoded bytes or the original."""
    output_bytes: bytes
    output_filename: str
    original_size: int
    reencoded: bool

    @property
    def compressed_size(self) -> int:
        return len(self.output_bytes)
