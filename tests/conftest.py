import cv2
import numpy as np
import pytest

from compression import DecodeError, EncodeError, SizeFitCompressor


class FakeEncoder:
    """Deterministic encoder whose output length is size_fn(width, height, quality)."""

    def __init__(self, size_fn, fail=None, fill=None):
        self.size_fn = size_fn
        self.fail = fail
        self.fill = fill
        self.calls = []
        self.sizes = []

    def encode(self, pixels, width, height, quality):
        self.calls.append((width, height, quality))
        if self.fail is not None and self.fail(width, height, quality):
            raise EncodeError(f"cannot encode {width}x{height}")
        size = int(self.size_fn(width, height, quality))
        self.sizes.append(size)
        byte = self.fill(width, height, quality) if self.fill is not None else 0
        return bytes([byte]) * size


class FakeDecoder:
    """Reports fixed dimensions; bytes starting with b'bad' fail to decode."""

    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.calls = 0

    def __call__(self, data):
        self.calls += 1
        if data.startswith(b"bad"):
            raise DecodeError("Could not decode image from bytes")
        return object(), self.width, self.height


@pytest.fixture
def make_compressor():
    """Factory: (size_fn, width, height, fail=None) -> (compressor, encoder, decoder)."""
    def factory(size_fn, width=1000, height=1000, fail=None, config=None):
        encoder = FakeEncoder(size_fn, fail)
        decoder = FakeDecoder(width, height)
        compressor = SizeFitCompressor(encoder=encoder, decoder=decoder, config=config)
        return compressor, encoder, decoder
    return factory


@pytest.fixture
def bound_encoder():
    """Factory returning (encode_fn, FakeEncoder) for the strategy functions."""
    def factory(size_fn, fail=None, fill=None):
        encoder = FakeEncoder(size_fn, fail, fill)

        def encode(width, height, quality):
            return encoder.encode(None, width, height, quality)

        return encode, encoder
    return factory


@pytest.fixture
def photo_like():
    """Factory for a smooth-with-grain BGR image, so JPEG sizes behave like a photo."""
    def factory(width, height, seed=0):
        rng = np.random.default_rng(seed)
        small = rng.integers(0, 256, (max(2, height // 40), max(2, width // 40), 3), dtype=np.uint8)
        image = cv2.resize(small, (width, height), interpolation=cv2.INTER_CUBIC).astype(np.int16)
        grain = rng.integers(-20, 21, image.shape, dtype=np.int16)
        return np.clip(image + grain, 0, 255).astype(np.uint8)
    return factory
