import cv2
import numpy as np
import pytest

from compression import DecodeError, JPEGEncoder, SizeFitCompressor, SizeTarget, compress_to_size


class RecordingEncoder(JPEGEncoder):
    def __init__(self):
        self.calls = []

    def encode(self, pixels, width, height, quality):
        self.calls.append((width, height, quality))
        return super().encode(pixels, width, height, quality)


class TestShortCircuit:
    def test_upper_bound_input_returned_unchanged(self, make_compressor):
        compressor, encoder, decoder = make_compressor(lambda w, h, q: 1)
        data = b"\x01" * 1000
        result = compressor.compress(data, "photo.png", SizeTarget(0, 2000))

        assert result.output_bytes is data
        assert result.output_filename == "photo.png"
        assert not result.reencoded
        assert encoder.calls == []
        assert decoder.calls == 0

    def test_in_range_input_returned_unchanged(self, make_compressor):
        compressor, encoder, decoder = make_compressor(lambda w, h, q: 1)
        data = b"\x01" * 1500
        result = compressor.compress(data, "photo.png", SizeTarget(1000, 2000))

        assert result.output_bytes is data
        assert encoder.calls == []
        assert decoder.calls == 0

    def test_undersized_input_is_reencoded_for_ranges(self, make_compressor):
        compressor, encoder, decoder = make_compressor(lambda w, h, q: 1500)
        result = compressor.compress(b"\x01" * 500, "photo.png", SizeTarget(1000, 2000))

        assert result.reencoded
        assert len(result.output_bytes) == 1500
        assert decoder.calls == 1


class TestDispatch:
    def test_working_resolution_applied(self, make_compressor):
        compressor, encoder, _ = make_compressor(lambda w, h, q: 10, width=3000, height=2000)
        compressor.compress(b"\x01" * 5000, "photo.png", SizeTarget(0, 1000))
        assert encoder.calls[0] == (1200, 800, 0.9)

    def test_width_limit_argument(self, make_compressor):
        compressor, encoder, _ = make_compressor(lambda w, h, q: 10, width=3000, height=2000)
        compressor.compress(b"\x01" * 5000, "photo.png", SizeTarget(0, 1000), width_limit=600)
        assert encoder.calls[0] == (600, 400, 0.9)

    def test_width_limit_from_config(self, make_compressor):
        compressor, encoder, _ = make_compressor(lambda w, h, q: 10, width=3000, height=2000,
                                                 config={"width_limit": 900})
        compressor.compress(b"\x01" * 5000, "photo.png", SizeTarget(0, 1000))
        assert encoder.calls[0] == (900, 600, 0.9)

    def test_range_target_uses_range_search(self, make_compressor):
        compressor, encoder, _ = make_compressor(lambda w, h, q: q * w * h, width=1000, height=1000)
        target = SizeTarget(600000, 900000)
        result = compressor.compress(b"\x01" * 2000000, "big.jpeg", target)

        assert encoder.calls[0] == (1000, 1000, 0.98)
        assert target.contains(result.compressed_size)

    def test_extension_replaced_when_reencoded(self, make_compressor):
        compressor, _, _ = make_compressor(lambda w, h, q: 10)
        result = compressor.compress(b"\x01" * 5000, "holiday.photo.png", SizeTarget(0, 1000))
        assert result.reencoded
        assert result.output_filename == "holiday.photo.jpg"
        assert result.original_size == 5000

    def test_codec_settings_come_from_config(self, make_compressor):
        compressor, _, _ = make_compressor(lambda w, h, q: 10)
        assert compressor.extension == ".jpg"
        assert compressor.mime == "image/jpeg"

        compressor, _, _ = make_compressor(lambda w, h, q: 10,
                                           config={"codec": {"extension": ".jpeg"}})
        assert compressor.mime == "image/jpeg"
        result = compressor.compress(b"\x01" * 5000, "photo.png", SizeTarget(0, 1000))
        assert result.output_filename == "photo.jpeg"


class TestFailures:
    def test_everything_failing_returns_original(self, make_compressor):
        compressor, encoder, _ = make_compressor(lambda w, h, q: 10, fail=lambda w, h, q: True)
        data = b"\x01" * 5000
        result = compressor.compress(data, "photo.png", SizeTarget(0, 1000))

        assert result.output_bytes is data
        assert result.output_filename == "photo.png"
        assert not result.reencoded
        assert len(encoder.calls) > 0

    def test_range_search_exhausted_returns_original(self, make_compressor):
        compressor, _, _ = make_compressor(lambda w, h, q: 10 ** 7)
        data = b"\x01" * 5000
        result = compressor.compress(data, "photo.png", SizeTarget(102400, 204800))
        assert result.output_bytes is data
        assert not result.reencoded

    def test_decode_failure_propagates(self, make_compressor):
        compressor, encoder, _ = make_compressor(lambda w, h, q: 10)
        with pytest.raises(DecodeError):
            compressor.compress(b"bad" * 1000, "photo.png", SizeTarget(0, 1000))
        assert encoder.calls == []


class TestEndToEnd:
    def test_under_200kb(self, photo_like):
        image = photo_like(3000, 2000)
        ok, buffer = cv2.imencode(".jpg", image, [cv2.IMWRITE_JPEG_QUALITY, 98])
        assert ok
        data = buffer.tobytes()
        assert len(data) > 204800

        encoder = RecordingEncoder()
        compressor = SizeFitCompressor(encoder=encoder)
        result = compressor.compress(data, "IMG_0001.jpeg", SizeTarget(0, 204800))

        assert encoder.calls[0] == (1200, 800, 0.9)
        assert result.reencoded
        assert result.output_filename == "IMG_0001.jpg"
        assert result.compressed_size <= 204800

        decoded = cv2.imdecode(np.frombuffer(result.output_bytes, np.uint8), cv2.IMREAD_COLOR)
        height, width = decoded.shape[:2]
        assert width <= 1200 and height <= 800

    def test_range_result_never_exceeds_max(self, photo_like):
        image = photo_like(1600, 1200, seed=1)
        ok, buffer = cv2.imencode(".png", image)
        assert ok

        target = SizeTarget(100 * 1024, 200 * 1024)
        result = compress_to_size(buffer.tobytes(), "scan.png", target)

        if result.reencoded:
            assert result.compressed_size <= target.max_bytes
            assert result.output_filename == "scan.jpg"

    def test_invalid_bytes_raise_decode_error(self):
        with pytest.raises(DecodeError):
            compress_to_size(b"not an image" * 100, "x.png", SizeTarget(0, 10))
