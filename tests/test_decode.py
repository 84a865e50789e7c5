# Copyright (c) 2026 Huepick
# SPDX-License-Identifier: MIT

"""Tests for the PixelBuffer decoder."""

import io

import numpy as np
import pytest
from PIL import Image, ImageCms

from huepick.errors import DecodeError
from huepick.measure.decode import (
    decode,
    decode_file,
    decode_with_format,
    normalize_format,
    sniff_format,
)


def _encode(pixels, fmt, **save_kwargs):
    """Encode a (H, W, 3|4) uint8 array with Pillow."""
    img = Image.fromarray(np.asarray(pixels, dtype=np.uint8))
    out = io.BytesIO()
    img.save(out, format=fmt, **save_kwargs)
    return out.getvalue()


def _two_tone(height=4, width=6):
    img = np.zeros((height, width, 3), dtype=np.uint8)
    img[:, : width // 2] = [255, 0, 0]
    img[:, width // 2 :] = [0, 0, 255]
    return img


class TestSniff:

    def test_png(self):
        assert sniff_format(_encode(_two_tone(), "PNG")) == "PNG"

    def test_jpeg(self):
        assert sniff_format(_encode(_two_tone(), "JPEG")) == "JPEG"

    def test_gif(self):
        assert sniff_format(_encode(_two_tone(), "GIF")) == "GIF"

    def test_unknown(self):
        assert sniff_format(b"%PDF-1.7 ...") is None

    def test_short_input(self):
        assert sniff_format(b"\x89P") is None


class TestNormalizeFormat:

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("PNG", "PNG"),
            ("image/png", "PNG"),
            ("jpg", "JPEG"),
            (".JPEG", "JPEG"),
            ("image/jpeg", "JPEG"),
            ("gif", "GIF"),
        ],
    )
    def test_aliases(self, name, expected):
        assert normalize_format(name) == expected

    def test_unsupported(self):
        with pytest.raises(DecodeError, match="Unsupported"):
            normalize_format("image/webp")


class TestDecodePNG:

    def test_exact_pixels(self):
        pixels = _two_tone()
        buffer = decode(_encode(pixels, "PNG"))
        assert (buffer.width, buffer.height) == (6, 4)
        np.testing.assert_array_equal(buffer.to_array()[..., :3], pixels)
        assert (buffer.samples[:, 3] == 255).all()

    def test_alpha_preserved(self):
        pixels = np.zeros((2, 2, 4), dtype=np.uint8)
        pixels[0, 0] = [10, 20, 30, 0]
        buffer = decode(_encode(pixels, "PNG"))
        assert buffer.pixel(0, 0) == (10, 20, 30, 0)

    def test_grayscale_converted(self):
        gray = Image.new("L", (3, 2), color=128)
        out = io.BytesIO()
        gray.save(out, format="PNG")
        buffer = decode(out.getvalue())
        assert buffer.pixel(2, 1) == (128, 128, 128, 255)

    def test_declared_format_matches(self):
        buffer, fmt = decode_with_format(_encode(_two_tone(), "PNG"), format="image/png")
        assert fmt == "PNG"
        assert buffer.area == 24

    def test_accepts_bytearray(self):
        buffer = decode(bytearray(_encode(_two_tone(), "PNG")))
        assert buffer.area == 24

    def test_srgb_icc_profile_applied(self):
        srgb = ImageCms.ImageCmsProfile(ImageCms.createProfile("sRGB")).tobytes()
        pixels = _two_tone()
        buffer = decode(_encode(pixels, "PNG", icc_profile=srgb))
        assert (buffer.width, buffer.height) == (6, 4)
        np.testing.assert_allclose(
            buffer.to_array()[..., :3].astype(int), pixels.astype(int), atol=1
        )
        assert (buffer.samples[:, 3] == 255).all()

    def test_unusable_icc_profile_ignored(self):
        pixels = _two_tone()
        buffer = decode(_encode(pixels, "PNG", icc_profile=b"not a profile"))
        np.testing.assert_array_equal(buffer.to_array()[..., :3], pixels)


class TestDecodeJPEGAndGIF:

    def test_jpeg_dimensions(self):
        buffer = decode(_encode(_two_tone(16, 16), "JPEG", quality=95))
        assert (buffer.width, buffer.height) == (16, 16)
        r, g, b, a = buffer.pixel(0, 0)
        assert r > 200 and b < 60
        assert a == 255

    def test_gif_first_frame_only(self):
        first = Image.new("RGB", (4, 4), (255, 0, 0))
        second = Image.new("RGB", (4, 4), (0, 255, 0))
        out = io.BytesIO()
        first.save(out, format="GIF", save_all=True, append_images=[second])
        buffer = decode(out.getvalue())
        assert buffer.pixel(0, 0)[:3] == (255, 0, 0)


class TestRejection:

    def test_empty(self):
        with pytest.raises(DecodeError, match="empty"):
            decode(b"")

    def test_not_an_image(self):
        with pytest.raises(DecodeError, match="signature"):
            decode(b"hello, world")

    def test_unsupported_format(self):
        with pytest.raises(DecodeError, match="signature"):
            decode(_encode(_two_tone(), "BMP"))

    def test_declared_format_mismatch(self):
        with pytest.raises(DecodeError, match="does not match"):
            decode(_encode(_two_tone(), "PNG"), format="image/jpeg")

    def test_truncated_png(self):
        data = _encode(np.random.default_rng(0).integers(0, 256, (64, 64, 3), dtype=np.uint8), "PNG")
        with pytest.raises(DecodeError):
            decode(data[: len(data) // 2])

    def test_corrupt_after_signature(self):
        with pytest.raises(DecodeError):
            decode(b"\x89PNG\r\n\x1a\n" + b"\x00" * 64)

    def test_wrong_type(self):
        with pytest.raises(TypeError, match="Expected bytes"):
            decode("not bytes")

    def test_decode_error_chained(self):
        with pytest.raises(DecodeError) as excinfo:
            decode(b"GIF89a" + b"\xff" * 16)
        assert excinfo.value.__cause__ is not None


class TestDecodeFile:

    def test_reads_file(self, tmp_path):
        path = tmp_path / "two_tone.png"
        path.write_bytes(_encode(_two_tone(), "PNG"))
        assert decode_file(path).area == 24

    def test_suffix_mismatch_rejected(self, tmp_path):
        path = tmp_path / "actually_png.jpg"
        path.write_bytes(_encode(_two_tone(), "PNG"))
        with pytest.raises(DecodeError, match="does not match"):
            decode_file(path)

    def test_unknown_suffix_uses_sniffing(self, tmp_path):
        path = tmp_path / "upload.bin"
        path.write_bytes(_encode(_two_tone(), "GIF"))
        assert decode_file(path).area == 24

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            decode_file(tmp_path / "missing.png")
