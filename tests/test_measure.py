# Copyright (c) 2026 Huepick
# SPDX-License-Identifier: MIT

"""Integration tests for the analyze() entry point."""

import io

import numpy as np
import pytest
from PIL import Image

from huepick import ColorReport, DecodeError, PixelBuffer, analyze


def _solid_image(r, g, b, height=10, width=10):
    """Create a solid-color image."""
    return np.full((height, width, 3), [r, g, b], dtype=np.uint8)


def _two_tone_image(rgb1, rgb2, height=10, width=20):
    """Create an image that is half one color, half another."""
    img = np.zeros((height, width, 3), dtype=np.uint8)
    img[:, :width // 2] = rgb1
    img[:, width // 2:] = rgb2
    return img


def _png_bytes(pixels):
    out = io.BytesIO()
    Image.fromarray(pixels).save(out, format="PNG")
    return out.getvalue()


class TestAnalyzeBasic:

    def test_solid_color(self):
        report = analyze(_solid_image(255, 0, 0), include_hash=False)
        assert isinstance(report, ColorReport)
        assert report.distinct_colors == 1
        assert report.dominant.hex == "#ff0000"
        assert report.dominant.percentage == 100.0

    def test_end_to_end_two_pixels(self):
        pixels = np.array([[[255, 0, 0], [0, 255, 0]]], dtype=np.uint8)
        report = analyze(_png_bytes(pixels), include_hash=False)
        assert [e.to_dict() for e in report.palette] == [
            {"hex": "#00ff00", "percentage": 50.0, "count": 1},
            {"hex": "#ff0000", "percentage": 50.0, "count": 1},
        ]
        assert report.format == "PNG"

    def test_two_tone(self):
        report = analyze(_two_tone_image([200, 50, 50], [50, 50, 200]), include_hash=False)
        assert report.hexes == ("#3232c8", "#c83232")
        assert all(e.percentage == 50.0 for e in report.palette)

    def test_limit(self):
        rng = np.random.default_rng(3)
        pixels = rng.integers(0, 256, (20, 20, 3), dtype=np.uint8)
        report = analyze(pixels, limit=4, include_hash=False)
        assert len(report.palette) == 4
        assert report.distinct_colors > 4

    def test_distinct_colors_counts_whole_image(self):
        pixels = _two_tone_image([200, 50, 50], [50, 50, 200])
        assert analyze(pixels, limit=1, include_hash=False).distinct_colors == 2

    def test_default_limit(self):
        rng = np.random.default_rng(3)
        pixels = rng.integers(0, 256, (20, 20, 3), dtype=np.uint8)
        assert len(analyze(pixels).palette) == 6

    def test_empty_buffer(self):
        report = analyze(PixelBuffer.empty(), include_hash=False)
        assert report.palette == ()
        assert report.distinct_colors == 0
        assert report.dominant is None


class TestAnalyzeDeterminism:

    def test_same_input_same_output(self):
        rng = np.random.default_rng(11)
        values = np.array([0, 128, 255], dtype=np.uint8)
        pixels = rng.choice(values, size=(30, 30, 3))
        assert analyze(pixels) == analyze(pixels)


class TestHash:

    def test_hash_included(self):
        report = analyze(_solid_image(128, 128, 128))
        assert report.image_hash is not None
        assert report.image_hash.startswith("sha256:")
        assert len(report.image_hash) == len("sha256:") + 16

    def test_hash_excluded(self):
        report = analyze(_solid_image(128, 128, 128), include_hash=False)
        assert report.image_hash is None

    def test_hash_tracks_pixels(self):
        a = analyze(_solid_image(1, 1, 1))
        b = analyze(_solid_image(1, 1, 2))
        assert a.image_hash != b.image_hash


class TestInputs:

    def test_file_path(self, tmp_path):
        path = tmp_path / "solid.png"
        path.write_bytes(_png_bytes(_solid_image(0, 0, 255)))
        report = analyze(str(path), include_hash=False)
        assert report.dominant.hex == "#0000ff"
        assert report.format == "PNG"

    def test_buffer_has_no_format(self):
        buffer = PixelBuffer.from_array(_solid_image(0, 0, 0))
        assert analyze(buffer).format is None

    def test_declared_format_checked(self):
        with pytest.raises(DecodeError):
            analyze(_png_bytes(_solid_image(0, 0, 0)), format="gif")


class TestInputValidation:

    def test_invalid_shape_raises(self):
        pixels = np.zeros((10, 10), dtype=np.uint8)
        with pytest.raises(ValueError, match=r"Expected \(H, W, 3\)"):
            analyze(pixels)

    def test_invalid_dtype_raises(self):
        pixels = np.zeros((10, 10, 3), dtype=np.float32)
        with pytest.raises(ValueError, match="Expected uint8"):
            analyze(pixels)

    def test_invalid_type_raises(self):
        with pytest.raises(TypeError, match="Expected bytes, file path"):
            analyze(42)

    def test_negative_limit_raises(self):
        with pytest.raises(ValueError, match="limit"):
            analyze(_solid_image(0, 0, 0), limit=-2)

    def test_garbage_bytes_raise_decode_error(self):
        with pytest.raises(DecodeError):
            analyze(b"definitely not an image")
