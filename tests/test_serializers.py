# Copyright (c) 2026 Huepick
# SPDX-License-Identifier: MIT

"""Tests for the runtime serializers (palette, report, history)."""

import json
from datetime import datetime, timezone

import numpy as np
import pytest

from huepick import analyze
from huepick.runtime import (
    SerializerFormat,
    history_to_output,
    palette_to_output,
    report_to_output,
)
from huepick.schema import ColorEntry, SampledColor


def _three_color_image(height=1, width=3):
    """Red / green / blue vertical stripes."""
    img = np.zeros((height, width, 3), dtype=np.uint8)
    third = width // 3
    img[:, :third] = [255, 0, 0]
    img[:, third : 2 * third] = [0, 255, 0]
    img[:, 2 * third :] = [0, 0, 255]
    return img


@pytest.fixture
def three_color_report():
    return analyze(_three_color_image(), include_hash=False)


@pytest.fixture
def history():
    return (
        SampledColor("#0a141e", datetime(2026, 10, 18, 9, 45, tzinfo=timezone.utc)),
        SampledColor("#ff0000", datetime(2026, 10, 18, 9, 44, tzinfo=timezone.utc)),
    )


# ---------------------------------------------------------------------------
# palette_to_output
# ---------------------------------------------------------------------------

class TestPaletteOutput:

    def test_json_compact(self, three_color_report):
        out = palette_to_output(three_color_report.palette)
        assert " " not in out
        data = json.loads(out)
        assert [d["hex"] for d in data] == ["#0000ff", "#00ff00", "#ff0000"]
        assert all(d["percentage"] == 33.33 for d in data)

    def test_json_pretty(self, three_color_report):
        out = palette_to_output(three_color_report.palette, format=SerializerFormat.JSON_PRETTY)
        assert "\n" in out
        assert len(json.loads(out)) == 3

    def test_natural(self):
        palette = (ColorEntry("#00ff00", 50.0), ColorEntry("#ff0000", 50.0))
        out = palette_to_output(palette, format=SerializerFormat.NATURAL)
        assert out == "1. #00ff00  50.00%\n2. #ff0000  50.00%"

    def test_precision(self):
        palette = (ColorEntry("#123456", 100.0 / 3),)
        out = palette_to_output(palette, precision=4)
        assert json.loads(out)[0]["percentage"] == 33.3333

    def test_empty(self):
        assert palette_to_output(()) == "[]"


# ---------------------------------------------------------------------------
# report_to_output
# ---------------------------------------------------------------------------

class TestReportOutput:

    def test_json(self, three_color_report):
        data = json.loads(report_to_output(three_color_report))
        assert data["width"] == 3
        assert data["height"] == 1
        assert data["distinct_colors"] == 3
        assert len(data["palette"]) == 3
        assert "image_hash" not in data

    def test_json_includes_hash(self):
        report = analyze(_three_color_image())
        data = json.loads(report_to_output(report))
        assert data["image_hash"].startswith("sha256:")

    def test_natural(self, three_color_report):
        out = report_to_output(three_color_report, format=SerializerFormat.NATURAL)
        lines = out.splitlines()
        assert lines[0] == "Palette (3x1, 3 distinct colors):"
        assert lines[1] == "1. #0000ff  33.33%"

    def test_natural_empty(self):
        report = analyze(np.zeros((0, 0, 3), dtype=np.uint8), include_hash=False)
        out = report_to_output(report, format=SerializerFormat.NATURAL)
        assert out == "Palette (0x0, 0 distinct colors):\n(empty image)"

    def test_to_text_matches_natural(self, three_color_report):
        assert three_color_report.to_text() == report_to_output(
            three_color_report, format=SerializerFormat.NATURAL
        )


# ---------------------------------------------------------------------------
# history_to_output
# ---------------------------------------------------------------------------

class TestHistoryOutput:

    def test_json_keeps_order(self, history):
        data = json.loads(history_to_output(history))
        assert [d["hex"] for d in data] == ["#0a141e", "#ff0000"]
        assert data[0]["captured_at"] == "2026-10-18T09:45:00+00:00"

    def test_natural(self, history):
        out = history_to_output(history, format=SerializerFormat.NATURAL)
        assert out.splitlines()[1] == "#ff0000  2026-10-18T09:44:00+00:00"
