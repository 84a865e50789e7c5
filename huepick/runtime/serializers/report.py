# Copyright (c) 2026 Huepick
# SPDX-License-Identifier: MIT

"""
Palette and report serializers.

Formats extracted palettes for a rendering collaborator: swatch lists,
clipboard text, or structured JSON. The palette is never modified;
percentages are only rounded for display.
"""

from __future__ import annotations

from typing import Sequence

from huepick.runtime.serializers.base import SerializerFormat, dump_json
from huepick.schema import ColorEntry, ColorReport


def palette_to_output(
    palette: Sequence[ColorEntry],
    *,
    format: SerializerFormat = SerializerFormat.JSON,
    precision: int = 2,
) -> str:
    """Serialize a ranked palette.

    Args:
        palette: Entries as returned by extract_palette().
        format: JSON, JSON_PRETTY, or NATURAL.
        precision: Decimal places for percentages.

    Returns:
        For JSON formats, a list of ``{"hex", "percentage"}`` objects.
        For NATURAL, one line per entry.

    Example (NATURAL)::

        1. #00ff00  50.00%
        2. #ff0000  50.00%
    """
    if format == SerializerFormat.NATURAL:
        return "\n".join(_palette_lines(palette, precision))
    return dump_json(_palette_data(palette, precision), format)


def report_to_output(
    report: ColorReport,
    *,
    format: SerializerFormat = SerializerFormat.JSON,
    precision: int = 2,
) -> str:
    """Serialize a ColorReport.

    Example (JSON)::

        {
          "width": 2,
          "height": 1,
          "distinct_colors": 2,
          "palette": [
            { "hex": "#00ff00", "percentage": 50.0 },
            { "hex": "#ff0000", "percentage": 50.0 }
          ]
        }
    """
    if format == SerializerFormat.NATURAL:
        noun = "color" if report.distinct_colors == 1 else "colors"
        lines = [
            f"Palette ({report.width}x{report.height}, "
            f"{report.distinct_colors} distinct {noun}):"
        ]
        if report.palette:
            lines.extend(_palette_lines(report.palette, precision))
        else:
            lines.append("(empty image)")
        return "\n".join(lines)

    data = {
        "width": report.width,
        "height": report.height,
        "distinct_colors": report.distinct_colors,
        "palette": _palette_data(report.palette, precision),
    }
    if report.format is not None:
        data["format"] = report.format
    if report.image_hash is not None:
        data["image_hash"] = report.image_hash
    return dump_json(data, format)


def _palette_data(palette: Sequence[ColorEntry], precision: int) -> list[dict]:
    return [
        {"hex": entry.hex, "percentage": round(entry.percentage, precision)}
        for entry in palette
    ]


def _palette_lines(palette: Sequence[ColorEntry], precision: int) -> list[str]:
    return [
        f"{i}. {entry.hex}  {entry.percentage:.{precision}f}%"
        for i, entry in enumerate(palette, 1)
    ]
