# Copyright (c) 2026 Huepick
# SPDX-License-Identifier: MIT

"""
Huepick -- Dominant colors and point sampling for raster images.

Counts exact pixel values to rank an image's most frequent colors, and maps
display-space clicks back to source pixels to read single colors.

Quick start::

    from huepick import analyze, decode, sample_at

    report = analyze("image.png")
    report.palette          # Top 6 colors, most frequent first
    report.to_json()

    buffer = decode(data)
    sample_at(buffer, 120.0, 48.5, 640.0, 360.0).hex
"""

from __future__ import annotations

import logging

__version__ = "1.0.0"

from huepick.errors import DecodeError, HuepickError, OutOfBoundsError, SampleError
from huepick.measure import (
    analyze,
    decode,
    decode_file,
    extract_palette,
    pick_color,
    sample_at,
)
from huepick.schema import (
    BoundaryPolicy,
    ColorEntry,
    ColorReport,
    PixelBuffer,
    RGBColor,
    SampledColor,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core API
    "analyze",
    "decode",
    "decode_file",
    "extract_palette",
    "sample_at",
    "pick_color",
    # Types (commonly needed)
    "PixelBuffer",
    "RGBColor",
    "ColorEntry",
    "SampledColor",
    "ColorReport",
    "BoundaryPolicy",
    # Errors
    "HuepickError",
    "DecodeError",
    "SampleError",
    "OutOfBoundsError",
    # Version
    "__version__",
]
