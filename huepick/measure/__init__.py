# Copyright (c) 2026 Huepick
# SPDX-License-Identifier: MIT

"""
Measurement core for Huepick.

Decoding, exact-color palette extraction and point sampling. All
operations are pure and read-only over an immutable PixelBuffer.
"""

from huepick.measure.decode import decode, decode_file, sniff_format
from huepick.measure.extract import analyze
from huepick.measure.palette import (
    DEFAULT_PALETTE_LIMIT,
    extract_dominant_color,
    extract_palette,
)
from huepick.measure.sampler import map_to_source, pick_color, sample_at

__all__ = [
    "analyze",
    "decode",
    "decode_file",
    "sniff_format",
    "extract_palette",
    "extract_dominant_color",
    "DEFAULT_PALETTE_LIMIT",
    "sample_at",
    "map_to_source",
    "pick_color",
]
