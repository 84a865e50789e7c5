# Copyright (c) 2026 Huepick
# SPDX-License-Identifier: MIT

"""
Schema definitions for Huepick.

All types in this module are immutable (frozen dataclasses).
A PixelBuffer is decoded once and only read afterwards; reports and
samples derived from it are facts that cannot be altered.
"""

from huepick.schema.color_report import (
    SCHEMA_VERSION,
    BoundaryPolicy,
    ColorEntry,
    ColorReport,
    RGBColor,
    SampledColor,
)
from huepick.schema.pixel_buffer import PixelBuffer

__all__ = [
    # Version
    "SCHEMA_VERSION",
    # Decoded pixels
    "PixelBuffer",
    # Color values
    "RGBColor",
    "ColorEntry",
    "SampledColor",
    # Sampling
    "BoundaryPolicy",
    # Top-level container
    "ColorReport",
]
