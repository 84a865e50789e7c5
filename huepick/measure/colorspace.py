# Copyright (c) 2026 Huepick
# SPDX-License-Identifier: MIT

"""
RGB packing and hex formatting.

Colors are keyed internally as 24-bit integers (0xRRGGBB). Hex strings are
only produced for final results, never per pixel.

Hex format: "#" followed by six lowercase, zero-padded hex digits.
"""

from __future__ import annotations

import re

import numpy as np
from numpy.typing import NDArray


_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")


# =============================================================================
# 24-bit keys
# =============================================================================


def pack_rgb(rgb: NDArray[np.uint8]) -> NDArray[np.uint32]:
    """
    Pack RGB channels into 24-bit integer keys.

    Args:
        rgb: Array of shape (..., 3) or (..., 4) with uint8 values.
            A fourth (alpha) channel is ignored.

    Returns:
        Array of shape (...) with 0xRRGGBB keys
    """
    rgb = np.asarray(rgb)
    r = rgb[..., 0].astype(np.uint32)
    g = rgb[..., 1].astype(np.uint32)
    b = rgb[..., 2].astype(np.uint32)
    return (r << 16) | (g << 8) | b


def unpack_key(key: int) -> tuple[int, int, int]:
    """Split a 0xRRGGBB key into (r, g, b)."""
    key = int(key)
    if not 0 <= key <= 0xFFFFFF:
        raise ValueError(f"Color key must be 0-0xFFFFFF, got {key}")
    return (key >> 16) & 0xFF, (key >> 8) & 0xFF, key & 0xFF


def rgb_to_key(r: int, g: int, b: int) -> int:
    """Pack a single (r, g, b) triple into a 0xRRGGBB key."""
    for name, value in (("r", r), ("g", g), ("b", b)):
        if not 0 <= int(value) <= 255:
            raise ValueError(f"Channel {name} must be 0-255, got {value}")
    return (int(r) << 16) | (int(g) << 8) | int(b)


# =============================================================================
# Hex formatting
# =============================================================================


def key_to_hex(key: int) -> str:
    """
    Format a 0xRRGGBB key as a hex color string.

    Returns:
        Hex string like "#0a141e"
    """
    key = int(key)
    if not 0 <= key <= 0xFFFFFF:
        raise ValueError(f"Color key must be 0-0xFFFFFF, got {key}")
    return f"#{key:06x}"


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Format an (r, g, b) triple as a hex color string."""
    return key_to_hex(rgb_to_key(r, g, b))


def hex_to_key(hex_color: str) -> int:
    """
    Parse a hex color string into a 0xRRGGBB key.

    Args:
        hex_color: Hex string like "#0A141E" or "0a141e" (case-insensitive)
    """
    m = _HEX_RE.match(hex_color.strip())
    if not m:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    return int(m.group(1), 16)


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Parse a hex color string into (r, g, b)."""
    return unpack_key(hex_to_key(hex_color))


def normalize_hex(hex_color: str) -> str:
    """Canonicalize a hex string to "#rrggbb" lowercase."""
    return key_to_hex(hex_to_key(hex_color))
