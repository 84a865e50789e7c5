# Copyright (c) 2026 Huepick
# SPDX-License-Identifier: MIT

"""
ColorReport v1.0 -- Result types for palette extraction and point sampling.

Design principles:
- Immutable: All types are frozen dataclasses
- Deterministic: Same buffer → same report, entry for entry
- Exact: Every hex is one real pixel value, never an average
- Serializable: JSON-ready via to_dict()/from_dict()

Hex strings are "#" plus six zero-padded hex digits. Huepick emits lowercase;
uppercase input is accepted wherever a hex is parsed.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0"

_HEX_RE = re.compile(r"^#[0-9a-fA-F]{6}$")

# Tolerance for float accumulation when checking percentage totals
_PERCENT_EPSILON = 1e-6


def _check_hex(value: str) -> None:
    if not isinstance(value, str) or not _HEX_RE.match(value):
        raise ValueError(f"Hex must look like '#rrggbb', got {value!r}")


# =============================================================================
# Core Color Types
# =============================================================================


@dataclass(frozen=True, slots=True)
class RGBColor:
    """
    A single opaque sRGB color.

    Attributes:
        r, g, b: Channel values 0-255
    """
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        """Validate channel values."""
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"Channel {name} must be 0-255, got {value}")

    @property
    def key(self) -> int:
        """24-bit 0xRRGGBB key."""
        return (self.r << 16) | (self.g << 8) | self.b

    @property
    def hex(self) -> str:
        """Hex string like "#0a141e"."""
        from huepick.measure.colorspace import key_to_hex
        return key_to_hex(self.key)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"hex": self.hex, "rgb": [self.r, self.g, self.b]}

    @classmethod
    def from_key(cls, key: int) -> RGBColor:
        from huepick.measure.colorspace import unpack_key
        r, g, b = unpack_key(key)
        return cls(r, g, b)

    @classmethod
    def from_hex(cls, hex_color: str) -> RGBColor:
        from huepick.measure.colorspace import hex_to_rgb
        r, g, b = hex_to_rgb(hex_color)
        return cls(r, g, b)


@dataclass(frozen=True, slots=True)
class ColorEntry:
    """
    One exact color and the share of the image it covers.

    Entries in a palette are ordered by percentage, most frequent first.

    Attributes:
        hex: Hex string of the exact pixel value
        percentage: Share of all pixels (0.0-100.0)
        count: Number of pixels with this exact value, when known
    """
    hex: str
    percentage: float
    count: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate hex and percentage."""
        _check_hex(self.hex)
        if not 0.0 <= self.percentage <= 100.0:
            raise ValueError(
                f"Percentage must be 0-100, got {self.percentage}"
            )
        if self.count is not None and self.count < 0:
            raise ValueError(f"Count must be >= 0, got {self.count}")

    @property
    def weight(self) -> float:
        """Share of all pixels as a fraction (0.0-1.0)."""
        return self.percentage / 100.0

    @property
    def rgb(self) -> RGBColor:
        return RGBColor.from_hex(self.hex)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        d = {"hex": self.hex, "percentage": self.percentage}
        if self.count is not None:
            d["count"] = self.count
        return d

    @classmethod
    def from_dict(cls, data: dict) -> ColorEntry:
        """Deserialize from dictionary."""
        return cls(
            hex=data["hex"],
            percentage=data["percentage"],
            count=data.get("count"),
        )


@dataclass(frozen=True, slots=True)
class SampledColor:
    """
    A single user pick.

    The core produces one per call; keeping them in a history list is up to
    the caller.

    Attributes:
        hex: Hex string of the picked pixel
        captured_at: When the pick happened (caller's clock)
        x, y: Source pixel that was read, when known
    """
    hex: str
    captured_at: datetime
    x: Optional[int] = None
    y: Optional[int] = None

    def __post_init__(self) -> None:
        _check_hex(self.hex)

    def to_dict(self) -> dict:
        """Serialize to dictionary (ISO-8601 timestamp)."""
        d = {"hex": self.hex, "captured_at": self.captured_at.isoformat()}
        if self.x is not None and self.y is not None:
            d["x"] = self.x
            d["y"] = self.y
        return d

    @classmethod
    def from_dict(cls, data: dict) -> SampledColor:
        """Deserialize from dictionary."""
        return cls(
            hex=data["hex"],
            captured_at=datetime.fromisoformat(data["captured_at"]),
            x=data.get("x"),
            y=data.get("y"),
        )


# =============================================================================
# Sampling Policy
# =============================================================================


class BoundaryPolicy(Enum):
    """
    What the point sampler does with a coordinate that maps off the grid.

    CLAMP pulls the coordinate onto the nearest edge pixel, so a click on
    the exact bottom/right edge reads the last row/column. STRICT rejects it
    with OutOfBoundsError.
    """
    CLAMP = "clamp"
    STRICT = "strict"


# =============================================================================
# Top-Level Report Container
# =============================================================================


@dataclass(frozen=True, slots=True)
class ColorReport:
    """
    Palette extraction result for one image.

    Attributes:
        width: Source image width in pixels
        height: Source image height in pixels
        palette: Ranked entries, most frequent first, truncated to the limit
        distinct_colors: Number of distinct RGB values in the whole image
        format: Decoded format ("PNG", "JPEG", "GIF") if known
        image_hash: Optional hash of the decoded samples for verification
        version: Schema version

    Usage:
        report = ColorReport(
            width=2,
            height=1,
            palette=(
                ColorEntry("#00ff00", 50.0),
                ColorEntry("#ff0000", 50.0),
            ),
            distinct_colors=2,
        )
    """
    width: int
    height: int
    palette: tuple[ColorEntry, ...]
    distinct_colors: int
    format: Optional[str] = None
    image_hash: Optional[str] = None
    version: str = field(default=SCHEMA_VERSION)

    def __post_init__(self) -> None:
        """Validate report structure."""
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Dimensions must be >= 0, got {self.width}x{self.height}"
            )
        if len(self.palette) > self.distinct_colors:
            raise ValueError(
                f"Palette has {len(self.palette)} entries but image has only "
                f"{self.distinct_colors} distinct colors"
            )
        for earlier, later in zip(self.palette, self.palette[1:]):
            if later.percentage > earlier.percentage:
                raise ValueError("Palette must be ordered by percentage descending")
        total = sum(e.percentage for e in self.palette)
        if total > 100.0 + _PERCENT_EPSILON:
            raise ValueError(f"Palette percentages exceed 100, got {total:.6f}")

    @property
    def dominant(self) -> Optional[ColorEntry]:
        """The most frequent color, or None for an empty image."""
        return self.palette[0] if self.palette else None

    @property
    def hexes(self) -> tuple[str, ...]:
        return tuple(e.hex for e in self.palette)

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON output."""
        result = {
            "version": self.version,
            "width": self.width,
            "height": self.height,
            "distinct_colors": self.distinct_colors,
            "palette": [e.to_dict() for e in self.palette],
        }
        if self.format is not None:
            result["format"] = self.format
        if self.image_hash is not None:
            result["image_hash"] = self.image_hash
        return result

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def to_text(self) -> str:
        """
        Human-readable summary.

        Example output:
            Palette (2x1, 2 distinct colors):
            1. #00ff00  50.00%
            2. #ff0000  50.00%
        """
        # Import here to avoid circular imports
        from huepick.runtime.serializers.base import SerializerFormat
        from huepick.runtime.serializers.report import report_to_output
        return report_to_output(self, format=SerializerFormat.NATURAL)

    @classmethod
    def from_dict(cls, data: dict) -> ColorReport:
        """Deserialize from dictionary."""
        return cls(
            version=data.get("version", SCHEMA_VERSION),
            width=data["width"],
            height=data["height"],
            distinct_colors=data["distinct_colors"],
            palette=tuple(ColorEntry.from_dict(e) for e in data["palette"]),
            format=data.get("format"),
            image_hash=data.get("image_hash"),
        )

    @classmethod
    def from_json(cls, json_str: str) -> ColorReport:
        """Deserialize from JSON string."""
        return cls.from_dict(json.loads(json_str))
