# Copyright (c) 2026 Huepick
# SPDX-License-Identifier: MIT

"""
Point sampling: display-space click → source pixel color.

A click is captured relative to the image as rendered on screen, which may
be scaled. The click is mapped back through the ratio of the buffer's
intrinsic size to the rendered size:

    src_x = floor(display_x * width / display_width)
    src_y = floor(display_y * height / display_height)

A click exactly on the rendered right/bottom edge maps one past the last
pixel. BoundaryPolicy.CLAMP (the default) pulls it back onto the edge;
BoundaryPolicy.STRICT rejects it.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional

from huepick.errors import OutOfBoundsError
from huepick.schema import BoundaryPolicy, PixelBuffer, RGBColor, SampledColor


def map_to_source(
    buffer: PixelBuffer,
    display_x: float,
    display_y: float,
    display_width: float,
    display_height: float,
    *,
    policy: BoundaryPolicy = BoundaryPolicy.CLAMP,
) -> tuple[int, int]:
    """
    Map a display-space coordinate to a source pixel.

    Args:
        buffer: Decoded pixels
        display_x, display_y: Click position relative to the rendered
            image's top-left corner
        display_width, display_height: Rendered size of the image
        policy: How to treat coordinates that land off the grid

    Returns:
        (src_x, src_y), always a valid pixel of the buffer

    Raises:
        OutOfBoundsError: Degenerate display size (including one so small
            the scale overflows), non-finite coordinates, empty buffer, or
            (STRICT only) a coordinate off the grid
    """
    if not (math.isfinite(display_width) and math.isfinite(display_height)):
        raise OutOfBoundsError(
            f"Display size must be finite, got {display_width}x{display_height}"
        )
    if display_width <= 0 or display_height <= 0:
        raise OutOfBoundsError(
            f"Display size must be > 0, got {display_width}x{display_height}"
        )
    if not (math.isfinite(display_x) and math.isfinite(display_y)):
        raise OutOfBoundsError(
            f"Coordinates must be finite, got ({display_x}, {display_y})"
        )
    if buffer.is_empty:
        raise OutOfBoundsError(
            f"No pixels to sample in {buffer.width}x{buffer.height} buffer"
        )

    scale_x = buffer.width / display_width
    scale_y = buffer.height / display_height
    if not (math.isfinite(scale_x) and math.isfinite(scale_y)):
        raise OutOfBoundsError(
            f"Display size {display_width}x{display_height} is too small to "
            f"map onto a {buffer.width}x{buffer.height} buffer"
        )

    # May overflow to +/-inf for huge coordinates; never NaN with finite scales
    mapped_x = display_x * scale_x
    mapped_y = display_y * scale_y

    if policy is BoundaryPolicy.STRICT:
        if not (0 <= mapped_x < buffer.width and 0 <= mapped_y < buffer.height):
            raise OutOfBoundsError(
                f"({display_x}, {display_y}) maps to ({mapped_x}, {mapped_y}), "
                f"outside {buffer.width}x{buffer.height} buffer"
            )
        return math.floor(mapped_x), math.floor(mapped_y)

    # Clamp as floats so floor() only ever sees an in-range value
    src_x = math.floor(min(max(mapped_x, 0.0), buffer.width - 1))
    src_y = math.floor(min(max(mapped_y, 0.0), buffer.height - 1))
    return src_x, src_y


def sample_at(
    buffer: PixelBuffer,
    display_x: float,
    display_y: float,
    display_width: float,
    display_height: float,
    *,
    policy: BoundaryPolicy = BoundaryPolicy.CLAMP,
) -> RGBColor:
    """
    Read the color under a display-space click.

    Alpha is ignored. See map_to_source() for the coordinate mapping and
    the errors raised.

    Example:
        >>> sample_at(buffer, 2, 3, buffer.width, buffer.height).hex
        '#0a141e'
    """
    src_x, src_y = map_to_source(
        buffer,
        display_x,
        display_y,
        display_width,
        display_height,
        policy=policy,
    )
    r, g, b, _ = buffer.pixel(src_x, src_y)
    return RGBColor(r, g, b)


def pick_color(
    buffer: PixelBuffer,
    display_x: float,
    display_y: float,
    display_width: float,
    display_height: float,
    *,
    policy: BoundaryPolicy = BoundaryPolicy.CLAMP,
    captured_at: Optional[datetime] = None,
) -> SampledColor:
    """
    Sample a pixel and stamp it as a pick.

    Args:
        captured_at: Timestamp for the pick (default: now, UTC)

    Returns:
        SampledColor with the source pixel coordinates filled in
    """
    src_x, src_y = map_to_source(
        buffer,
        display_x,
        display_y,
        display_width,
        display_height,
        policy=policy,
    )
    r, g, b, _ = buffer.pixel(src_x, src_y)
    if captured_at is None:
        captured_at = datetime.now(timezone.utc)
    return SampledColor(
        hex=RGBColor(r, g, b).hex,
        captured_at=captured_at,
        x=src_x,
        y=src_y,
    )
