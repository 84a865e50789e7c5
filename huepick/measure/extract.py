# Copyright (c) 2026 Huepick
# SPDX-License-Identifier: MIT

"""
Main extraction API.

This is the primary entry point for Huepick's measurement core: decode an
image once, extract its palette once, and wrap the result in a ColorReport.
"""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Optional, Union

import numpy as np
from numpy.typing import NDArray

from huepick.schema import ColorReport, PixelBuffer
from huepick.measure.decode import decode_file_with_format, decode_with_format
from huepick.measure.palette import (
    DEFAULT_PALETTE_LIMIT,
    extract_palette_with_count,
)


ImageInput = Union[bytes, bytearray, memoryview, str, Path, NDArray[np.uint8], PixelBuffer]


def analyze(
    image: ImageInput,
    *,
    limit: Optional[int] = DEFAULT_PALETTE_LIMIT,
    include_hash: bool = True,
    format: Optional[str] = None,
) -> ColorReport:
    """
    Extract a ranked palette report from an image.

    Args:
        image: One of:
            - Encoded PNG/JPEG/GIF bytes
            - Path to an image file (str or Path)
            - NumPy array of shape (H, W, 3) or (H, W, 4), dtype uint8
            - An already decoded PixelBuffer
        limit: Maximum palette size (default: 6). None keeps every color.
        include_hash: Include a SHA256 hash of the decoded samples
            (default: True)
        format: Declared format for bytes or file input. Ignored for
            arrays and buffers.

    Returns:
        ColorReport with the ranked palette

    Raises:
        DecodeError: If bytes or file contents cannot be decoded
        TypeError: If the input type is not supported

    Example:
        >>> from huepick import analyze
        >>> report = analyze("image.png")
        >>> report.dominant
        ColorEntry(hex='#f6c767', percentage=41.3, count=52864)
    """
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")

    buffer, image_format = _load_buffer(image, format=format)

    palette, distinct_colors = extract_palette_with_count(buffer, limit=limit)

    image_hash: Optional[str] = None
    if include_hash:
        image_hash = f"sha256:{hashlib.sha256(buffer.samples.tobytes()).hexdigest()[:16]}"

    return ColorReport(
        width=buffer.width,
        height=buffer.height,
        palette=palette,
        distinct_colors=distinct_colors,
        format=image_format,
        image_hash=image_hash,
    )


def _load_buffer(
    image: ImageInput,
    *,
    format: Optional[str] = None,
) -> tuple[PixelBuffer, Optional[str]]:
    """
    Turn any supported input into a PixelBuffer.

    Returns:
        (buffer, format) where format is None for array and buffer input
    """
    if isinstance(image, PixelBuffer):
        return image, None

    if isinstance(image, np.ndarray):
        return PixelBuffer.from_array(image), None

    if isinstance(image, (bytes, bytearray, memoryview)):
        return decode_with_format(image, format=format)

    if isinstance(image, (str, Path)):
        return decode_file_with_format(image, format=format)

    raise TypeError(
        f"Expected bytes, file path, numpy array or PixelBuffer, got {type(image)}"
    )
