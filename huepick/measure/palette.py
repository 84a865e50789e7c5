# Copyright (c) 2026 Huepick
# SPDX-License-Identifier: MIT

"""
Dominant color extraction by exact-match frequency counting.

Every pixel's RGB value is packed into a 24-bit key and counted. Keys are
ranked by count, ties broken by key ascending (the same order as hex
ascending), and the top entries are formatted as hex.

There is no clustering: two colors one unit apart are two entries.

The pixel range is walked once, in fixed-size chunks. Each chunk yields its
own key -> count mapping which is merged into the running histogram, so
memory stays proportional to the number of distinct colors rather than the
number of pixels.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable, Mapping, Optional

import numpy as np

from huepick.schema import ColorEntry, PixelBuffer
from huepick.measure.colorspace import key_to_hex, pack_rgb

logger = logging.getLogger(__name__)


DEFAULT_PALETTE_LIMIT = 6

# Pixels per histogram chunk
HISTOGRAM_CHUNK_PIXELS = 1 << 20


def build_histogram(
    buffer: PixelBuffer,
    chunk_pixels: int = HISTOGRAM_CHUNK_PIXELS,
) -> Counter[int]:
    """
    Count occurrences of each exact RGB value in the buffer.

    Alpha is ignored: a transparent red pixel counts as red.

    Args:
        buffer: Decoded pixels
        chunk_pixels: Number of pixels counted per chunk

    Returns:
        Counter mapping 0xRRGGBB key to pixel count. Counts sum to
        buffer.area.
    """
    if chunk_pixels <= 0:
        raise ValueError(f"chunk_pixels must be > 0, got {chunk_pixels}")

    histogram: Counter[int] = Counter()
    samples = buffer.samples

    for start in range(0, buffer.area, chunk_pixels):
        chunk = samples[start:start + chunk_pixels]
        keys, counts = np.unique(pack_rgb(chunk), return_counts=True)
        histogram.update(dict(zip(keys.tolist(), counts.tolist())))

    logger.debug(
        "Counted %d distinct colors over %d pixels", len(histogram), buffer.area
    )
    return histogram


def merge_histograms(histograms: Iterable[Mapping[int, int]]) -> Counter[int]:
    """
    Merge per-partition histograms into one.

    Partitions of the pixel range can be counted independently (and in
    parallel); merging their counts gives the same result as one pass over
    the whole buffer.
    """
    merged: Counter[int] = Counter()
    for histogram in histograms:
        merged.update(histogram)
    return merged


def rank_histogram(
    histogram: Mapping[int, int],
    total_pixels: int,
    limit: Optional[int] = DEFAULT_PALETTE_LIMIT,
) -> tuple[ColorEntry, ...]:
    """
    Rank a histogram into palette entries.

    Args:
        histogram: Mapping of 0xRRGGBB key to pixel count
        total_pixels: Pixel count the percentages are relative to
        limit: Maximum entries to return, or None for all of them

    Returns:
        Tuple of ColorEntry ordered by percentage descending. Entries with
        equal percentages are ordered by hex ascending.
    """
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    if total_pixels <= 0 or not histogram:
        return ()

    ranked = sorted(histogram.items(), key=lambda item: (-item[1], item[0]))
    if limit is not None:
        ranked = ranked[:limit]

    # Hex formatting happens here, once per returned entry
    return tuple(
        ColorEntry(
            hex=key_to_hex(key),
            percentage=100.0 * count / total_pixels,
            count=count,
        )
        for key, count in ranked
    )


def extract_palette(
    buffer: PixelBuffer,
    limit: Optional[int] = DEFAULT_PALETTE_LIMIT,
) -> tuple[ColorEntry, ...]:
    """
    Extract the most frequent exact colors from a buffer.

    This is the main extraction API. It is a pure function of the buffer's
    pixel values: the same buffer always yields the same tuple.

    Args:
        buffer: Decoded pixels
        limit: Maximum number of colors (default: 6). None returns the
            full ranked histogram.

    Returns:
        Tuple of ColorEntry, most frequent first. Empty for a zero-area
        buffer. Percentages are relative to all pixels, so a truncated
        palette sums to at most 100.

    Example:
        >>> buffer = PixelBuffer.from_array(pixels)  # 2x1: red, green
        >>> extract_palette(buffer)
        (ColorEntry(hex='#00ff00', percentage=50.0, count=1),
         ColorEntry(hex='#ff0000', percentage=50.0, count=1))
    """
    palette, _ = extract_palette_with_count(buffer, limit=limit)
    return palette


def extract_palette_with_count(
    buffer: PixelBuffer,
    limit: Optional[int] = DEFAULT_PALETTE_LIMIT,
) -> tuple[tuple[ColorEntry, ...], int]:
    """
    Extract the palette and count the distinct colors in one pass.

    Returns:
        (palette, distinct_colors) where palette is what extract_palette()
        returns and distinct_colors is the size of the full histogram
    """
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    if buffer.is_empty:
        return (), 0

    histogram = build_histogram(buffer)
    return rank_histogram(histogram, buffer.area, limit=limit), len(histogram)


def histogram_percentages(buffer: PixelBuffer) -> dict[str, float]:
    """
    Percentage of the image covered by every distinct color.

    Unranked and untruncated; values sum to 100 for a non-empty buffer.
    """
    if buffer.is_empty:
        return {}
    total = buffer.area
    return {
        key_to_hex(key): 100.0 * count / total
        for key, count in build_histogram(buffer).items()
    }


def extract_dominant_color(buffer: PixelBuffer) -> Optional[ColorEntry]:
    """
    The single most frequent color, or None for a zero-area buffer.

    Delegates to extract_palette with limit=1 for consistency.
    """
    palette = extract_palette(buffer, limit=1)
    return palette[0] if palette else None
