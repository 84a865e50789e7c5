# Copyright (c) 2026 Huepick
# SPDX-License-Identifier: MIT

"""
PixelBuffer: the decoded, immutable RGBA grid shared by every consumer.

The buffer is produced once (by the decoder or from an array) and then
only read. Its sample array is flagged read-only, so extraction and point
sampling may run against the same buffer from several threads.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True, slots=True, eq=False)
class PixelBuffer:
    """
    A width x height grid of RGBA samples.

    Attributes:
        width: Number of columns (>= 0)
        height: Number of rows (>= 0)
        samples: Read-only uint8 array of shape (width * height, 4),
            row-major, channels in RGBA order
    """
    width: int
    height: int
    samples: NDArray[np.uint8]

    def __post_init__(self) -> None:
        """Validate geometry and freeze the sample array."""
        width = int(self.width)
        height = int(self.height)
        if width < 0 or height < 0:
            raise ValueError(
                f"Dimensions must be >= 0, got {width}x{height}"
            )

        samples = np.asarray(self.samples)
        if samples.dtype != np.uint8:
            raise ValueError(f"Expected uint8 samples, got {samples.dtype}")
        if samples.shape == (height, width, 4):
            samples = samples.reshape(-1, 4)
        if samples.shape != (width * height, 4):
            raise ValueError(
                f"Expected samples of shape ({width * height}, 4) for a "
                f"{width}x{height} buffer, got {samples.shape}"
            )

        # Own the data so no outside reference can mutate it
        frozen = np.array(samples, dtype=np.uint8, copy=True, order="C")
        frozen.flags.writeable = False

        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)
        object.__setattr__(self, "samples", frozen)

    @classmethod
    def from_array(cls, pixels: NDArray[np.uint8]) -> PixelBuffer:
        """
        Build a buffer from an image array.

        Args:
            pixels: NumPy array of shape (H, W, 3) or (H, W, 4), dtype uint8.
                RGB input is given a fully opaque alpha channel.
        """
        if not isinstance(pixels, np.ndarray):
            raise TypeError(f"Expected numpy array, got {type(pixels)}")
        if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
            raise ValueError(
                f"Expected (H, W, 3) or (H, W, 4) array, got shape {pixels.shape}"
            )
        if pixels.dtype != np.uint8:
            raise ValueError(f"Expected uint8 array, got {pixels.dtype}")

        height, width = pixels.shape[:2]
        if pixels.shape[2] == 3:
            alpha = np.full((height, width, 1), 255, dtype=np.uint8)
            pixels = np.concatenate([pixels, alpha], axis=2)

        return cls(width=width, height=height, samples=pixels.reshape(-1, 4))

    @classmethod
    def empty(cls) -> PixelBuffer:
        """A 0x0 buffer."""
        return cls(width=0, height=0, samples=np.empty((0, 4), dtype=np.uint8))

    @property
    def area(self) -> int:
        """Total number of pixels."""
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.area == 0

    @property
    def rgb(self) -> NDArray[np.uint8]:
        """Read-only (N, 3) view of the color channels, alpha dropped."""
        return self.samples[:, :3]

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Return the (r, g, b, a) sample at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) outside {self.width}x{self.height} buffer"
            )
        r, g, b, a = self.samples[y * self.width + x]
        return int(r), int(g), int(b), int(a)

    def to_array(self) -> NDArray[np.uint8]:
        """Read-only (H, W, 4) view of the samples."""
        return self.samples.reshape(self.height, self.width, 4)

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"
