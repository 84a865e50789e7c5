# Copyright (c) 2026 Huepick
# SPDX-License-Identifier: MIT

"""
Picker session: the presentation-side owner of picking state.

The measurement core is stateless. A UI still has to remember which image
is loaded, whether the next click is a pick, the last picked color and the
history of picks. PickerSession holds exactly that state and calls into
the core; rendering, clipboard access and theming stay with the UI.

History is newest first. A pick that lands on degenerate geometry is
dropped without touching the history.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from huepick.errors import DecodeError, OutOfBoundsError
from huepick.measure.decode import decode_file_with_format, decode_with_format
from huepick.measure.extract import analyze
from huepick.measure.palette import DEFAULT_PALETTE_LIMIT
from huepick.measure.sampler import pick_color
from huepick.schema import (
    BoundaryPolicy,
    ColorEntry,
    ColorReport,
    PixelBuffer,
    SampledColor,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionConfig:
    """Configuration for a picker session."""

    # Palette size computed on load (None keeps every color)
    palette_limit: Optional[int] = DEFAULT_PALETTE_LIMIT

    # Edge handling for picks
    boundary_policy: BoundaryPolicy = BoundaryPolicy.CLAMP

    # Hash the decoded samples into the report
    include_hash: bool = False


class PickerSession:
    """
    Loaded image, its palette, and the pick workflow.

    Usage:
        session = PickerSession()
        report = session.load(data, media_type="image/png")
        session.begin_picking()
        sample = session.pick(120.0, 48.5, 640.0, 360.0)
        session.history  # (sample, ...) newest first
    """

    def __init__(self, config: Optional[SessionConfig] = None) -> None:
        self.config = config or SessionConfig()
        self._buffer: Optional[PixelBuffer] = None
        self._report: Optional[ColorReport] = None
        self._history: list[SampledColor] = []
        self._picking = False
        self._picked_color: Optional[SampledColor] = None

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load(
        self,
        data: Union[bytes, bytearray, memoryview],
        media_type: Optional[str] = None,
    ) -> ColorReport:
        """
        Decode an image and compute its palette.

        Args:
            data: Encoded image bytes
            media_type: Declared media type such as "image/png". Anything
                that is not an image/* type is rejected.

        Returns:
            The new ColorReport

        Raises:
            DecodeError: If the media type or bytes are rejected. The
                previously loaded image, if any, stays loaded.
        """
        if media_type is not None and not media_type.strip().lower().startswith("image/"):
            raise DecodeError(f"Not an image media type: {media_type!r}")

        buffer, image_format = decode_with_format(data, format=media_type)
        return self._install(buffer, image_format)

    def load_file(self, path: Union[str, Path]) -> ColorReport:
        """Read, decode and install an image file. See load()."""
        buffer, image_format = decode_file_with_format(path)
        return self._install(buffer, image_format)

    def load_buffer(self, buffer: PixelBuffer) -> ColorReport:
        """Install an already decoded buffer."""
        return self._install(buffer, None)

    def _install(self, buffer: PixelBuffer, image_format: Optional[str]) -> ColorReport:
        report = analyze(
            buffer,
            limit=self.config.palette_limit,
            include_hash=self.config.include_hash,
        )
        if image_format is not None:
            report = dataclasses.replace(report, format=image_format)

        self._buffer = buffer
        self._report = report
        self._picking = False
        self._picked_color = None
        logger.debug(
            "Loaded %dx%d image with %d distinct colors",
            buffer.width,
            buffer.height,
            report.distinct_colors,
        )
        return report

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def buffer(self) -> Optional[PixelBuffer]:
        return self._buffer

    @property
    def report(self) -> Optional[ColorReport]:
        return self._report

    @property
    def palette(self) -> tuple[ColorEntry, ...]:
        """Palette of the loaded image, empty if nothing is loaded."""
        return self._report.palette if self._report is not None else ()

    @property
    def is_picking(self) -> bool:
        return self._picking

    @property
    def picked_color(self) -> Optional[SampledColor]:
        """Most recent successful pick for the loaded image."""
        return self._picked_color

    @property
    def history(self) -> tuple[SampledColor, ...]:
        """All successful picks, newest first."""
        return tuple(self._history)

    # -------------------------------------------------------------------------
    # Picking
    # -------------------------------------------------------------------------

    def begin_picking(self) -> None:
        """Arm the next pick()."""
        self._picking = True

    def cancel_picking(self) -> None:
        self._picking = False

    def pick(
        self,
        display_x: float,
        display_y: float,
        display_width: float,
        display_height: float,
        *,
        captured_at: Optional[datetime] = None,
    ) -> Optional[SampledColor]:
        """
        Sample the loaded image at a display-space click.

        Returns:
            The new SampledColor, or None if picking is not armed, no image
            is loaded, or the click could not be mapped to a pixel. A
            successful pick is prepended to the history and disarms picking;
            a rejected one leaves picking armed and the history untouched.
        """
        if not self._picking or self._buffer is None:
            return None

        try:
            sample = pick_color(
                self._buffer,
                display_x,
                display_y,
                display_width,
                display_height,
                policy=self.config.boundary_policy,
                captured_at=captured_at,
            )
        except OutOfBoundsError:
            logger.debug(
                "Dropped pick at (%s, %s) on %sx%s display",
                display_x,
                display_y,
                display_width,
                display_height,
            )
            return None

        self._history.insert(0, sample)
        self._picked_color = sample
        self._picking = False
        return sample

    def clear_history(self) -> None:
        self._history.clear()
        self._picked_color = None
