# Copyright (c) 2026 Huepick
# SPDX-License-Identifier: MIT

"""
Error taxonomy for Huepick.

Decoding failures are fatal to a single decode call. Sampling failures are
recoverable: the caller drops the pick and carries on.
"""

from __future__ import annotations


class HuepickError(Exception):
    """Base class for all errors raised by Huepick."""


class DecodeError(HuepickError, ValueError):
    """
    Encoded image bytes could not be turned into a PixelBuffer.

    Raised for unsupported formats, corrupt or truncated streams, and
    zero-dimension images. No partial buffer is ever returned.
    """


class SampleError(HuepickError, ValueError):
    """A point sample could not be taken."""


class OutOfBoundsError(SampleError):
    """
    Display geometry is degenerate or the mapped coordinate has no pixel.

    Also reachable as ``SampleError.OutOfBounds``.
    """


SampleError.OutOfBounds = OutOfBoundsError
