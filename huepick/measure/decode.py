# Copyright (c) 2026 Huepick
# SPDX-License-Identifier: MIT

"""
PixelBuffer decoder.

Turns encoded PNG, JPEG or GIF bytes into an immutable RGBA PixelBuffer.
The byte signature is checked before Pillow is involved, so non-image input
is rejected without ever reaching an image plugin. Every decoding failure
surfaces as DecodeError; no partial buffer is returned.

Only the first frame of an animated GIF is decoded.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image, ImageCms, UnidentifiedImageError

from huepick.errors import DecodeError
from huepick.schema import PixelBuffer

logger = logging.getLogger(__name__)


SUPPORTED_FORMATS = ("PNG", "JPEG", "GIF")

# Leading bytes that identify each supported format
_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", "PNG"),
    (b"\xff\xd8\xff", "JPEG"),
    (b"GIF87a", "GIF"),
    (b"GIF89a", "GIF"),
)

# Names a caller may declare: Pillow names, file extensions, media subtypes
_FORMAT_ALIASES = {
    "png": "PNG",
    "apng": "PNG",
    "jpeg": "JPEG",
    "jpg": "JPEG",
    "jpe": "JPEG",
    "jfif": "JPEG",
    "pjpeg": "JPEG",
    "gif": "GIF",
}

# Pillow failures that mean "these bytes are not a usable image"
_PIL_ERRORS = (
    UnidentifiedImageError,
    Image.DecompressionBombError,
    OSError,
    SyntaxError,
    EOFError,
    ValueError,
)


def sniff_format(data: bytes) -> Optional[str]:
    """
    Identify the image format from its leading bytes.

    Returns:
        "PNG", "JPEG" or "GIF", or None if the signature is not recognized
    """
    head = bytes(data[:8])
    for signature, name in _SIGNATURES:
        if head.startswith(signature):
            return name
    return None


def normalize_format(name: str) -> str:
    """
    Map a declared format to its canonical name.

    Accepts Pillow names ("PNG"), extensions ("jpg", ".gif") and media
    types ("image/jpeg").

    Raises:
        DecodeError: If the format is not one of the supported formats
    """
    key = name.strip().lower()
    if key.startswith("image/"):
        key = key[len("image/"):]
    key = key.lstrip(".")
    try:
        return _FORMAT_ALIASES[key]
    except KeyError:
        raise DecodeError(
            f"Unsupported image format {name!r}: "
            f"expected one of {', '.join(SUPPORTED_FORMATS)}"
        ) from None


def decode(
    data: Union[bytes, bytearray, memoryview],
    *,
    format: Optional[str] = None,
) -> PixelBuffer:
    """
    Decode encoded image bytes into a PixelBuffer.

    Args:
        data: Encoded PNG, JPEG or GIF bytes
        format: Optional declared format. If given, it must agree with the
            format sniffed from the bytes.

    Returns:
        PixelBuffer with RGBA samples

    Raises:
        DecodeError: Unsupported format, corrupt or truncated stream,
            declared/actual format mismatch, or zero-dimension image
    """
    buffer, _ = decode_with_format(data, format=format)
    return buffer


def decode_with_format(
    data: Union[bytes, bytearray, memoryview],
    *,
    format: Optional[str] = None,
) -> tuple[PixelBuffer, str]:
    """
    Decode encoded image bytes, also reporting the detected format.

    Same contract as decode().

    Returns:
        (buffer, format_name) where format_name is "PNG", "JPEG" or "GIF"
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"Expected bytes, got {type(data)}")
    data = bytes(data)

    if not data:
        raise DecodeError("Cannot decode empty input")

    sniffed = sniff_format(data)
    if sniffed is None:
        raise DecodeError(
            "Unrecognized image signature: "
            f"expected one of {', '.join(SUPPORTED_FORMATS)}"
        )

    if format is not None:
        declared = normalize_format(format)
        if declared != sniffed:
            raise DecodeError(
                f"Declared format {declared} does not match {sniffed} data"
            )

    try:
        with Image.open(io.BytesIO(data), formats=[sniffed]) as img:
            width, height = img.size
            if width > 0 and height > 0:
                img.seek(0)  # Static raster only: first frame
                img.load()
                pixels = np.asarray(_to_rgba(img), dtype=np.uint8)
    except _PIL_ERRORS as exc:
        raise DecodeError(f"Could not decode {sniffed} image: {exc}") from exc

    if width == 0 or height == 0:
        raise DecodeError(f"Image has zero dimension ({width}x{height})")

    if pixels.shape != (height, width, 4):
        raise DecodeError(
            f"Decoder produced shape {pixels.shape}, expected ({height}, {width}, 4)"
        )

    logger.debug("Decoded %s image %dx%d", sniffed, width, height)
    return PixelBuffer.from_array(pixels), sniffed


def decode_file(
    path: Union[str, Path],
    *,
    format: Optional[str] = None,
) -> PixelBuffer:
    """
    Read an image file and decode it.

    The file suffix is used as the declared format when it names a supported
    format and no explicit format is given; otherwise the bytes alone decide.

    Raises:
        OSError: If the file cannot be read
        DecodeError: If the contents cannot be decoded
    """
    buffer, _ = decode_file_with_format(path, format=format)
    return buffer


def decode_file_with_format(
    path: Union[str, Path],
    *,
    format: Optional[str] = None,
) -> tuple[PixelBuffer, str]:
    """Like decode_file(), also reporting the detected format."""
    path = Path(path)
    if format is None:
        format = _FORMAT_ALIASES.get(path.suffix.lower().lstrip("."))
    return decode_with_format(path.read_bytes(), format=format)


def _to_rgba(img: Image.Image) -> Image.Image:
    """
    Convert a decoded frame to RGBA.

    Applies ICC profile conversion to sRGB if the image has an embedded
    color profile, so sampled values match what color pickers show.
    """
    icc_profile = img.info.get("icc_profile")
    if icc_profile and img.mode in ("RGB", "RGBA", "CMYK"):
        try:
            embedded_profile = ImageCms.ImageCmsProfile(io.BytesIO(icc_profile))
            srgb_profile = ImageCms.createProfile("sRGB")
            output_mode = "RGBA" if img.mode == "RGBA" else "RGB"
            converted = ImageCms.profileToProfile(
                img,
                embedded_profile,
                srgb_profile,
                outputMode=output_mode,
            )
            return converted.convert("RGBA")
        except (ImageCms.PyCMSError, OSError, ValueError):
            # Unusable profile: fall back to plain conversion
            logger.debug("Ignoring unusable ICC profile")

    if img.mode != "RGBA":
        img = img.convert("RGBA")
    return img
