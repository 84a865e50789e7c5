# Copyright (c) 2026 Huepick
# SPDX-License-Identifier: MIT

"""
Presentation-side runtime for Huepick.

1. Serializers -- palettes, reports and pick histories as JSON or text
2. PickerSession -- loaded image, picking mode and newest-first history

The runtime layer never modifies measurement content.
"""

from huepick.runtime.serializers import (
    SerializerFormat,
    history_to_output,
    palette_to_output,
    report_to_output,
)
from huepick.runtime.session import PickerSession, SessionConfig

__all__ = [
    "PickerSession",
    "SessionConfig",
    "palette_to_output",
    "report_to_output",
    "history_to_output",
    "SerializerFormat",
]
