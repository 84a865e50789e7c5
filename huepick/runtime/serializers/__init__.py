# Copyright (c) 2026 Huepick
# SPDX-License-Identifier: MIT

"""
Serializers for palettes, reports and pick histories.

All serializers preserve values exactly; percentages are only rounded
for display.
"""

from huepick.runtime.serializers.base import SerializerFormat
from huepick.runtime.serializers.history import history_to_output
from huepick.runtime.serializers.report import palette_to_output, report_to_output

__all__ = [
    "SerializerFormat",
    "palette_to_output",
    "report_to_output",
    "history_to_output",
]
