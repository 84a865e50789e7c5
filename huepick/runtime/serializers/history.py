# Copyright (c) 2026 Huepick
# SPDX-License-Identifier: MIT

"""Serializer for a pick history (newest first)."""

from __future__ import annotations

from typing import Sequence

from huepick.runtime.serializers.base import SerializerFormat, dump_json
from huepick.schema import SampledColor


def history_to_output(
    history: Sequence[SampledColor],
    *,
    format: SerializerFormat = SerializerFormat.JSON,
) -> str:
    """Serialize picked colors in the order given.

    Example (NATURAL)::

        #0a141e  2026-10-18T09:44:00+00:00
        #ff0000  2026-10-18T09:43:12+00:00
    """
    if format == SerializerFormat.NATURAL:
        return "\n".join(
            f"{sample.hex}  {sample.captured_at.isoformat()}" for sample in history
        )
    return dump_json([sample.to_dict() for sample in history], format)
