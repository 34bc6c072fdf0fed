"""Time-ordered identifiers for new binaries."""

from __future__ import annotations

import os
import time
import uuid


def ordered_uuid() -> str:
    """Return a UUIDv7-layout string: 48-bit unix millis, then random bits.

    Values created later sort after earlier ones (at millisecond resolution),
    which keeps the ``hash`` index append-mostly.
    """
    millis = time.time_ns() // 1_000_000
    rand = int.from_bytes(os.urandom(10), "big")

    value = (millis & 0xFFFF_FFFF_FFFF) << 80
    value |= 0x7 << 76  # version
    value |= ((rand >> 68) & 0xFFF) << 64  # rand_a
    value |= 0b10 << 62  # variant
    value |= rand & 0x3FFF_FFFF_FFFF_FFFF  # rand_b
    return str(uuid.UUID(int=value))
