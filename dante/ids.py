"""Random identifiers for stored records."""

from __future__ import annotations

import random

_I64_BITS = 64
_I64_MIN = -(1 << (_I64_BITS - 1))
I64_MAX = (1 << (_I64_BITS - 1)) - 1


def _to_signed(value: int) -> int:
    if value > I64_MAX:
        value -= 1 << _I64_BITS
    return value


def generate_id() -> int:
    """Return a random non-negative identifier that fits in a signed 64-bit integer."""
    while True:
        value = _to_signed(random.getrandbits(_I64_BITS))
        # The most negative value has no positive counterpart in 64 bits.
        if value != _I64_MIN:
            return abs(value)