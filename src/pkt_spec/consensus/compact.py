"""Compact target codec (Bitcoin `nBits` family).

A compact value packs a target into 32 bits: an 8-bit base-256 exponent, a
sign bit and a 23-bit mantissa::

    value = mantissa * 256 ** (exponent - 3)

The sign bit is carried faithfully by `compact_to_big` / `big_to_compact`.
Consensus code never accepts a negative target; `target_from_compact` is the
boundary that rejects one.
"""

from __future__ import annotations

from ..config import U32_MAX
from ..errors import ErrorCode, SpecError

MANTISSA_MASK = 0x007FFFFF
SIGN_BIT = 0x00800000


def _check_u32(compact: int) -> None:
    if not isinstance(compact, int) or not (0 <= compact <= U32_MAX):
        raise SpecError(ErrorCode.INVALID_COMPACT, f"compact must be u32, got {compact!r}")


def compact_to_big(compact: int) -> int:
    _check_u32(compact)
    mantissa = compact & MANTISSA_MASK
    exponent = compact >> 24

    if exponent <= 3:
        value = mantissa >> (8 * (3 - exponent))
    else:
        value = mantissa << (8 * (exponent - 3))

    if compact & SIGN_BIT:
        value = -value
    return value


def big_to_compact(value: int) -> int:
    if value == 0:
        return 0

    negative = value < 0
    magnitude = -value if negative else value

    exponent = (magnitude.bit_length() + 7) // 8
    if exponent <= 3:
        mantissa = magnitude << (8 * (3 - exponent))
    else:
        mantissa = magnitude >> (8 * (exponent - 3))

    # the sign bit is not part of the mantissa
    if mantissa & SIGN_BIT:
        mantissa >>= 8
        exponent += 1

    if exponent > 0xFF:
        raise SpecError(ErrorCode.OVERFLOW, "value too large for compact encoding")

    compact = (exponent << 24) | mantissa
    if negative:
        compact |= SIGN_BIT
    return compact


def target_from_compact(compact: int) -> int:
    """Decode a compact target, rejecting encodings with a negative value."""
    target = compact_to_big(compact)
    if target < 0:
        raise SpecError(
            ErrorCode.NEGATIVE_TARGET, f"compact {compact:#010x} decodes to a negative target"
        )
    return target
