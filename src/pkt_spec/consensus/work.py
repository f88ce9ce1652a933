"""Target / work conversion.

Both directions use truncating integer division only. The pair is the
consensus definition of work; do not rewrite it with floats or rounding.
"""

from __future__ import annotations

from ..errors import ErrorCode, SpecError

TWO_256 = 1 << 256
MAX_WORK = TWO_256 - 1


def work_for_target(target: int) -> int:
    if target < 0:
        raise SpecError(ErrorCode.NEGATIVE_TARGET, "target must be non-negative")
    return TWO_256 // (target + 1)


def target_for_work(work: int) -> int:
    if work < 0:
        raise SpecError(ErrorCode.NEGATIVE_WORK, "work must be non-negative")
    if work == 0:
        # 0 work, min difficulty
        return TWO_256
    return (TWO_256 - work) // work
