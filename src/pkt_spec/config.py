"""PKT Python spec configuration constants.

Keep this file aligned with the Go constants in `blockchain/packetcrypt/`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import ErrorCode, SpecError

# Announcements
ANN_WAIT_PERIOD = 3  # blocks before an announcement may back a block

# Compact targets
MIN_DIFFICULTY_COMPACT = 0x207FFFFF  # easiest target a block may carry
ANN_MIN_DIFF_CEILING = 0x20FFFFFF  # one exponent step above MIN_DIFFICULTY_COMPACT
NOT_USABLE = 0xFFFFFFFF  # wire form of an unusable aged announcement

# Integer widths
U32_MAX = (1 << 32) - 1
U64_MAX = (1 << 64) - 1
HASH_SIZE = 32


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw, 0)
    except ValueError:
        raise SpecError(ErrorCode.INVALID_FORMAT, f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class DifficultyParams:
    """Protocol parameters consumed by the difficulty rules."""
    ann_wait_period: int = ANN_WAIT_PERIOD
    min_difficulty_compact: int = MIN_DIFFICULTY_COMPACT
    ann_min_diff_ceiling: int = ANN_MIN_DIFF_CEILING

    @classmethod
    def from_env(cls) -> "DifficultyParams":
        """Load parameters from environment variables (decimal or 0x hex)."""
        return cls(
            ann_wait_period=_env_int("PKT_ANN_WAIT_PERIOD", ANN_WAIT_PERIOD),
            min_difficulty_compact=_env_int(
                "PKT_MIN_DIFFICULTY_COMPACT", MIN_DIFFICULTY_COMPACT
            ),
            ann_min_diff_ceiling=_env_int(
                "PKT_ANN_MIN_DIFF_CEILING", ANN_MIN_DIFF_CEILING
            ),
        )


DEFAULT_PARAMS = DifficultyParams()
