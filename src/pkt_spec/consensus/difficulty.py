"""PacketCrypt difficulty rules (from blockchain/packetcrypt/difficulty).

A block is mined against its header target, but announcements mined into the
block make the effective target easier. The effective work requirement is::

    header_work ** 3 // min_ann_work // ann_count

Announcements lose value as they age: after `ann_wait_period` blocks their
work is divided by the number of additional blocks elapsed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from ..config import DEFAULT_PARAMS, HASH_SIZE, NOT_USABLE, U32_MAX, U64_MAX, DifficultyParams
from ..errors import ErrorCode, SpecError
from .compact import big_to_compact, target_from_compact
from .work import MAX_WORK, TWO_256, target_for_work, work_for_target


@dataclass(frozen=True)
class AgedAnnTarget:
    """Aged announcement target; `compact` is None when the ann is not usable."""
    compact: Optional[int]

    @property
    def usable(self) -> bool:
        return self.compact is not None

    def to_compact(self) -> int:
        return NOT_USABLE if self.compact is None else self.compact


NOT_USABLE_ANN = AgedAnnTarget(compact=None)


def _check_ann_count(ann_count: int) -> None:
    if not (0 <= ann_count <= U64_MAX):
        raise SpecError(ErrorCode.INVALID_ANN_COUNT, "ann_count must be u64")


def _check_ann_age(ann_age_blocks: int) -> None:
    if not (0 <= ann_age_blocks <= U32_MAX):
        raise SpecError(ErrorCode.INVALID_ANN_AGE, "ann_age_blocks must be u32")


def get_effective_work_requirement(
    block_header_work: int, min_ann_work: int, ann_count: int
) -> int:
    if min_ann_work == 0 or ann_count == 0:
        # no announcements or zero announcement work, require maximum work
        return MAX_WORK

    out = block_header_work * block_header_work
    out = out * block_header_work

    # the order of these divisions is consensus
    out = out // min_ann_work
    out = out // ann_count
    return out


def get_effective_target(
    block_header_target: int,
    min_ann_target: int,
    ann_count: int,
    params: DifficultyParams = DEFAULT_PARAMS,
) -> int:
    """Return the compact target a block hash must beat.

    Args:
        block_header_target: compact target from the block header
        min_ann_target: compact target of the least-work announcement
        ann_count: number of announcements the block was mined with
        params: protocol parameters

    Returns:
        Compact effective target, never above `params.min_difficulty_compact`.
    """
    _check_ann_count(ann_count)
    header_work = work_for_target(target_from_compact(block_header_target))
    min_ann_work = work_for_target(target_from_compact(min_ann_target))

    effective_work = get_effective_work_requirement(header_work, min_ann_work, ann_count)
    effective_target = big_to_compact(target_for_work(effective_work))

    if effective_target > params.min_difficulty_compact:
        return params.min_difficulty_compact
    return effective_target


def hash_to_int(hash_bytes: bytes) -> int:
    """Interpret the first 32 bytes of a little-endian hash as an integer."""
    if len(hash_bytes) < HASH_SIZE:
        raise SpecError(
            ErrorCode.INVALID_HASH_LENGTH,
            f"hash must be at least {HASH_SIZE} bytes, got {len(hash_bytes)}",
        )
    return int.from_bytes(bytes(hash_bytes[:HASH_SIZE]), "little")


def is_ok(hash_bytes: bytes, target: int) -> bool:
    """True if the hash does not exceed the compact target."""
    value = hash_to_int(hash_bytes)
    return target_from_compact(target) >= value


def age_ann_target(
    target: int,
    ann_age_blocks: int,
    params: DifficultyParams = DEFAULT_PARAMS,
) -> AgedAnnTarget:
    """Return the target used for valuing an announcement of the given age.

    The announcement is not usable until it is `ann_wait_period` blocks old,
    and stops being usable once its aged target is easier than
    `params.min_difficulty_compact`.
    """
    _check_ann_age(ann_age_blocks)
    if ann_age_blocks < params.ann_wait_period:
        # announcement is not ready yet
        return NOT_USABLE_ANN

    ann_target = target_from_compact(target)
    if ann_age_blocks == params.ann_wait_period:
        # fresh ann, no aging
        return AgedAnnTarget(big_to_compact(ann_target))

    age = ann_age_blocks - params.ann_wait_period
    ann_work = work_for_target(ann_target) // age
    out = big_to_compact(target_for_work(ann_work))
    if out > params.min_difficulty_compact:
        return NOT_USABLE_ANN
    return AgedAnnTarget(out)


def get_aged_ann_target(
    target: int,
    ann_age_blocks: int,
    params: DifficultyParams = DEFAULT_PARAMS,
) -> int:
    """Wire form of `age_ann_target`: 0xffffffff when the ann is not usable."""
    return age_ann_target(target, ann_age_blocks, params).to_compact()


def is_ann_min_diff_ok(target: int, params: DifficultyParams = DEFAULT_PARAMS) -> bool:
    """Sanity check on the minimum announcement target a miner commits to."""
    if target == 0 or target > params.ann_min_diff_ceiling:
        return False
    try:
        work = work_for_target(target_from_compact(target))
    except SpecError:
        return False
    return 0 < work < TWO_256


def validate_coinbase_ann_min_target(
    committed_target: int,
    anns: Iterable[Tuple[int, int]],
    params: DifficultyParams = DEFAULT_PARAMS,
) -> None:
    """Check a coinbase min-ann-target commitment against the block's anns.

    The committed target must pass `is_ann_min_diff_ok` and must not be less
    work (a higher number) than the aged target of any announcement.
    `anns` yields `(ann_target, ann_age_blocks)` pairs.
    """
    if not is_ann_min_diff_ok(committed_target, params):
        raise SpecError(
            ErrorCode.INVALID_ANN_MIN_DIFF,
            f"committed min ann target {committed_target:#010x} is out of range",
        )
    committed = target_from_compact(committed_target)

    for i, (ann_target, ann_age_blocks) in enumerate(anns):
        aged = age_ann_target(ann_target, ann_age_blocks, params)
        if not aged.usable:
            raise SpecError(ErrorCode.ANN_NOT_USABLE, f"ann {i} is not usable at age {ann_age_blocks}")
        if target_from_compact(aged.compact) > committed:
            raise SpecError(
                ErrorCode.ANN_TARGET_TOO_HIGH,
                f"ann {i} aged target {aged.compact:#010x} exceeds "
                f"committed {committed_target:#010x}",
            )
