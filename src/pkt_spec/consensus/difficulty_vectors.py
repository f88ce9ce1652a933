"""Difficulty rule test vector generators."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from ..config import ANN_WAIT_PERIOD, MIN_DIFFICULTY_COMPACT
from .compact import compact_to_big
from .difficulty import get_aged_ann_target, get_effective_target, is_ann_min_diff_ok, is_ok
from .work import MAX_WORK, TWO_256, target_for_work, work_for_target

BITCOIN_GENESIS_COMPACT = 0x1D00FFFF
ZERO_WORK_COMPACT = 0x21010000  # decodes to 2**256, the first target with zero work


@dataclass
class DifficultyVector:
    name: str
    description: Optional[str]
    input: Dict[str, Any]
    expected: Dict[str, Any]


def _hex256(value: int) -> str:
    return value.to_bytes(33, "big").hex() if value >= TWO_256 else value.to_bytes(32, "big").hex()


def _le_hash(value: int) -> str:
    """Little-endian 32-byte hash whose integer value is `value`."""
    return value.to_bytes(32, "little").hex()


def _pack(operation: str, vectors: List[DifficultyVector]) -> Dict[str, Any]:
    return {
        "operation": operation,
        "ann_wait_period": ANN_WAIT_PERIOD,
        "min_difficulty_compact": MIN_DIFFICULTY_COMPACT,
        "test_vectors": [asdict(v) for v in vectors],
    }


def _effective(name: str, description: Optional[str], header: int, min_ann: int, count: int) -> DifficultyVector:
    return DifficultyVector(
        name=name,
        description=description,
        input={
            "kind": "difficulty",
            "op": "effective_target",
            "block_header_target": header,
            "min_ann_target": min_ann,
            "ann_count": count,
        },
        expected={"effective_target": get_effective_target(header, min_ann, count)},
    )


def effective_target_vectors() -> Dict[str, Any]:
    vectors: List[DifficultyVector] = [
        _effective(
            "min_difficulty_single_ann",
            "header and ann at minimum difficulty, one announcement",
            MIN_DIFFICULTY_COMPACT,
            MIN_DIFFICULTY_COMPACT,
            1,
        ),
        _effective(
            "min_difficulty_clamped",
            "four announcements push the target above the ceiling",
            MIN_DIFFICULTY_COMPACT,
            MIN_DIFFICULTY_COMPACT,
            4,
        ),
        _effective(
            "zero_ann_count",
            "no announcements requires maximum work",
            BITCOIN_GENESIS_COMPACT,
            BITCOIN_GENESIS_COMPACT,
            0,
        ),
        _effective(
            "zero_min_ann_work",
            "min ann target decoding to 2**256 carries no work",
            BITCOIN_GENESIS_COMPACT,
            ZERO_WORK_COMPACT,
            10,
        ),
    ]

    for count in (1, 16, 1024, 1 << 20):
        vectors.append(
            _effective(
                f"genesis_header_ann_count_{count}",
                None,
                BITCOIN_GENESIS_COMPACT,
                0x1E0FFFFF,
                count,
            )
        )

    return _pack("effective_target", vectors)


def hash_check_vectors() -> Dict[str, Any]:
    vectors: List[DifficultyVector] = []
    for compact in (BITCOIN_GENESIS_COMPACT, MIN_DIFFICULTY_COMPACT, 0x03123456):
        target = compact_to_big(compact)
        for label, value in (
            ("zero", 0),
            ("equal", target),
            ("above", target + 1),
        ):
            hash_hex = _le_hash(value)
            vectors.append(
                DifficultyVector(
                    name=f"is_ok_{compact:08x}_{label}",
                    description=None,
                    input={"kind": "difficulty", "op": "is_ok", "hash_hex": hash_hex, "target": compact},
                    expected={"ok": is_ok(bytes.fromhex(hash_hex), compact)},
                )
            )
    return _pack("is_ok", vectors)


def aged_ann_target_vectors() -> Dict[str, Any]:
    vectors: List[DifficultyVector] = []
    for compact in (BITCOIN_GENESIS_COMPACT, MIN_DIFFICULTY_COMPACT, 0x04000001):
        for age in (0, ANN_WAIT_PERIOD - 1, ANN_WAIT_PERIOD, ANN_WAIT_PERIOD + 1,
                    ANN_WAIT_PERIOD + 2, ANN_WAIT_PERIOD + 100):
            vectors.append(
                DifficultyVector(
                    name=f"aged_{compact:08x}_age_{age}",
                    description=None,
                    input={
                        "kind": "difficulty",
                        "op": "aged_ann_target",
                        "target": compact,
                        "ann_age_blocks": age,
                    },
                    expected={"aged_target": get_aged_ann_target(compact, age)},
                )
            )
    return _pack("aged_ann_target", vectors)


def ann_min_diff_vectors() -> Dict[str, Any]:
    cases = [
        ("zero", 0),
        ("genesis", BITCOIN_GENESIS_COMPACT),
        ("min_difficulty", MIN_DIFFICULTY_COMPACT),
        ("ceiling_negative", 0x20FFFFFF),
        ("above_ceiling", 0x21000000),
        ("decodes_to_zero", 0x01003456),
        ("negative_mantissa", 0x04923456),
    ]
    vectors = [
        DifficultyVector(
            name=f"ann_min_diff_{label}",
            description=None,
            input={"kind": "difficulty", "op": "ann_min_diff_ok", "target": compact},
            expected={"ok": is_ann_min_diff_ok(compact)},
        )
        for label, compact in cases
    ]
    return _pack("ann_min_diff_ok", vectors)


def work_conversion_vectors() -> Dict[str, Any]:
    vectors: List[DifficultyVector] = []
    for label, target in (
        ("zero", 0),
        ("one", 1),
        ("genesis", compact_to_big(BITCOIN_GENESIS_COMPACT)),
        ("max", MAX_WORK),
    ):
        vectors.append(
            DifficultyVector(
                name=f"work_for_target_{label}",
                description=None,
                input={"kind": "difficulty", "op": "work_for_target", "target_hex": _hex256(target)},
                expected={"work_hex": _hex256(work_for_target(target))},
            )
        )
    for label, work in (("zero", 0), ("one", 1), ("four", 4), ("max", MAX_WORK)):
        vectors.append(
            DifficultyVector(
                name=f"target_for_work_{label}",
                description=None,
                input={"kind": "difficulty", "op": "target_for_work", "work_hex": _hex256(work)},
                expected={"target_hex": _hex256(target_for_work(work))},
            )
        )
    return _pack("work_conversion", vectors)


def all_difficulty_vectors() -> Dict[str, Dict[str, Any]]:
    return {
        "effective_target": effective_target_vectors(),
        "is_ok": hash_check_vectors(),
        "aged_ann_target": aged_ann_target_vectors(),
        "ann_min_diff_ok": ann_min_diff_vectors(),
        "work_conversion": work_conversion_vectors(),
    }
