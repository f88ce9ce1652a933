"""Announcement minimum difficulty sanity check and coinbase commitment."""

from __future__ import annotations

import pytest

from pkt_spec.config import ANN_MIN_DIFF_CEILING, ANN_WAIT_PERIOD, MIN_DIFFICULTY_COMPACT, DifficultyParams
from pkt_spec.consensus.difficulty import is_ann_min_diff_ok, validate_coinbase_ann_min_target
from pkt_spec.errors import ErrorCode, SpecError

GENESIS = 0x1D00FFFF


def test_zero_rejected() -> None:
    assert not is_ann_min_diff_ok(0)


def test_above_ceiling_rejected() -> None:
    assert not is_ann_min_diff_ok(ANN_MIN_DIFF_CEILING + 1)
    assert not is_ann_min_diff_ok(0x21010000)
    assert not is_ann_min_diff_ok(0xFFFFFFFF)


def test_ceiling_itself_is_negative() -> None:
    # 0x20ffffff has the sign bit set
    assert not is_ann_min_diff_ok(ANN_MIN_DIFF_CEILING)
    assert not is_ann_min_diff_ok(0x20800001)


def test_legitimate_targets() -> None:
    assert is_ann_min_diff_ok(GENESIS)
    assert is_ann_min_diff_ok(MIN_DIFFICULTY_COMPACT)
    assert is_ann_min_diff_ok(0x03123456)


def test_target_decoding_to_zero_has_too_much_work() -> None:
    assert not is_ann_min_diff_ok(0x01003456)
    assert not is_ann_min_diff_ok(0x20800000)


def test_never_raises() -> None:
    for target in (-1, 0x04923456, 1 << 40):
        assert not is_ann_min_diff_ok(target)


def test_custom_ceiling() -> None:
    params = DifficultyParams(ann_min_diff_ceiling=0x1D00FFFF)
    assert is_ann_min_diff_ok(GENESIS, params)
    assert not is_ann_min_diff_ok(MIN_DIFFICULTY_COMPACT, params)


def test_commitment_accepts_covering_target() -> None:
    anns = [(GENESIS, ANN_WAIT_PERIOD), (GENESIS, ANN_WAIT_PERIOD + 2)]
    validate_coinbase_ann_min_target(0x1D01FFFE, anns)
    validate_coinbase_ann_min_target(MIN_DIFFICULTY_COMPACT, anns)
    validate_coinbase_ann_min_target(GENESIS, [])


def test_commitment_too_much_work() -> None:
    with pytest.raises(SpecError) as exc:
        validate_coinbase_ann_min_target(GENESIS, [(GENESIS, ANN_WAIT_PERIOD + 2)])
    assert exc.value.code == ErrorCode.ANN_TARGET_TOO_HIGH


def test_commitment_unusable_ann() -> None:
    with pytest.raises(SpecError) as exc:
        validate_coinbase_ann_min_target(GENESIS, [(GENESIS, ANN_WAIT_PERIOD - 1)])
    assert exc.value.code == ErrorCode.ANN_NOT_USABLE


def test_commitment_out_of_range() -> None:
    with pytest.raises(SpecError) as exc:
        validate_coinbase_ann_min_target(0, [(GENESIS, ANN_WAIT_PERIOD)])
    assert exc.value.code == ErrorCode.INVALID_ANN_MIN_DIFF
    assert exc.value.code.category.name == "CONSENSUS"


def test_ann_min_diff_vectors(vector_test_group) -> None:
    for target in (0, GENESIS, MIN_DIFFICULTY_COMPACT, ANN_MIN_DIFF_CEILING, ANN_MIN_DIFF_CEILING + 1):
        vector_test_group(
            "consensus/ann_min_diff_ok.json",
            {
                "name": f"ann_min_diff_{target:08x}",
                "input": {"kind": "difficulty", "op": "ann_min_diff_ok", "target": target},
                "expected": {"ok": is_ann_min_diff_ok(target)},
            },
        )
