"""Compact target codec."""

from __future__ import annotations

import pytest

from pkt_spec.consensus.compact import big_to_compact, compact_to_big, target_from_compact
from pkt_spec.errors import ErrorCode, SpecError


def test_bitcoin_genesis_bits() -> None:
    assert compact_to_big(0x1D00FFFF) == 0xFFFF << 208
    assert big_to_compact(0xFFFF << 208) == 0x1D00FFFF


def test_min_difficulty_bits() -> None:
    assert compact_to_big(0x207FFFFF) == 0x7FFFFF << 232
    assert big_to_compact(0x7FFFFF << 232) == 0x207FFFFF


def test_small_exponents_shift_right() -> None:
    assert compact_to_big(0x03123456) == 0x123456
    assert compact_to_big(0x02123456) == 0x1234
    assert compact_to_big(0x01123456) == 0x12
    assert compact_to_big(0x01003456) == 0
    assert compact_to_big(0x00123456) == 0


def test_big_to_compact_small_values() -> None:
    assert big_to_compact(0) == 0
    assert big_to_compact(0x12) == 0x01120000
    assert big_to_compact(0x1234) == 0x02123400
    assert big_to_compact(0x123456) == 0x03123456
    # 0x80 would collide with the sign bit, so it moves up a byte
    assert big_to_compact(0x80) == 0x02008000
    assert big_to_compact(256) == 0x02010000


def test_normalisation() -> None:
    assert big_to_compact(compact_to_big(0x04000001)) == 0x02010000
    assert big_to_compact(compact_to_big(0x05000000)) == 0


def test_two_256_and_max() -> None:
    assert compact_to_big(0x21010000) == 1 << 256
    assert big_to_compact(1 << 256) == 0x21010000
    assert big_to_compact((1 << 256) - 1) == 0x2100FFFF


def test_sign_bit() -> None:
    assert compact_to_big(0x04923456) == -0x12345600
    assert big_to_compact(-0x12345600) == 0x04923456
    # negative zero decodes to zero
    assert compact_to_big(0x20800000) == 0


def test_target_from_compact_rejects_negative() -> None:
    assert target_from_compact(0x1D00FFFF) == 0xFFFF << 208
    assert target_from_compact(0x20800000) == 0
    with pytest.raises(SpecError) as exc:
        target_from_compact(0x04923456)
    assert exc.value.code == ErrorCode.NEGATIVE_TARGET


@pytest.mark.parametrize("bad", [-1, 1 << 32, "0x1d00ffff"])
def test_compact_must_be_u32(bad) -> None:
    with pytest.raises(SpecError) as exc:
        compact_to_big(bad)
    assert exc.value.code == ErrorCode.INVALID_COMPACT


def test_big_to_compact_overflow() -> None:
    with pytest.raises(SpecError) as exc:
        big_to_compact(1 << (8 * 256))
    assert exc.value.code == ErrorCode.OVERFLOW


def test_compact_vectors(vector_test_group) -> None:
    for compact in (0x1D00FFFF, 0x207FFFFF, 0x03123456, 0x21010000):
        vector_test_group(
            "consensus/compact.json",
            {
                "name": f"compact_{compact:08x}",
                "description": "compact decode/encode",
                "runnable": False,
                "input": {"kind": "spec", "compact": compact},
                "expected": {
                    "target_hex": hex(compact_to_big(compact)),
                    "normalised": big_to_compact(compact_to_big(compact)),
                },
            },
        )
