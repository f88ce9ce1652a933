"""Helpers to evaluate difficulty fixture vectors against the Python specs."""

from __future__ import annotations

from typing import Any, Callable

from pkt_spec.config import DifficultyParams
from pkt_spec.consensus.difficulty import (
    get_aged_ann_target,
    get_effective_target,
    is_ann_min_diff_ok,
    is_ok,
)
from pkt_spec.consensus.work import target_for_work, work_for_target


def _hex_to_int(v: str) -> int:
    v = v[2:] if v.startswith(("0x", "0X")) else v
    return int(v, 16) if v else 0


def _int_to_hex(v: int) -> str:
    size = 33 if v >= 1 << 256 else 32
    return v.to_bytes(size, "big").hex()


def _effective_target(inp: dict[str, Any], params: DifficultyParams) -> dict[str, Any]:
    return {
        "effective_target": get_effective_target(
            inp["block_header_target"], inp["min_ann_target"], inp["ann_count"], params
        )
    }


def _is_ok(inp: dict[str, Any], params: DifficultyParams) -> dict[str, Any]:
    return {"ok": is_ok(bytes.fromhex(inp["hash_hex"]), inp["target"])}


def _aged_ann_target(inp: dict[str, Any], params: DifficultyParams) -> dict[str, Any]:
    return {"aged_target": get_aged_ann_target(inp["target"], inp["ann_age_blocks"], params)}


def _ann_min_diff_ok(inp: dict[str, Any], params: DifficultyParams) -> dict[str, Any]:
    return {"ok": is_ann_min_diff_ok(inp["target"], params)}


def _work_for_target(inp: dict[str, Any], params: DifficultyParams) -> dict[str, Any]:
    return {"work_hex": _int_to_hex(work_for_target(_hex_to_int(inp["target_hex"])))}


def _target_for_work(inp: dict[str, Any], params: DifficultyParams) -> dict[str, Any]:
    return {"target_hex": _int_to_hex(target_for_work(_hex_to_int(inp["work_hex"])))}


OPERATIONS: dict[str, Callable[[dict[str, Any], DifficultyParams], dict[str, Any]]] = {
    "effective_target": _effective_target,
    "is_ok": _is_ok,
    "aged_ann_target": _aged_ann_target,
    "ann_min_diff_ok": _ann_min_diff_ok,
    "work_for_target": _work_for_target,
    "target_for_work": _target_for_work,
}


def is_runnable(vector: dict[str, Any]) -> bool:
    """Spec-only vectors are marked `runnable: False` and carry no operation."""
    return vector.get("runnable", True) is not False


def evaluate_vector(vector: dict[str, Any], params: DifficultyParams | None = None) -> dict[str, Any]:
    """Run a vector's input through the rules and return the actual outputs."""
    inp = vector["input"]
    op = inp.get("op")
    if op not in OPERATIONS:
        raise KeyError(f"unknown operation: {op!r}")
    return OPERATIONS[op](inp, params or DifficultyParams())


def check_vector(vector: dict[str, Any], params: DifficultyParams | None = None) -> list[str]:
    """Return the expected fields whose value differs from the rules' output."""
    actual = evaluate_vector(vector, params)
    expected = vector.get("expected", {})
    return [key for key, value in expected.items() if actual.get(key) != value]
