"""Consume fixtures and validate against Python specs."""

from __future__ import annotations

import json
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "src"))
sys.path.insert(0, str(ROOT / "tools"))

from fixtures_io import check_vector, is_runnable  # noqa: E402


def _check_vector_file(path: Path) -> list[str]:
    failures: list[str] = []
    data = json.loads(path.read_text())

    for vec in data.get("test_vectors", []):
        if not is_runnable(vec):
            continue
        try:
            mismatched = check_vector(vec)
        except Exception as e:
            failures.append(f"{vec.get('name')}: error {e}")
            continue
        for field in mismatched:
            failures.append(f"{vec['name']}: {field}_mismatch")

    return failures


def main() -> None:
    fixtures = ROOT / "fixtures"

    failures: list[str] = []
    checked = 0

    for path in sorted(fixtures.rglob("*.json")):
        failures.extend(_check_vector_file(path))
        checked += 1

    if failures:
        for f in failures:
            print("FAIL", f)
        raise SystemExit(1)

    print(f"All fixtures passed ({checked} files)")


if __name__ == "__main__":
    main()
