"""Run pytest to fill difficulty fixtures, then optionally re-check them."""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
OUT = ROOT / "fixtures"


def main() -> int:
    parser = argparse.ArgumentParser(description="Fill PKT difficulty fixtures")
    parser.add_argument("--output", default=str(OUT), help="Fixture output directory")
    parser.add_argument(
        "--consume",
        action="store_true",
        help="Re-run every written vector through tools/consume.py",
    )
    args = parser.parse_args()

    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join([str(ROOT / "src"), str(ROOT)])

    cmd = [
        sys.executable,
        "-m",
        "pytest",
        str(ROOT / "tests"),
        "-q",
        "--output",
        args.output,
    ]
    print("Running:", " ".join(cmd))
    rc = subprocess.call(cmd, env=env, cwd=str(ROOT))
    if rc != 0 or not args.consume:
        return rc
    return subprocess.call([sys.executable, str(ROOT / "tools" / "consume.py")], env=env, cwd=str(ROOT))


if __name__ == "__main__":
    raise SystemExit(main())
