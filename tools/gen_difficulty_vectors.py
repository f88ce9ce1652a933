"""Generate difficulty YAML vectors from Python specs."""

from __future__ import annotations

from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "src"))
sys.path.insert(0, str(ROOT / "tools"))

from pkt_spec.consensus.difficulty_vectors import all_difficulty_vectors  # noqa: E402
from vector_yaml import count_vectors, write_vector_set  # noqa: E402


def main() -> None:
    out = ROOT / "fixtures" / "consensus"
    paths = write_vector_set(out, all_difficulty_vectors())
    print(f"Wrote {count_vectors(paths)} vectors to {len(paths)} files in {out}")


if __name__ == "__main__":
    main()
