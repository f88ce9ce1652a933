"""Read and write difficulty vector files (YAML, or JSON as emitted by fill)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping

import yaml

VECTOR_SUFFIXES = (".yaml", ".yml", ".json")


class PlainDumper(yaml.SafeDumper):
    pass


def _str_representer(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    return dumper.represent_scalar("tag:yaml.org,2002:str", data, style=None)


PlainDumper.add_representer(str, _str_representer)


def _prune(obj: Any) -> Any:
    # optional vector fields are None until set
    if isinstance(obj, dict):
        return {k: _prune(v) for k, v in obj.items() if v is not None}
    if isinstance(obj, list):
        return [_prune(v) for v in obj]
    return obj


def dump_vectors(payload: Mapping[str, Any]) -> str:
    return yaml.dump(_prune(dict(payload)), Dumper=PlainDumper, sort_keys=False, width=4096)


def write_vector_set(out_dir: Path, payloads: Mapping[str, Mapping[str, Any]]) -> List[Path]:
    """Write one `<name>.yaml` per payload and return the written paths."""
    out_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for name, payload in payloads.items():
        path = out_dir / f"{name}.yaml"
        path.write_text(dump_vectors(payload))
        written.append(path)
    return written


def load_vectors(path: Path) -> List[Dict[str, Any]]:
    """Return the test_vectors list of a YAML or JSON vector file.

    Files that are not a mapping (an empty YAML document, a bare list) hold
    no vectors.
    """
    with path.open("r", encoding="utf-8") as handle:
        if path.suffix == ".json":
            data = json.load(handle)
        else:
            data = yaml.safe_load(handle)
    if not isinstance(data, dict):
        return []
    return list(data.get("test_vectors") or [])


def iter_vector_files(path: Path) -> Iterator[Path]:
    if path.is_file():
        yield path
        return
    for suffix in VECTOR_SUFFIXES:
        yield from sorted(path.rglob(f"*{suffix}"))


def count_vectors(paths: Iterable[Path]) -> int:
    return sum(len(load_vectors(p)) for p in paths)
