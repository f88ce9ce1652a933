#!/usr/bin/env python3
"""
PKT difficulty calculator

Evaluates the PacketCrypt difficulty rules from the command line and checks
YAML/JSON vector files against the Python specs.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "src"))
sys.path.insert(0, str(ROOT / "tools"))

from pkt_spec.config import DifficultyParams  # noqa: E402
from pkt_spec.consensus.difficulty import (  # noqa: E402
    age_ann_target,
    get_effective_target,
    is_ann_min_diff_ok,
    is_ok,
)
from pkt_spec.errors import SpecError  # noqa: E402
from fixtures_io import check_vector, is_runnable  # noqa: E402
from vector_yaml import iter_vector_files, load_vectors  # noqa: E402

logger = logging.getLogger("diffcalc")


def _parse_int(value: str) -> int:
    try:
        return int(value, 0)
    except ValueError:
        raise click.BadParameter(f"not an integer: {value!r}")


@click.group()
@click.option("--verbose", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """PacketCrypt difficulty rules."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    try:
        ctx.obj = DifficultyParams.from_env()
    except SpecError as e:
        raise click.UsageError(str(e))
    logger.debug(f"Using {ctx.obj}")


@cli.command("effective-target")
@click.argument("header_target")
@click.argument("min_ann_target")
@click.argument("ann_count")
@click.pass_obj
def effective_target_cmd(
    params: DifficultyParams, header_target: str, min_ann_target: str, ann_count: str
) -> None:
    """Effective compact target for a block."""
    try:
        out = get_effective_target(
            _parse_int(header_target), _parse_int(min_ann_target), _parse_int(ann_count), params
        )
    except SpecError as e:
        raise click.ClickException(str(e))
    click.echo(f"{out:#010x}")


@cli.command("aged-target")
@click.argument("target")
@click.argument("ann_age_blocks")
@click.pass_obj
def aged_target_cmd(params: DifficultyParams, target: str, ann_age_blocks: str) -> None:
    """Aged compact target of an announcement."""
    try:
        aged = age_ann_target(_parse_int(target), _parse_int(ann_age_blocks), params)
    except SpecError as e:
        raise click.ClickException(str(e))
    if not aged.usable:
        logger.info("Announcement is not usable at this age")
    click.echo(f"{aged.to_compact():#010x}")


@cli.command("is-ok")
@click.argument("hash_hex")
@click.argument("target")
def is_ok_cmd(hash_hex: str, target: str) -> None:
    """Check a little-endian hash against a compact target."""
    try:
        ok = is_ok(bytes.fromhex(hash_hex), _parse_int(target))
    except SpecError as e:
        raise click.ClickException(str(e))
    except ValueError:
        raise click.BadParameter(f"not a hex string: {hash_hex!r}")
    click.echo("ok" if ok else "fail")
    if not ok:
        sys.exit(1)


@cli.command("ann-min-diff-ok")
@click.argument("target")
@click.pass_obj
def ann_min_diff_ok_cmd(params: DifficultyParams, target: str) -> None:
    """Sanity check a committed minimum announcement target."""
    ok = is_ann_min_diff_ok(_parse_int(target), params)
    click.echo("ok" if ok else "fail")
    if not ok:
        sys.exit(1)


@cli.command("check-vectors")
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@click.option("--stop-on-failure", is_flag=True, help="Stop on first vector failure")
@click.pass_obj
def check_vectors_cmd(params: DifficultyParams, path: Path, stop_on_failure: bool) -> None:
    """Check vector files (YAML or JSON) against the Python specs."""
    passed = 0
    failed = 0

    for vector_file in iter_vector_files(path):
        vectors = load_vectors(vector_file)
        logger.info(f"Checking {len(vectors)} vectors from {vector_file}")
        for vector in vectors:
            name = vector.get("name", "unknown")
            if not is_runnable(vector):
                logger.debug(f"{name}: skipped (spec-only)")
                continue
            try:
                mismatched = check_vector(vector, params)
            except Exception:
                logger.exception(f"Error running vector {name}")
                mismatched = ["error"]

            if mismatched:
                failed += 1
                logger.error(f"{name}: mismatch in {', '.join(mismatched)}")
                if stop_on_failure:
                    sys.exit(1)
            else:
                passed += 1
                logger.debug(f"{name}: passed")

    click.echo(f"{passed} passed, {failed} failed")
    if failed:
        sys.exit(1)


if __name__ == "__main__":
    cli()
