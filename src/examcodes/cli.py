"""Command-line entry point: generate exam codes with a minimum Hamming distance."""

from __future__ import annotations

import argparse
import concurrent.futures as cf
import random
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .codefile import READ_ERRORS, read_codes, read_error_reason, write_codes
from .generator import (
    GenerationStalled,
    GroupSpec,
    _generate_group_details,
    derive_group_seeds,
    max_group_size,
)
from .groups import DEFAULT_GROUPS, output_filename, parse_group_spec

_DESCRIPTION = (
    "Produce sets of random exam numbers such that no two numbers in the same "
    "file are very similar: any pair differs in at least MIN_HAMMING_DISTANCE "
    "characters. Requests that cannot be satisfied keep retrying until "
    "interrupted unless --max-attempts is given."
)

_GROUPS_HELP = (
    "How many codes to make, optionally with a prefix. '78' means 78 codes with "
    "no prefix, stored in prefix_.txt. 'AB3:78' means 78 codes starting with "
    "'AB3', stored in prefix_AB3.txt. Several may be given, e.g. 'A:500 B:200'. "
    "Default: 100 codes with no prefix."
)


def _nonneg_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"invalid value '{value}'; expected a nonnegative integer"
        ) from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError(
            f"invalid value '{value}'; expected a nonnegative integer"
        )
    return parsed


def _positive_int(value: str) -> int:
    parsed = _nonneg_int(value)
    if parsed == 0:
        raise argparse.ArgumentTypeError(
            f"invalid value '{value}'; expected a positive integer"
        )
    return parsed


def _group_arg(value: str) -> GroupSpec:
    try:
        return parse_group_spec(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="examcodes", description=_DESCRIPTION)
    parser.add_argument(
        "min_hamming_distance",
        type=_nonneg_int,
        help="Minimum number of differing characters between any two codes.",
    )
    parser.add_argument(
        "digits", type=_positive_int, help="Number of digits in each code."
    )
    parser.add_argument("groups", nargs="*", type=_group_arg, help=_GROUPS_HELP)
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="RNG seed, to make a reproducible list (default: system entropy).",
    )
    parser.add_argument(
        "--existing",
        action="append",
        default=[],
        metavar="PATH",
        help="File of existing codes to avoid, one per line (repeatable).",
    )
    parser.add_argument(
        "--out-dir", default=".", help="Directory for prefix_*.txt files."
    )
    parser.add_argument(
        "--max-attempts",
        type=_positive_int,
        default=None,
        help="Give up after this many consecutive rejected draws (default: never).",
    )
    parser.add_argument(
        "--jobs",
        type=_positive_int,
        default=1,
        help="Generate groups in parallel processes (disables per-draw ticks).",
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Do not print one tick per draw."
    )
    return parser


def _tick(accepted: bool) -> None:
    print("+" if accepted else ".", end="", flush=True)


def _group_worker(
    prefix: str,
    digits: int,
    min_distance: int,
    count: int,
    seed: int,
    existing: Sequence[str],
    max_attempts: Optional[int],
) -> Tuple[List[str], int]:
    return _generate_group_details(
        prefix,
        digits,
        min_distance,
        count,
        random.Random(seed),
        existing=existing,
        max_attempts=max_attempts,
    )


def _load_existing(paths: Sequence[str]) -> Optional[List[str]]:
    existing: List[str] = []
    for path in paths:
        try:
            codes = read_codes(path)
        except READ_ERRORS as exc:
            print(f"error: cannot read {path}: {read_error_reason(exc)}", file=sys.stderr)
            return None
        existing.extend(codes)
        print(f"[existing] read {path} containing {len(codes)} entries", flush=True)
    return existing


def _warn_if_infeasible(groups: Sequence[GroupSpec], digits: int, min_distance: int) -> None:
    bound = max_group_size(digits, min_distance)
    if bound is None:
        return
    for spec in groups:
        if spec.count > bound:
            print(
                f"[gen] WARNING: prefix='{spec.prefix}' wants {spec.count} codes but at "
                f"most {bound} {digits}-digit codes can be {min_distance} apart; "
                "generation will not finish on its own.",
                file=sys.stderr,
                flush=True,
            )


def _finish_group(
    spec: GroupSpec, codes: List[str], attempts: int, out_dir: Path
) -> None:
    path = out_dir / output_filename(spec.prefix)
    write_codes(path, codes)
    print(
        f"[gen] prefix='{spec.prefix}' found {len(codes)} of {spec.count} "
        f"attempts={attempts} -> {path}",
        flush=True,
    )


def _run_sequential(
    groups: Sequence[GroupSpec],
    seeds: Sequence[int],
    args: argparse.Namespace,
    existing: Sequence[str],
    out_dir: Path,
) -> None:
    progress = None if args.quiet else _tick
    for spec, seed in zip(groups, seeds):
        print(f"[gen] prefix='{spec.prefix}' target={spec.count}", flush=True)
        try:
            codes, attempts = _generate_group_details(
                spec.prefix,
                args.digits,
                args.min_hamming_distance,
                spec.count,
                random.Random(seed),
                existing=existing,
                progress=progress,
                max_attempts=args.max_attempts,
            )
        finally:
            if progress is not None and spec.count > 0:
                print(flush=True)
        _finish_group(spec, codes, attempts, out_dir)


def _run_parallel(
    groups: Sequence[GroupSpec],
    seeds: Sequence[int],
    args: argparse.Namespace,
    existing: Sequence[str],
    out_dir: Path,
) -> None:
    with cf.ProcessPoolExecutor(max_workers=args.jobs) as pool:
        futures = []
        for spec, seed in zip(groups, seeds):
            print(f"[gen] prefix='{spec.prefix}' target={spec.count}", flush=True)
            futures.append(
                pool.submit(
                    _group_worker,
                    spec.prefix,
                    args.digits,
                    args.min_hamming_distance,
                    spec.count,
                    seed,
                    list(existing),
                    args.max_attempts,
                )
            )
        for spec, future in zip(groups, futures):
            codes, attempts = future.result()
            _finish_group(spec, codes, attempts, out_dir)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    groups: List[GroupSpec] = args.groups or list(DEFAULT_GROUPS)
    seen_prefixes = set()
    for spec in groups:
        if spec.prefix in seen_prefixes:
            parser.error(
                f"prefix '{spec.prefix}' is given more than once; "
                "each prefix writes its own prefix_<PREFIX>.txt"
            )
        seen_prefixes.add(spec.prefix)
    out_dir = Path(args.out_dir)

    existing = _load_existing(args.existing)
    if existing is None:
        return 1

    _warn_if_infeasible(groups, args.digits, args.min_hamming_distance)
    rng = random.Random(args.seed)
    seeds = derive_group_seeds(groups, rng)

    try:
        if args.jobs > 1 and len(groups) > 1:
            _run_parallel(groups, seeds, args, existing, out_dir)
        else:
            _run_sequential(groups, seeds, args, existing, out_dir)
    except GenerationStalled as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: cannot write {exc.filename}: {exc.strerror}", file=sys.stderr)
        return 1

    print("All finished!", flush=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
