"""Report the minimum pairwise Hamming distance of saved code lists."""

from __future__ import annotations

import argparse
import sys
from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Tuple

from .codefile import READ_ERRORS, read_codes, read_error_reason
from .distance import closest_pairs


def _split_by_length(codes: Sequence[str]) -> Dict[int, List[str]]:
    by_len: Dict[int, List[str]] = defaultdict(list)
    for code in codes:
        by_len[len(code)].append(code)
    return dict(sorted(by_len.items()))


def summarize_codes(
    label: str, codes: Sequence[str], show: int
) -> Tuple[Optional[int], List[str]]:
    """Return (min distance or None, report lines) for one code list."""
    lines: List[str] = []
    overall: Optional[int] = None
    for length, same_len in _split_by_length(codes).items():
        pairs = closest_pairs(same_len, max(show, 1))
        d_min = pairs[0][2] if pairs else None
        d_text = "-" if d_min is None else str(d_min)
        lines.append(
            f"[check] {label} len={length} codes={len(same_len)} min_distance={d_text}"
        )
        for i, j, d in pairs[:show]:
            lines.append(f"  d={d} {same_len[i]} {same_len[j]}")
        if d_min is not None and (overall is None or d_min < overall):
            overall = d_min
    if not codes:
        lines.append(f"[check] {label} codes=0 min_distance=-")
    return overall, lines


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="examcodes-check",
        description="Check the minimum pairwise Hamming distance of code files.",
    )
    parser.add_argument("files", nargs="+", help="Code files, one code per line.")
    parser.add_argument(
        "--min-distance",
        type=int,
        default=None,
        help="Exit with status 1 if any checked set is closer than this.",
    )
    parser.add_argument(
        "--show", type=int, default=5, help="Number of closest pairs to list."
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Also check all files combined.",
    )
    args = parser.parse_args(argv)
    if args.show < 0:
        parser.error("--show must be nonnegative.")

    sets: List[Tuple[str, List[str]]] = []
    for path in args.files:
        try:
            sets.append((path, read_codes(path)))
        except READ_ERRORS as exc:
            print(f"error: cannot read {path}: {read_error_reason(exc)}", file=sys.stderr)
            return 1
    if args.all and len(sets) > 1:
        combined = [code for _, codes in sets for code in codes]
        sets.append(("<all>", combined))

    ok = True
    for label, codes in sets:
        d_min, lines = summarize_codes(label, codes, args.show)
        for line in lines:
            print(line, flush=True)
        if args.min_distance is not None and d_min is not None and d_min < args.min_distance:
            print(
                f"[check] {label} FAIL: min_distance={d_min} < {args.min_distance}",
                file=sys.stderr,
            )
            ok = False
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
