"""Plain-text code lists: one code per line."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

# Failures a caller should report as "cannot read <path>".
READ_ERRORS = (OSError, UnicodeDecodeError)


def write_codes(path: str | Path, codes: Iterable[str]) -> None:
    """Write codes one per line, newline-terminated."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8") as f:
        for code in codes:
            f.write(f"{code}\n")


def read_codes(path: str | Path) -> List[str]:
    """Read codes one per line, skipping blank lines and a leading BOM."""
    codes: List[str] = []
    with Path(path).open("r", encoding="utf-8-sig") as f:
        for line in f:
            code = line.rstrip()
            if code:
                codes.append(code)
    return codes


def read_error_reason(exc: Exception) -> str:
    if isinstance(exc, UnicodeDecodeError):
        bad = exc.object[exc.start]
        return f"not UTF-8 text (byte 0x{bad:02x} at offset {exc.start})"
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc)


__all__ = ["READ_ERRORS", "write_codes", "read_codes", "read_error_reason"]
