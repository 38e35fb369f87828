#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import csv
import os
import sys
from dataclasses import dataclass
from typing import List, Optional

# Allow running this script directly via `python scripts/fen_check.py`
# by adding the repo root (which contains `fenboard/`) to sys.path.
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from fenboard.engine.errors import FenError
from fenboard.engine.fen import parse_fen, to_fen


@dataclass
class CheckResult:
    line_no: int
    fen: str
    status: str  # ok | normalized | error
    output: str
    error_field: Optional[str] = None


def check_line(fen: str, line_no: int) -> CheckResult:
    try:
        out = to_fen(parse_fen(fen))
    except FenError as e:
        return CheckResult(line_no, fen, "error", e.message, error_field=e.field)
    return CheckResult(line_no, fen, "ok" if out == fen else "normalized", out)


def check_file(path: str) -> List[CheckResult]:
    results: List[CheckResult] = []
    with open(path, "r", encoding="utf-8") as f:
        for i, line in enumerate(f, start=1):
            s = line.strip()
            if not s or s.startswith("#"):
                continue
            results.append(check_line(s, i))
    return results


def main() -> None:
    parser = argparse.ArgumentParser(description="Parse and re-serialize FEN lines from a file")
    parser.add_argument("path", type=str, help="File with one FEN per line ('#' comments allowed)")
    parser.add_argument("--csv", type=str, default=None, help="Write per-line results to CSV")
    args = parser.parse_args()

    results = check_file(args.path)
    for r in results:
        if r.status == "error":
            print(f"line {r.line_no}: error in {r.error_field}: {r.output}", file=sys.stderr)
        elif r.status == "normalized":
            print(f"line {r.line_no}: normalized to {r.output}")

    if args.csv:
        with open(args.csv, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(["line", "status", "input", "output", "error_field"])
            for r in results:
                w.writerow([r.line_no, r.status, r.fen, r.output, r.error_field or ""])

    errors = sum(1 for r in results if r.status == "error")
    print(f"checked={len(results)} ok={sum(1 for r in results if r.status == 'ok')} errors={errors}")
    if errors:
        sys.exit(1)


if __name__ == "__main__":
    main()
