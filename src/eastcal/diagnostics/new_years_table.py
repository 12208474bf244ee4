from __future__ import annotations

from datetime import date
import argparse
from typing import List, Optional, Tuple

import eastcal
from eastcal.core.cyclic import CyclicYear


def mmdd(d: date) -> str:
    return f"{d.month:02d}-{d.day:02d}"


def parse_variants(arg: str) -> List[Tuple[str, str]]:
    """
    Parse variants list from CLI.
    Example:
      --variants "China=chinese,Test=my_variant"
    If you pass just variant names, column titles will be the capitalized names:
      --variants "chinese"
    """
    items = [x.strip() for x in arg.split(",") if x.strip()]
    out: List[Tuple[str, str]] = []
    for it in items:
        if "=" in it:
            name, var = it.split("=", 1)
            out.append((name.strip(), var.strip()))
        else:
            out.append((it.capitalize(), it))
    return out


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(
        description="Print East-Asian New Year date table, with cyclic year names and leap months."
    )
    p.add_argument("--from-year", type=int, default=2000)
    p.add_argument("--to-year", type=int, default=2030)
    p.add_argument(
        "--variants",
        type=str,
        default="",
        help='Comma list like "China=chinese" (default: all registered variants).',
    )
    p.add_argument(
        "--dates",
        choices=("mmdd", "iso"),
        default="mmdd",
        help="Display format in table columns (default: mmdd).",
    )
    args = p.parse_args(argv)

    variants = (
        parse_variants(args.variants) if args.variants
        else [(v.capitalize(), v) for v in eastcal.list_variants()]
    )

    def fmt(d: date) -> str:
        return mmdd(d) if args.dates == "mmdd" else d.isoformat()

    Y0, Y1 = args.from_year, args.to_year
    if Y1 < Y0:
        raise SystemExit("--to-year must be >= --from-year")

    # table header
    headers = ["Year", "Cyclic"] + [name for name, _ in variants] + ["Leap"]
    colw = [5, 10] + [max(10, len(h)) for h in headers[2:-1]] + [4]
    line = "  ".join(h.ljust(w) for h, w in zip(headers, colw))
    print(line)
    print("-" * len(line))

    for Y in range(Y0, Y1 + 1):
        row = [str(Y).ljust(colw[0]), CyclicYear.for_gregorian(Y).display_name.ljust(colw[1])]
        leaps = []
        for (name, var), w in zip(variants, colw[2:-1]):
            try:
                row.append(fmt(eastcal.new_year_day(Y, variant=var)).ljust(w))
            except eastcal.DateRangeError:
                row.append("-".ljust(w))
                continue
            layout = eastcal.get_variant(var).system.layout(Y)
            if layout.leap_month:
                leaps.append(str(layout.leap_month))
        row.append("/".join(sorted(set(leaps))) or "-")
        print("  ".join(row))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
