#!/usr/bin/env python3
from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import eastcal


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "eastcal[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "eastcal[diagnostics]"') from e


@dataclass(frozen=True)
class Style:
    marker: str
    size: float
    hollow: bool
    color: str = "0.15"
    lw: float = 1.2
    alpha: float = 0.95


MARKERS: Tuple[Style, ...] = (
    Style(marker="o", size=22, hollow=False),
    Style(marker="o", size=95, hollow=True),
    Style(marker="^", size=90, hollow=True),
)


def parse_variants(s: str) -> List[str]:
    out = [x.strip() for x in s.split(",") if x.strip()]
    if not (1 <= len(out) <= 3):
        raise SystemExit("--variants must contain 1 to 3 comma-separated variants")
    return out


def leap_points(variant: str, start_year: int, end_year: int) -> List[Tuple[int, int]]:
    """(related Gregorian year, leap month number) for every year with a leap month."""
    var = eastcal.get_variant(variant)
    out = []
    for Y in range(max(start_year, var.table.first_year), min(end_year, var.table.last_year) + 1):
        leap = var.system.layout(Y).leap_month
        if leap:
            out.append((Y, leap))
    return out


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(
        description="Leap-month barcode diagram across calendar variants (square cell grid only)."
    )
    p.add_argument("--start-year", type=int, default=1960)
    p.add_argument("--end-year", type=int, default=2030)
    p.add_argument("--out", default="leapmonth_barcode.png")
    p.add_argument("--title", default="Leap month pattern")
    p.add_argument(
        "--variants",
        default="chinese",
        help="Comma list of 1-3 variants to plot (default: chinese).",
    )
    p.add_argument("--cell-edge", default="0.88", help="Cell border color (matplotlib gray string).")
    p.add_argument("--cell-lw", type=float, default=0.6, help="Cell border line width.")
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()
    from matplotlib.colors import ListedColormap

    start_year, end_year = args.start_year, args.end_year
    if end_year < start_year:
        raise SystemExit("--end-year must be >= --start-year")

    variants = parse_variants(args.variants)
    known = eastcal.list_variants()
    for v in variants:
        if v not in known:
            raise SystemExit(f"Unknown variant '{v}'. Known: {known}")

    fig, ax = plt.subplots(figsize=(16, 3.6))

    # --- square cell grid ONLY ---
    x_edges = np.arange(start_year - 0.5, end_year + 1.5, 1.0)
    y_edges = np.arange(0.5, 13.5, 1.0)
    Z = np.zeros((12, end_year - start_year + 1), dtype=float)
    ax.pcolormesh(
        x_edges,
        y_edges,
        Z,
        shading="flat",
        cmap=ListedColormap(["white"]),
        vmin=0, vmax=1,
        edgecolors=args.cell_edge,
        linewidth=float(args.cell_lw),
        antialiased=True,
        zorder=0,
    )

    ax.set_xlim(start_year - 0.5, end_year + 0.5)
    ax.set_ylim(0.5, 12.5)
    ax.grid(False)
    ax.tick_params(axis="both", which="both", length=0)
    ax.set_xlabel("Related Gregorian year")
    ax.set_yticks([1, 3, 6, 9, 12])
    ax.set_ylabel("Leap month (follows month number)")

    styles: Dict[str, Style] = {v: MARKERS[i] for i, v in enumerate(variants)}
    for v, st in styles.items():
        pts = leap_points(v, start_year, end_year)
        x = np.array([y for y, _ in pts], dtype=int)
        m = np.array([n for _, n in pts], dtype=int)
        kw = (
            {"facecolors": "none", "edgecolors": st.color, "linewidths": st.lw}
            if st.hollow else {"c": st.color, "linewidths": 0.0}
        )
        ax.scatter(x, m, s=st.size, marker=st.marker, alpha=st.alpha, label=v, zorder=5, **kw)

    ax.set_title(args.title)
    ax.legend(loc="center left", bbox_to_anchor=(1.01, 0.5), frameon=False)
    fig.tight_layout()
    fig.savefig(args.out, dpi=250)
    print(f"Saved: {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
