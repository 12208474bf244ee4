from __future__ import annotations

import argparse
from datetime import date
import logging
import sys
import re
import importlib
import inspect


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _parse_ymd(s: str) -> date:
    y, m, d = map(int, s.split("-"))
    return date(y, m, d)


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def cmd_day(argv: list[str]) -> int:
    import eastcal

    p = argparse.ArgumentParser(prog="eastcal day", description="Gregorian -> East-Asian date")
    p.add_argument("date", help="YYYY-MM-DD")
    p.add_argument("--variant", default="chinese")
    p.add_argument("--debug", action="store_true")
    p.add_argument("--attr", action="append", default=[], help="attribute name (repeatable)")
    args = p.parse_args(argv)

    info = eastcal.day_info(_parse_ymd(args.date), variant=args.variant, attributes=tuple(args.attr), debug=args.debug)
    print(info.east_asian)
    for k, v in (info.attributes or {}).items():
        print(f"  {k:<14} = {v}")
    for k, v in (info.debug or {}).items():
        print(f"  {k:<14} : {v}")
    return 0


def cmd_today(argv: list[str]) -> int:
    import eastcal
    from eastcal.core.options import Leniency

    p = argparse.ArgumentParser(prog="eastcal today", description="Current date in an East-Asian calendar")
    p.add_argument("--tz", default=None, help="IANA timezone id (default: system timezone)")
    p.add_argument("--variant", default="chinese")
    p.add_argument(
        "--start-of-day",
        choices=("midnight", "morning", "evening"),
        default="midnight",
    )
    args = p.parse_args(argv)

    sod = getattr(eastcal.StartOfDay, args.start_of_day.upper())
    d = eastcal.today(args.tz, variant=args.variant, start_of_day=sod, leniency=Leniency.LAX)
    print(d)
    return 0


def cmd_year(argv: list[str]) -> int:
    import eastcal
    from eastcal.core.cyclic import CyclicYear

    p = argparse.ArgumentParser(prog="eastcal year", description="Month layout of one East-Asian year")
    p.add_argument("year", type=int, help="related Gregorian year")
    p.add_argument("--variant", default="chinese")
    args = p.parse_args(argv)

    cy = CyclicYear.for_gregorian(args.year)
    total = eastcal.length_of_year(args.year, era="RELATED_GREGORIAN", variant=args.variant)
    print(f"{cy} cycle {cy.cycle}, year {cy.year_of_cycle} ({cy.element} {cy.zodiac}), {total} days")
    for rec in eastcal.months_in_year(args.year, era="RELATED_GREGORIAN", variant=args.variant):
        label = f"*{rec['month']}" if rec["is_leap_month"] else str(rec["month"])
        print(f"  {rec['ordinal']:>2}  {label:>3}  {rec['days']}  {rec['first_date'].isoformat()}")
    return 0


def cmd_to_gregorian(argv: list[str]) -> int:
    import eastcal

    p = argparse.ArgumentParser(prog="eastcal to-gregorian", description="East-Asian date -> Gregorian")
    p.add_argument("year", type=int)
    p.add_argument("month", type=int)
    p.add_argument("day", type=int)
    p.add_argument("--leap", action="store_true", help="the leap month following MONTH")
    p.add_argument("--era", default=None, help="era name (default: related Gregorian year)")
    p.add_argument("--variant", default="chinese")
    args = p.parse_args(argv)

    try:
        d = eastcal.to_gregorian(args.year, args.month, args.day, leap=args.leap, era=args.era, variant=args.variant)
    except eastcal.EastcalError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    print(d.isoformat())
    return 0


def cmd_pattern(argv: list[str]) -> int:
    import eastcal

    p = argparse.ArgumentParser(prog="eastcal pattern", description="Reference date pattern for a style and locale")
    p.add_argument("style", choices=[s.value for s in eastcal.DisplayStyle])
    p.add_argument("locale", nargs="?", default=None)
    p.add_argument("--variant", default="chinese")
    args = p.parse_args(argv)

    merger = eastcal.get_merger(args.variant)
    print(merger.get_format_pattern(eastcal.DisplayStyle(args.style), args.locale))
    return 0


def cmd_sunrise(argv: list[str]) -> int:
    from eastcal.reference import solar

    p = argparse.ArgumentParser(prog="eastcal sunrise", description="Sunrise (UTC) for a date and location.")
    p.add_argument("date", help="YYYY-MM-DD")
    p.add_argument("--lat", type=float, default=39.9, help="Observer latitude in degrees")
    p.add_argument("--lon", type=float, default=116.4, help="Observer longitude in degrees (positive East)")
    args = p.parse_args(argv)

    rise = solar.sunrise_utc(_parse_ymd(args.date), args.lat, args.lon)
    print(rise.isoformat() if rise is not None else "Sun does not rise or set.")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # shorthand: `eastcal YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        return cmd_day(argv)

    p = argparse.ArgumentParser(prog="eastcal", description="East-Asian lunisolar calendar toolkit CLI.")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("day", help="Gregorian -> East-Asian date")
    sub.add_parser("today", help="Current East-Asian date")
    sub.add_parser("year", help="Month layout of a year")
    sub.add_parser("to-gregorian", help="East-Asian date -> Gregorian")
    sub.add_parser("pattern", help="Reference date pattern")
    sub.add_parser("sunrise", help="Sunrise time used by the sunrise start-of-day")

    # diagnostics
    sub.add_parser("new-years", help="Print New Year table (diagnostics)")
    sub.add_parser("leap-months", help="Leap-month barcode plot (needs diagnostics extras)")

    args, rest = p.parse_known_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s: %(message)s")

    commands = {
        "day": cmd_day,
        "today": cmd_today,
        "year": cmd_year,
        "to-gregorian": cmd_to_gregorian,
        "pattern": cmd_pattern,
        "sunrise": cmd_sunrise,
    }
    if args.cmd in commands:
        return commands[args.cmd](rest)

    if args.cmd == "new-years":
        return _run_module_main("eastcal.diagnostics.new_years_table", rest)

    if args.cmd == "leap-months":
        return _run_module_main("eastcal.diagnostics.leap_months", rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
