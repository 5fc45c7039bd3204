#!/usr/bin/env python3
"""
Mortality Analytics CLI — summaries and table export for the leading-causes dataset.

USAGE:
  python -m mortality.cli summary data/leading_causes.csv       # Overview of the run
  python -m mortality.cli causes data/leading_causes.csv        # Ranked causes, latest year
  python -m mortality.cli causes data/leading_causes.csv --year 2005 --top 5
  python -m mortality.cli causes data/leading_causes.csv --policy states
  python -m mortality.cli leading data/leading_causes.csv --year 2016
  python -m mortality.cli export data/leading_causes.csv > tables.json
  python -m mortality.cli schema

Omitting the path reads MORTALITY_DATA_FILE.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys

from mortality.analytics.causes import national_totals, top_causes
from mortality.analytics.common import sanitize_for_json
from mortality.analytics.states import leading_cause_counts
from mortality.config import DATA_FILE
from mortality.data.schemas import (
    TABLE_MODELS, IntegrityPolicy, NationalPolicy, YearFilter, YearType, table_schema, to_records,
)
from mortality.data.store import MortalityStore
from mortality.errors import MortalityError

logger = logging.getLogger(__name__)


def _load(args) -> MortalityStore:
    """Build a loaded store from the common CLI args."""
    integrity = IntegrityPolicy.DROP if args.drop_invalid else IntegrityPolicy.ABORT
    return MortalityStore().load(
        args.path,
        integrity=integrity,
        national=NationalPolicy(getattr(args, "policy", NationalPolicy.NATIONAL_ROW.value)),
        strict=args.strict,
    )


def _pick_year(store: MortalityStore, year: int | None) -> int | None:
    years = store.years()
    if not years:
        return None
    return year if year is not None else years[-1]


def _year_filter(store: MortalityStore, year: int | None) -> YearFilter | None:
    """Single-year selection, or None when the store holds no years."""
    picked = _pick_year(store, year)
    if picked is None:
        return None
    return YearFilter(YearType.YEAR, year=picked)


def _banner(title: str) -> None:
    print("\n" + "=" * 70)
    print(f"  MORTALITY ANALYTICS — {title}")
    print("=" * 70)


def cmd_summary(args):
    """Overview: row counts, years, national totals, top causes of the latest year."""
    store = _load(args)
    _banner("SUMMARY")
    print(f"  Source:  {store.source}")
    print(f"  Years:   {store.year_span()}")
    print(f"  Rows:    {store.row_count():,} normalized records")
    print(f"  States:  {len(store.states())}")
    print(f"  Causes:  {len(store.causes())}")

    totals = national_totals(store.get_normalized(), store.tables.national_policy)
    if not totals.empty:
        print("\n  Deaths per year (excluding 'All causes'):")
        for _, r in totals.iterrows():
            print(f"    {int(r['year'])}  {int(r['deaths']):>12,}")

    year = _pick_year(store, None)
    if year is not None:
        top = top_causes(store.get_by_cause(YearFilter(YearType.YEAR, year=year)), 3)
        print(f"\n  Top causes in {year}:")
        for _, r in top.iterrows():
            print(f"    #{int(r['rank'])}  {r['cause'][:40]:<42}{int(r['deaths']):>12,}")
    print()


def cmd_causes(args):
    """Ranked causes for one year."""
    store = _load(args)
    years = _year_filter(store, args.year)
    if years is None:
        _banner("CAUSES BY DEATHS")
        print("  No data\n")
        return
    _banner(f"CAUSES BY DEATHS ({years.label})")
    by_cause = store.get_by_cause(years)
    if by_cause.empty:
        print(f"  No data for {years.label}\n")
        return
    for _, r in top_causes(by_cause, args.top).iterrows():
        print(f"  #{int(r['rank']):<4}{r['cause'][:40]:<42}{int(r['deaths']):>12,}")
    print()


def cmd_leading(args):
    """Leading cause per state for one year."""
    store = _load(args)
    years = _year_filter(store, args.year)
    if years is None:
        _banner("LEADING CAUSE BY STATE")
        print("  No data\n")
        return
    _banner(f"LEADING CAUSE BY STATE ({years.label})")
    leading = store.get_leading(years)
    if leading.empty:
        print(f"  No data for {years.label}\n")
        return
    for _, r in leading.iterrows():
        code = r["state_code"] or "--"
        print(f"  {code:<4}{r['state'][:26]:<28}{r['cause'][:36]:<38}{int(r['deaths']):>10,}")

    print("\n  States led:")
    for _, r in leading_cause_counts(leading).iterrows():
        print(f"    {r['cause'][:40]:<42}{int(r['states']):>4}")
    print()


def cmd_export(args):
    """Write all three tables as JSON to stdout."""
    store = _load(args)
    tables = store.tables.as_dict()
    payload = {
        "source": str(store.source),
        "national_policy": store.tables.national_policy.value,
        "schemas": {name: table_schema(model) for name, model in TABLE_MODELS.items()},
        "tables": {name: to_records(tables[name], model) for name, model in TABLE_MODELS.items()},
    }
    json.dump(sanitize_for_json(payload), sys.stdout, separators=(",", ":"))
    sys.stdout.write("\n")


def cmd_schema(args):
    """Print column → type for every output table."""
    for name, model in TABLE_MODELS.items():
        print(f"\n{name}:")
        for col, typ in table_schema(model).items():
            print(f"  {col:<20}{typ}")
    print()


def _add_input_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("path", nargs="?", default=str(DATA_FILE), help="Input CSV (default: MORTALITY_DATA_FILE)")
    p.add_argument("--drop-invalid", action="store_true", help="Drop records that fail sanity checks instead of aborting")
    p.add_argument("--strict", action="store_true", help="Reject cause labels outside the canonical set")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Mortality Analytics — leading causes of death in the United States",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log pipeline progress")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    summary_parser = subparsers.add_parser("summary", help="Overview of the dataset")
    _add_input_args(summary_parser)
    summary_parser.set_defaults(func=cmd_summary)

    causes_parser = subparsers.add_parser("causes", help="Ranked causes for a year")
    _add_input_args(causes_parser)
    causes_parser.add_argument("--year", type=int, help="Year (default: latest)")
    causes_parser.add_argument("--top", type=int, default=10, help="Show top N causes (default 10)")
    causes_parser.add_argument(
        "--policy", choices=[p.value for p in NationalPolicy], default=NationalPolicy.NATIONAL_ROW.value,
        help="national: use the 'United States' rows; states: sum the per-state rows",
    )
    causes_parser.set_defaults(func=cmd_causes)

    leading_parser = subparsers.add_parser("leading", help="Leading cause per state")
    _add_input_args(leading_parser)
    leading_parser.add_argument("--year", type=int, help="Year (default: latest)")
    leading_parser.set_defaults(func=cmd_leading)

    export_parser = subparsers.add_parser("export", help="All tables as JSON on stdout")
    _add_input_args(export_parser)
    export_parser.set_defaults(func=cmd_export)

    schema_parser = subparsers.add_parser("schema", help="Output table schemas")
    schema_parser.set_defaults(func=cmd_schema)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    try:
        args.func(args)
    except MortalityError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
