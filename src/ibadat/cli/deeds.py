"""Command-line access to the deed canonicalizer, advisor, and aggregation.

Examples::

    ibadat-deeds canonicalize "yasin" "darood khizri"
    ibadat-deeds check "Darood Khizry" --known "Darood Khizri"
    ibadat-deeds aggregate export.json --format json --since 2024-03-10
    ibadat-deeds import chat.txt --occasion ramadan-2024
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, List, Sequence

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ibadat.normalization import DeedCategory, build_known_pool, get_canonicalizer
from ibadat.observability import configure_logging
from ibadat.services import (
    DeedEntry,
    DeedIntakeService,
    IntakeError,
    aggregate_totals,
    build_intake_service,
    compose_dua_text,
    filter_entries,
)

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONCERN = 1
EXIT_BAD_INPUT = 2


def _read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def _load_entries(path: Path) -> List[DeedEntry]:
    """Read a JSON export: either a list of entries or ``{"entries": [...]}``."""

    payload = _read_json(path)
    if isinstance(payload, dict):
        payload = payload.get("entries", [])
    if not isinstance(payload, list):
        raise ValueError(f"{path} does not contain a list of entries")
    return [DeedEntry.model_validate(item) for item in payload]


def _load_pool(path: Path) -> List[str]:
    """Read known names from a JSON list or a newline-delimited text file."""

    if path.suffix.lower() == ".json":
        payload = _read_json(path)
        if not isinstance(payload, list):
            raise ValueError(f"{path} does not contain a JSON list of names")
        return [str(item) for item in payload]
    return [line.strip() for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


def _cmd_canonicalize(args: argparse.Namespace, console: Console) -> int:
    canonicalizer = get_canonicalizer()
    names = args.names or [line.rstrip("\n") for line in sys.stdin if line.strip()]
    for raw in names:
        canonical, rule = canonicalizer.explain(raw)
        if args.explain:
            console.print(f"{raw} | {canonical} | {rule}", markup=False, highlight=False)
        else:
            console.print(canonical, markup=False, highlight=False)
    return EXIT_OK


def _cmd_check(args: argparse.Namespace, console: Console) -> int:
    known = list(args.known or [])
    if args.pool:
        try:
            known.extend(_load_pool(args.pool))
        except (OSError, ValueError) as exc:
            console.print(f"[red]Cannot read pool file:[/red] {escape(str(exc))}")
            return EXIT_BAD_INPUT

    service = DeedIntakeService()
    category = DeedCategory.parse(args.category)
    pool = build_known_pool(((category, name) for name in known), category, canonicalizer=service.canonicalizer)
    verdict = service.advisor.check(args.name, pool)
    if args.json:
        console.print_json(json.dumps(verdict.as_dict(), ensure_ascii=False))
    elif verdict.is_concern:
        console.print(f"[yellow]{escape(verdict.message)}[/yellow] (distance {verdict.distance})")
    else:
        console.print(f"[green]OK[/green] {escape(verdict.candidate)}")
    return EXIT_CONCERN if verdict.is_concern else EXIT_OK


def _cmd_aggregate(args: argparse.Namespace, console: Console) -> int:
    try:
        entries = _load_entries(args.path)
    except (OSError, ValueError) as exc:
        # ValidationError subclasses ValueError
        label = "Invalid entries" if isinstance(exc, ValidationError) else "Cannot read"
        console.print(f"[red]{label}:[/red] {escape(str(exc))}")
        return EXIT_BAD_INPUT

    entries = filter_entries(
        entries,
        search=args.search,
        occasion_id=args.occasion,
        start=args.since,
        end=args.until,
    )

    if args.format == "dua":
        console.print(compose_dua_text(args.title, entries), markup=False, highlight=False)
        return EXIT_OK

    totals = aggregate_totals(entries)
    if args.format == "json":
        console.print_json(json.dumps([row.model_dump(mode="json") for row in totals], ensure_ascii=False))
        return EXIT_OK

    table = Table(title=f"Deed totals ({len(entries)} entries)")
    table.add_column("Deed")
    table.add_column("Category")
    table.add_column("Total", justify="right")
    table.add_column("Unit")
    table.add_column("Entries", justify="right")
    for row in totals:
        table.add_row(
            row.name,
            row.category.value,
            f"{row.total_count:g}",
            row.unit,
            str(row.entries_count),
        )
    console.print(table)
    return EXIT_OK


def _cmd_import(args: argparse.Namespace, console: Console) -> int:
    try:
        text = args.path.read_text(encoding="utf-8")
    except OSError as exc:
        console.print(f"[red]Cannot read:[/red] {escape(str(exc))}")
        return EXIT_BAD_INPUT

    try:
        staged = build_intake_service().import_chat_log(
            text,
            occasion_id=args.occasion,
            contributor_name=args.contributor,
        )
    except IntakeError as exc:
        console.print(f"[red]Import failed:[/red] {escape(str(exc))}")
        return EXIT_BAD_INPUT

    if args.json:
        rows = [entry.model_dump(mode="json", by_alias=True) for entry in staged]
        console.print_json(json.dumps(rows, ensure_ascii=False))
        return EXIT_OK

    table = Table(title=f"Staged entries ({len(staged)})")
    table.add_column("Contributor")
    table.add_column("Deed")
    table.add_column("Category")
    table.add_column("Count", justify="right")
    table.add_column("Unit")
    for entry in staged:
        table.add_row(
            escape(entry.contributor_name),
            escape(entry.deed_name),
            entry.category.value,
            f"{entry.count:g}",
            escape(entry.unit),
        )
    console.print(table)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ibadat-deeds", description="Normalize and total community deed entries.")
    parser.add_argument("--log-level", default=None, help="Override runtime.log_level for this run")
    subparsers = parser.add_subparsers(dest="command", required=True)

    canon = subparsers.add_parser("canonicalize", help="Print the canonical form of each name")
    canon.add_argument("names", nargs="*", help="Deed names; reads one per line from stdin when omitted")
    canon.add_argument("--explain", action="store_true", help="Also print the rule that matched")
    canon.set_defaults(handler=_cmd_canonicalize)

    check = subparsers.add_parser("check", help="Check a name against known names for near-duplicates")
    check.add_argument("name")
    check.add_argument("--known", action="append", help="Known name (repeatable)")
    check.add_argument("--pool", type=Path, help="JSON list or newline-delimited file of known names")
    check.add_argument("--category", default=DeedCategory.OTHER.value)
    check.add_argument("--json", action="store_true", help="Emit the verdict as JSON")
    check.set_defaults(handler=_cmd_check)

    agg = subparsers.add_parser("aggregate", help="Total a JSON export of deed entries")
    agg.add_argument("path", type=Path)
    agg.add_argument("--format", choices=("table", "json", "dua"), default="table")
    agg.add_argument("--title", default="Our Community", help="Occasion title for --format dua")
    agg.add_argument("--search", help="Keep entries whose contributor, deed, category or notes contain this text")
    agg.add_argument("--occasion", help="Keep entries for this occasion id")
    agg.add_argument("--since", type=date.fromisoformat, help="Earliest day (YYYY-MM-DD), inclusive")
    agg.add_argument("--until", type=date.fromisoformat, help="Latest day (YYYY-MM-DD), inclusive")
    agg.set_defaults(handler=_cmd_aggregate)

    imp = subparsers.add_parser("import", help="Stage deed entries from an exported chat log")
    imp.add_argument("path", type=Path)
    imp.add_argument("--occasion", help="Occasion id for the staged entries")
    imp.add_argument("--contributor", help="Contributor for lines without a sender")
    imp.add_argument("--json", action="store_true", help="Emit staged entries as JSON")
    imp.set_defaults(handler=_cmd_import)
    return parser


def main(argv: Sequence[str] | None = None, *, console: Console | None = None) -> int:
    """Entry point for the ``ibadat-deeds`` console script."""

    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    return args.handler(args, console or Console())


if __name__ == "__main__":
    sys.exit(main())
