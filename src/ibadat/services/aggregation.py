"""Aggregation consumers of the canonicalizer.

Every function here re-canonicalizes the stored deed name before grouping, so
entries written before a rule-table change still fold into the right total.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence, Tuple

from ibadat.normalization.canonicalizer import Canonicalizer, get_canonicalizer
from ibadat.normalization.schema import DeedCategory
from ibadat.services.models import AggregatedTotal, CategoryTotals, DeedEntry, EntrySummary

LOGGER = logging.getLogger(__name__)

DUA_OPENING = "Ya Allah, please accept these humble efforts from our community:"
DUA_CLOSING = "May Allah accept our deeds and grant us success. Ameen."


def format_count(count: float) -> str:
    """Render a count without a trailing ``.0`` for whole numbers."""

    if float(count).is_integer():
        return str(int(count))
    return f"{count:g}"


def _canon(canonicalizer: Canonicalizer | None) -> Canonicalizer:
    return canonicalizer or get_canonicalizer()


def aggregate_totals(
    entries: Iterable[DeedEntry], *, canonicalizer: Canonicalizer | None = None
) -> List[AggregatedTotal]:
    """Sum counts per (canonical name, unit).

    Units are compared case-insensitively; the first spelling seen is kept, as
    is the first category. Rows are ordered by total descending, then by name.
    """

    canon = _canon(canonicalizer)
    rows: Dict[Tuple[str, str], AggregatedTotal] = {}
    for entry in entries:
        name = canon.canonicalize(entry.deed_name)
        key = (name, (entry.unit or "").strip().lower())
        row = rows.get(key)
        if row is None:
            row = AggregatedTotal(name=name, category=entry.category, unit=entry.unit)
            rows[key] = row
        row.total_count += entry.count
        row.entries_count += 1

    LOGGER.debug("Aggregated %d rows", len(rows))
    return sorted(rows.values(), key=lambda row: (-row.total_count, row.name))


def totals_by_name(
    entries: Iterable[DeedEntry], *, canonicalizer: Canonicalizer | None = None
) -> List[AggregatedTotal]:
    """Sum counts per canonical name only, largest first (dashboard chart)."""

    canon = _canon(canonicalizer)
    rows: Dict[str, AggregatedTotal] = {}
    for entry in entries:
        name = canon.canonicalize(entry.deed_name)
        row = rows.setdefault(name, AggregatedTotal(name=name, category=entry.category, unit=entry.unit))
        row.total_count += entry.count
        row.entries_count += 1
    return sorted(rows.values(), key=lambda row: (-row.total_count, row.name))


def group_by_category(
    entries: Iterable[DeedEntry], *, canonicalizer: Canonicalizer | None = None
) -> List[CategoryTotals]:
    """Group totals by category in enum order; names sorted alphabetically.

    Categories with no entries are omitted.
    """

    canon = _canon(canonicalizer)
    buckets: Dict[DeedCategory, Dict[str, AggregatedTotal]] = {}
    for entry in entries:
        name = canon.canonicalize(entry.deed_name)
        bucket = buckets.setdefault(entry.category, {})
        row = bucket.setdefault(name, AggregatedTotal(name=name, category=entry.category, unit=entry.unit))
        row.total_count += entry.count
        row.entries_count += 1

    grouped: List[CategoryTotals] = []
    for category in DeedCategory:
        bucket = buckets.get(category)
        if not bucket:
            continue
        items = sorted(bucket.values(), key=lambda row: row.name)
        grouped.append(CategoryTotals(category=category, items=items))
    return grouped


def compose_dua_text(
    title: str, entries: Sequence[DeedEntry], *, canonicalizer: Canonicalizer | None = None
) -> str:
    """Build the shareable Dua summary for an occasion."""

    lines = [f"*Dua for {title}*", "", DUA_OPENING, ""]
    for group in group_by_category(entries, canonicalizer=canonicalizer):
        lines.append(f"*{group.category.value}*")
        for item in group.items:
            lines.append(f"- {item.name}: {format_count(item.total_count)} {item.unit}")
        lines.append("")
    lines.append(f"Total Contributions: {len(entries)}")
    lines.append(DUA_CLOSING)
    return "\n".join(lines)


def summarize(entries: Sequence[DeedEntry], *, canonicalizer: Canonicalizer | None = None) -> EntrySummary:
    canon = _canon(canonicalizer)
    return EntrySummary(
        total_count=sum(entry.count for entry in entries),
        entries_count=len(entries),
        contributors=len({entry.contributor_name for entry in entries}),
        distinct_deeds=len({canon.canonicalize(entry.deed_name) for entry in entries}),
    )


__all__ = [
    "aggregate_totals",
    "compose_dua_text",
    "format_count",
    "group_by_category",
    "summarize",
    "totals_by_name",
]
