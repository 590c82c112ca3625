"""Filtering for the entries list view."""

from __future__ import annotations

from datetime import date
from typing import Iterable, List

from .models import DeedEntry


def entry_date(entry: DeedEntry) -> date:
    """Day an entry counts for: ``performed_date`` when given, else the day it was added."""

    return entry.performed_date or entry.date_added.date()


def _matches_search(entry: DeedEntry, needle: str) -> bool:
    haystacks = (entry.contributor_name, entry.deed_name, entry.category.value, entry.notes or "")
    return any(needle in value.lower() for value in haystacks)


def filter_entries(
    entries: Iterable[DeedEntry],
    *,
    search: str | None = None,
    occasion_id: str | None = None,
    start: date | None = None,
    end: date | None = None,
) -> List[DeedEntry]:
    """Return the entries matching every given filter, newest first.

    ``search`` is a case-insensitive substring test against the contributor,
    deed name, category and notes. ``start`` and ``end`` are inclusive and
    compare against :func:`entry_date`.
    """

    needle = (search or "").strip().lower()
    matched = [
        entry
        for entry in entries
        if (not needle or _matches_search(entry, needle))
        and (occasion_id is None or entry.occasion_id == occasion_id)
        and (start is None or entry_date(entry) >= start)
        and (end is None or entry_date(entry) <= end)
    ]
    matched.sort(key=lambda entry: (entry_date(entry), entry.date_added), reverse=True)
    return matched


__all__ = ["entry_date", "filter_entries"]
