"""Tests for entries-list filtering."""

from __future__ import annotations

from datetime import date, datetime, timezone

from ibadat.services import DeedEntry, entry_date, filter_entries


def _entry(name: str, contributor: str, *, occasion: str = "occ", performed: date | None = None, added: str = "2024-03-01T08:00:00", **extra) -> DeedEntry:
    return DeedEntry(
        deed_name=name,
        contributor_name=contributor,
        occasion_id=occasion,
        count=1,
        performed_date=performed,
        date_added=added,
        **extra,
    )


ENTRIES = [
    _entry("Surah Ya-Sin", "Ali", performed=date(2024, 3, 3)),
    _entry("Tahajjud", "Sara", occasion="other", added="2024-03-05T21:00:00", category="Nawafil"),
    _entry("Istighfar", "Omar", notes="for my grandmother", added="2024-03-02T10:00:00"),
]


def test_entry_date_prefers_performed_date():
    assert entry_date(ENTRIES[0]) == date(2024, 3, 3)
    assert entry_date(ENTRIES[1]) == date(2024, 3, 5)


def test_naive_date_added_is_treated_as_utc():
    assert ENTRIES[1].date_added == datetime(2024, 3, 5, 21, tzinfo=timezone.utc)


def test_no_filters_sorts_newest_first():
    assert [entry.contributor_name for entry in filter_entries(ENTRIES)] == ["Sara", "Ali", "Omar"]


def test_search_covers_contributor_name_category_and_notes():
    assert [e.contributor_name for e in filter_entries(ENTRIES, search="ali")] == ["Ali"]
    assert [e.contributor_name for e in filter_entries(ENTRIES, search="YA-SIN")] == ["Ali"]
    assert [e.contributor_name for e in filter_entries(ENTRIES, search="nawafil")] == ["Sara"]
    assert [e.contributor_name for e in filter_entries(ENTRIES, search="grandmother")] == ["Omar"]


def test_occasion_filter():
    assert [e.contributor_name for e in filter_entries(ENTRIES, occasion_id="other")] == ["Sara"]


def test_date_range_is_inclusive():
    selected = filter_entries(ENTRIES, start=date(2024, 3, 2), end=date(2024, 3, 3))

    assert [e.contributor_name for e in selected] == ["Ali", "Omar"]
