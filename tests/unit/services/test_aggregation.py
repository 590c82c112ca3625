"""Tests for the aggregation consumers of the canonicalizer."""

from __future__ import annotations

from ibadat.normalization import DeedCategory
from ibadat.services import DeedEntry, aggregate_totals, compose_dua_text, group_by_category, summarize, totals_by_name


def _entry(name: str, count: float, *, category=DeedCategory.SURAH, unit: str = "times", who: str = "Aisha") -> DeedEntry:
    return DeedEntry(deed_name=name, count=count, category=category, unit=unit, contributor_name=who)


def test_yasin_variants_fold_into_one_total():
    """Latin, script, and spaced spellings share one canonical key."""

    entries = [
        _entry("Surah Yaseen", 3),
        _entry("سورہ یاسین", 2, who="Bilal"),
        _entry("surah ya sin", 1, who="Omar"),
    ]

    totals = aggregate_totals(entries)

    assert len(totals) == 1
    assert totals[0].name == "Surah Ya-Sin"
    assert totals[0].total_count == 6
    assert totals[0].entries_count == 3


def test_units_are_kept_apart_case_insensitively():
    entries = [
        _entry("Juz 1", 2, category=DeedCategory.QURAN, unit="times"),
        _entry("para 1", 1, category=DeedCategory.QURAN, unit="Times"),
        _entry("juz 1", 1, category=DeedCategory.QURAN, unit="juz"),
    ]

    totals = aggregate_totals(entries)

    assert [(row.name, row.unit, row.total_count) for row in totals] == [
        ("Juz 1", "times", 3),
        ("Juz 1", "juz", 1),
    ]


def test_totals_sorted_by_count_then_name():
    entries = [
        _entry("tahajud", 4, category=DeedCategory.NAWAFIL, unit="rakat"),
        _entry("ishraq", 4, category=DeedCategory.NAWAFIL, unit="rakat"),
        _entry("witr", 10, category=DeedCategory.NAWAFIL, unit="rakat"),
    ]

    assert [row.name for row in aggregate_totals(entries)] == ["Witr", "Ishraq", "Tahajjud"]


def test_totals_by_name_ignores_unit():
    entries = [
        _entry("juz 1", 1, category=DeedCategory.QURAN, unit="times"),
        _entry("para 1", 2, category=DeedCategory.QURAN, unit="juz"),
        _entry("kahf", 1),
    ]

    rows = totals_by_name(entries)

    assert [(row.name, row.total_count) for row in rows] == [("Juz 1", 3), ("Surah Al-Kahf", 1)]


def test_group_by_category_orders_categories_and_names():
    entries = [
        _entry("darood sharif", 100, category=DeedCategory.SALAWAT),
        _entry("mulk", 1),
        _entry("kahf", 2),
        _entry("darood khizri", 11, category=DeedCategory.SALAWAT),
    ]

    grouped = group_by_category(entries)

    assert [group.category for group in grouped] == [DeedCategory.SURAH, DeedCategory.SALAWAT]
    assert [item.name for item in grouped[0].items] == ["Surah Al-Kahf", "Surah Al-Mulk"]
    assert [item.name for item in grouped[1].items] == ["Darood Khizri", "Salawat"]


def test_compose_dua_text():
    entries = [
        _entry("yaseen", 2),
        _entry("Surah Yasin", 1, who="Bilal"),
        _entry("darood sharif", 100, category=DeedCategory.SALAWAT),
        _entry("tahajud", 2.5, category=DeedCategory.NAWAFIL, unit="rakat"),
    ]

    text = compose_dua_text("Laylat al-Qadr", entries)

    assert text == (
        "*Dua for Laylat al-Qadr*\n"
        "\n"
        "Ya Allah, please accept these humble efforts from our community:\n"
        "\n"
        "*Surah*\n"
        "- Surah Ya-Sin: 3 times\n"
        "\n"
        "*Salawat/Darood*\n"
        "- Salawat: 100 times\n"
        "\n"
        "*Nawafil*\n"
        "- Tahajjud: 2.5 rakat\n"
        "\n"
        "Total Contributions: 4\n"
        "May Allah accept our deeds and grant us success. Ameen."
    )


def test_compose_dua_text_without_entries():
    text = compose_dua_text("Jumu'ah", [])

    assert text.startswith("*Dua for Jumu'ah*\n\n")
    assert "Total Contributions: 0\n" in text


def test_summarize():
    entries = [
        _entry("yaseen", 2),
        _entry("Surah Yasin", 1, who="Bilal"),
        _entry("kahf", 1, who="Bilal"),
    ]

    summary = summarize(entries)

    assert summary.total_count == 4
    assert summary.entries_count == 3
    assert summary.contributors == 2
    assert summary.distinct_deeds == 2
