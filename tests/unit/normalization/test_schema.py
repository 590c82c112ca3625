"""Tests for deed categories and their form defaults."""

from __future__ import annotations

import pytest

from ibadat.normalization import CATEGORY_DEFAULTS, DeedCategory, default_unit, defaults_for, list_category_defaults


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Salawat/Darood", DeedCategory.SALAWAT),
        ("salawat", DeedCategory.SALAWAT),
        ("zikr/words", DeedCategory.ZIKR),
        ("NAWAFIL", DeedCategory.NAWAFIL),
        (DeedCategory.QURAN, DeedCategory.QURAN),
        ("Charity", DeedCategory.OTHER),
        ("", DeedCategory.OTHER),
        (None, DeedCategory.OTHER),
    ],
)
def test_parse_category(value, expected):
    assert DeedCategory.parse(value) is expected


def test_every_category_has_defaults():
    assert set(CATEGORY_DEFAULTS) == set(DeedCategory)


def test_nawafil_counts_rakat_and_others_count_times():
    assert default_unit(DeedCategory.NAWAFIL) == "rakat"
    for category in DeedCategory:
        if category is not DeedCategory.NAWAFIL:
            assert default_unit(category) == "times"


def test_placeholders():
    assert defaults_for("Quran").placeholder == "e.g., Juz 1"
    assert defaults_for("Zikr/Words").placeholder == "e.g., Third Kalma"
    assert defaults_for("unknown").placeholder == "Any other good deed"


def test_list_category_defaults_follows_enum_order():
    listed = list_category_defaults()

    assert [item.category for item in listed] == list(DeedCategory)
    assert listed[3].as_dict() == {"category": "Salawat/Darood", "unit": "times", "placeholder": "e.g., Darood Khizri"}
