"""Unit tests for the near-duplicate advisor and edit distance."""

from __future__ import annotations

import pytest

from ibadat.normalization import (
    DeedCategory,
    SimilarityAdvisor,
    SimilarityVerdict,
    build_known_pool,
    check_similarity,
    edit_distance,
)


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ("", "abc", 3),
        ("abc", "abc", 0),
        ("kitten", "sitting", 3),
        ("darood", "durood", 1),
        ("tahajud", "tahajjud", 1),
        ("", "", 0),
    ],
)
def test_edit_distance(a, b, expected):
    assert edit_distance(a, b) == expected
    assert edit_distance(b, a) == expected


def test_edit_distance_is_case_sensitive():
    assert edit_distance("Juz", "juz") == 1


@pytest.mark.parametrize("candidate", ["", "  ", "Yn", " ab "])
def test_short_candidates_are_never_flagged(candidate):
    verdict = check_similarity(candidate, ["Yn", "Ynn", "ab"])
    assert verdict == SimilarityVerdict.no_concern()
    assert not verdict.is_concern


def test_exact_canonical_match_is_not_a_concern():
    verdict = check_similarity("tahajud", ["Tahajjud"])

    assert verdict.candidate == "Tahajjud"
    assert not verdict.is_concern


def test_typo_outside_the_rule_table_is_flagged():
    verdict = check_similarity("morning adhkr", ["Morning Adhkar", "Evening Adhkar"])

    assert verdict.is_concern
    assert verdict.candidate == "Morning Adhkr"
    assert verdict.suggestion == "Morning Adhkar"
    assert verdict.distance == 1
    assert verdict.message == 'Similar to existing "Morning Adhkar"'


def test_unknown_darood_misspelling_is_flagged():
    verdict = check_similarity("Darood Khizry", ["Darood Khizri", "Salawat"])

    assert verdict.suggestion == "Darood Khizri"


def test_distant_names_are_unrelated():
    verdict = check_similarity("Visit The Sick", ["Feed The Poor"])

    assert verdict.candidate == "Visit The Sick"
    assert verdict.suggestion is None


def test_closer_match_wins():
    verdict = check_similarity("Quran Reflektion", ["Quran Reflecton", "Quran Reflektions"])

    assert verdict.suggestion == "Quran Reflektions"
    assert verdict.distance == 1


def test_ties_resolve_to_lexicographically_first_name():
    pool_orders = (
        ["Morning Adhkaz", "Morning Adhkar"],
        ["Morning Adhkar", "Morning Adhkaz"],
    )
    for pool in pool_orders:
        verdict = check_similarity("morning adhkax", pool)
        assert verdict.suggestion == "Morning Adhkar"


def test_empty_pool_entries_are_skipped():
    verdict = check_similarity("morning adhkr", ["", None, "Morning Adhkar"])

    assert verdict.suggestion == "Morning Adhkar"


def test_length_difference_limit_applies():
    advisor = SimilarityAdvisor(max_distance=5, max_length_diff=1)

    assert not advisor.check("charity", ["Charity Box"]).is_concern
    assert advisor.check("charity", ["Charityy"]).suggestion == "Charityy"


def test_advisor_thresholds_are_configurable():
    strict = SimilarityAdvisor(max_distance=1)

    assert strict.check("morning adhkr", ["Morning Adhkar"]).distance == 1
    assert not strict.check("morning adkr", ["Morning Adhkar"]).is_concern


def test_verdict_as_dict():
    verdict = SimilarityVerdict.likely_duplicate("Morning Adhkr", "Morning Adhkar", 1)

    assert verdict.as_dict() == {
        "candidate": "Morning Adhkr",
        "is_concern": True,
        "suggestion": "Morning Adhkar",
        "distance": 1,
        "message": 'Similar to existing "Morning Adhkar"',
    }


def test_build_known_pool_scopes_to_category_and_merges_staged():
    committed = [
        (DeedCategory.NAWAFIL, "tahajud"),
        ("Nawafil", "Ishrak"),
        (DeedCategory.SALAWAT, "darood khizri"),
        ("nawafil", ""),
    ]

    pool = build_known_pool(committed, "NAWAFIL", staged_names=["witar", "Tahajjud"])

    assert pool == ("Ishraq", "Tahajjud", "Witr")


def test_names_in_other_categories_are_never_suggested():
    committed = [(DeedCategory.SALAWAT, "Morning Adhkar")]
    pool = build_known_pool(committed, DeedCategory.ZIKR)

    assert not check_similarity("morning adhkr", pool).is_concern
