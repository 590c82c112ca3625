"""Near-duplicate detection for deed names.

The advisor flags a candidate whose canonical form is within a small edit
distance of a name the community already uses, so a typo like
"Darood Khizry" can be corrected before it becomes a separate total. It is
purely advisory: the caller decides whether to offer the suggestion.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Optional, Tuple

from rapidfuzz.distance import Levenshtein

from ibadat.normalization.canonicalizer import Canonicalizer, get_canonicalizer
from ibadat.normalization.schema import DeedCategory

DEFAULT_MIN_LENGTH = 3
DEFAULT_MAX_DISTANCE = 2
DEFAULT_MAX_LENGTH_DIFF = 2


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit cost for insert, delete, and substitute.

    Case-sensitive; callers lowercase both sides first.
    """

    return Levenshtein.distance(a, b)


@dataclass(frozen=True, slots=True)
class SimilarityVerdict:
    """Outcome of a similarity check.

    Attributes:
        candidate: Canonical form of the checked input (empty when too short).
        suggestion: Existing name the candidate likely misspells, if any.
        distance: Edit distance to ``suggestion``.
    """

    candidate: str = ""
    suggestion: Optional[str] = None
    distance: Optional[int] = None

    @classmethod
    def no_concern(cls, candidate: str = "") -> "SimilarityVerdict":
        return cls(candidate=candidate)

    @classmethod
    def likely_duplicate(cls, candidate: str, suggestion: str, distance: int) -> "SimilarityVerdict":
        return cls(candidate=candidate, suggestion=suggestion, distance=distance)

    @property
    def is_concern(self) -> bool:
        return self.suggestion is not None

    @property
    def message(self) -> str:
        if self.suggestion is None:
            return ""
        return f'Similar to existing "{self.suggestion}"'

    def as_dict(self) -> dict:
        return {
            "candidate": self.candidate,
            "is_concern": self.is_concern,
            "suggestion": self.suggestion,
            "distance": self.distance,
            "message": self.message,
        }


class SimilarityAdvisor:
    """Compare a candidate deed name against a pool of known canonical names."""

    def __init__(
        self,
        canonicalizer: Canonicalizer | None = None,
        *,
        min_length: int = DEFAULT_MIN_LENGTH,
        max_distance: int = DEFAULT_MAX_DISTANCE,
        max_length_diff: int = DEFAULT_MAX_LENGTH_DIFF,
    ) -> None:
        self.canonicalizer = canonicalizer or get_canonicalizer()
        self.min_length = min_length
        self.max_distance = max_distance
        self.max_length_diff = max_length_diff

    def check(self, candidate_raw: str, known_names: Iterable[str]) -> SimilarityVerdict:
        """Return the verdict for ``candidate_raw`` against ``known_names``.

        The pool is scanned in sorted order, so when several names tie at the
        smallest distance the lexicographically first one is suggested.
        """

        trimmed = candidate_raw.strip() if isinstance(candidate_raw, str) else ""
        if len(trimmed) < self.min_length:
            return SimilarityVerdict.no_concern()

        canonical = self.canonicalizer.canonicalize(trimmed)
        pool = sorted({name for name in known_names if name})
        if canonical in pool:
            return SimilarityVerdict.no_concern(canonical)

        canonical_lower = canonical.lower()
        best_match: Optional[str] = None
        min_distance = self.max_distance + 1
        for target in pool:
            if abs(len(canonical) - len(target)) > self.max_length_diff:
                continue
            dist = Levenshtein.distance(canonical_lower, target.lower(), score_cutoff=min_distance - 1)
            if 0 < dist < min_distance:
                min_distance = dist
                best_match = target

        if best_match is None:
            return SimilarityVerdict.no_concern(canonical)
        return SimilarityVerdict.likely_duplicate(canonical, best_match, min_distance)


@lru_cache(maxsize=1)
def get_advisor() -> SimilarityAdvisor:
    """Return the shared advisor using the default canonicalizer and thresholds."""

    return SimilarityAdvisor()


def check_similarity(candidate_raw: str, known_names: Iterable[str]) -> SimilarityVerdict:
    """Check ``candidate_raw`` against ``known_names`` with the default advisor."""

    return get_advisor().check(candidate_raw, known_names)


def build_known_pool(
    named_entries: Iterable[Tuple["str | DeedCategory", str]],
    category: "str | DeedCategory",
    staged_names: Iterable[str] = (),
    *,
    canonicalizer: Canonicalizer | None = None,
) -> Tuple[str, ...]:
    """Build the sorted pool of canonical names known for ``category``.

    Args:
        named_entries: ``(category, deed name)`` pairs from committed records.
        category: Category the candidate belongs to; other categories are ignored.
        staged_names: Names in the current unsubmitted batch (same category).
        canonicalizer: Canonicalizer to apply; defaults to the shared one.

    Returns:
        Sorted tuple of distinct canonical names.
    """

    canon = canonicalizer or get_canonicalizer()
    target = DeedCategory.parse(category)
    pool = {
        canon.canonicalize(name)
        for entry_category, name in named_entries
        if name and DeedCategory.parse(entry_category) is target
    }
    pool.update(canon.canonicalize(name) for name in staged_names if name)
    return tuple(sorted(pool))


__all__ = [
    "SimilarityAdvisor",
    "SimilarityVerdict",
    "build_known_pool",
    "check_similarity",
    "edit_distance",
    "get_advisor",
]
