"""Deed categories and their form defaults.

The category is attached to an entry by the caller; the canonicalizer never
needs it, but the similarity advisor only compares names within one category.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List


class DeedCategory(str, Enum):
    """Supported deed categories (values match the stored column)."""

    QURAN = "Quran"
    SURAH = "Surah"
    VERSES = "Verses"
    SALAWAT = "Salawat/Darood"
    ZIKR = "Zikr/Words"
    NAWAFIL = "Nawafil"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: "str | DeedCategory | None") -> "DeedCategory":
        """Resolve an enum value or member name, case-insensitively; unknown values map to ``OTHER``."""

        if isinstance(value, cls):
            return value
        if not value:
            return cls.OTHER
        lowered = str(value).strip().lower()
        for member in cls:
            if lowered in (member.value.lower(), member.name.lower()):
                return member
        return cls.OTHER


@dataclass(frozen=True, slots=True)
class CategoryDefaults:
    """Unit and example text used to pre-fill the entry form for a category."""

    category: DeedCategory
    unit: str
    placeholder: str

    def as_dict(self) -> Dict[str, str]:
        return {"category": self.category.value, "unit": self.unit, "placeholder": self.placeholder}


CATEGORY_DEFAULTS: Dict[DeedCategory, CategoryDefaults] = {
    DeedCategory.QURAN: CategoryDefaults(DeedCategory.QURAN, "times", "e.g., Juz 1"),
    DeedCategory.SURAH: CategoryDefaults(DeedCategory.SURAH, "times", "e.g., Surah Yasin"),
    DeedCategory.VERSES: CategoryDefaults(DeedCategory.VERSES, "times", "e.g., Ayatul Kursi"),
    DeedCategory.SALAWAT: CategoryDefaults(DeedCategory.SALAWAT, "times", "e.g., Darood Khizri"),
    DeedCategory.ZIKR: CategoryDefaults(DeedCategory.ZIKR, "times", "e.g., Third Kalma"),
    DeedCategory.NAWAFIL: CategoryDefaults(DeedCategory.NAWAFIL, "rakat", "e.g., Tahajjud"),
    DeedCategory.OTHER: CategoryDefaults(DeedCategory.OTHER, "times", "Any other good deed"),
}


def defaults_for(category: "str | DeedCategory | None") -> CategoryDefaults:
    """Return the form defaults for ``category`` (``OTHER`` when unknown)."""

    return CATEGORY_DEFAULTS[DeedCategory.parse(category)]


def default_unit(category: "str | DeedCategory | None") -> str:
    return defaults_for(category).unit


def list_category_defaults() -> List[CategoryDefaults]:
    """Category defaults in display order."""

    return [CATEGORY_DEFAULTS[member] for member in DeedCategory]


__all__ = [
    "CATEGORY_DEFAULTS",
    "CategoryDefaults",
    "DeedCategory",
    "default_unit",
    "defaults_for",
    "list_category_defaults",
]
