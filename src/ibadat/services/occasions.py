"""Occasion lookup helpers."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from .models import Occasion, OccasionStatus


def find_active_occasion(occasions: Iterable[Occasion], *, today: date | None = None) -> Optional[Occasion]:
    """Return the occasion new entries should default to.

    The first active occasion whose date range covers ``today`` wins. Failing
    that, the active occasion with the latest end date is returned; ``None``
    when nothing is active.
    """

    today = today or date.today()
    active = [occasion for occasion in occasions if occasion.status is OccasionStatus.ACTIVE]
    for occasion in active:
        if occasion.covers(today):
            return occasion
    if not active:
        return None
    # max() keeps the first of equal end dates
    return max(active, key=lambda occasion: occasion.end_date)


__all__ = ["find_active_occasion"]
