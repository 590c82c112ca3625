"""Staging of deed entries from the manual form or a chat-log parser."""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Mapping, Protocol, Sequence, runtime_checkable

from pydantic import ValidationError

from ibadat.normalization.canonicalizer import Canonicalizer, get_canonicalizer
from ibadat.normalization.reference_data import ALL_SURAHS, QURAN_PART_NUMBERED
from ibadat.normalization.schema import DeedCategory, default_unit
from ibadat.normalization.similarity import SimilarityAdvisor, SimilarityVerdict, build_known_pool
from ibadat.settings import Settings, get_settings

from .models import DEFAULT_CONTRIBUTOR, DeedEntry, ParsedDeed

LOGGER = logging.getLogger(__name__)

WHOLE_QURAN = "Whole Quran"
KHATAM_UNIT = "khatam"
JUZ_COUNT = 30
_SURAH_LOOKUP = {name.lower(): name for name in ALL_SURAHS}


class IntakeError(RuntimeError):
    """Raised when the chat-log extractor fails or returns unusable output."""


@runtime_checkable
class DeedExtractor(Protocol):
    """Anything that turns a pasted chat log into parsed deed records."""

    def extract(self, text: str) -> Sequence[ParsedDeed | Mapping[str, object]]:
        ...


class StaticDeedExtractor:
    """Extractor returning canned records; used in tests and offline demos."""

    def __init__(self, records: Iterable[ParsedDeed | Mapping[str, object]] = ()) -> None:
        self.records = list(records)
        self.calls: List[str] = []

    def extract(self, text: str) -> Sequence[ParsedDeed | Mapping[str, object]]:
        self.calls.append(text)
        return list(self.records)


class DeedIntakeService:
    """Turns raw submissions into canonical :class:`DeedEntry` objects.

    The service never persists anything; callers commit the staged entries
    after the user has reviewed them.
    """

    def __init__(
        self,
        *,
        canonicalizer: Canonicalizer | None = None,
        advisor: SimilarityAdvisor | None = None,
        extractor: DeedExtractor | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.canonicalizer = canonicalizer or get_canonicalizer()
        normalization = self.settings.normalization
        self.advisor = advisor or SimilarityAdvisor(
            self.canonicalizer,
            min_length=normalization.min_length,
            max_distance=normalization.max_distance,
            max_length_diff=normalization.max_length_diff,
        )
        self.extractor = extractor

    def stage_manual(
        self,
        *,
        deed_name: str,
        count: float,
        category: DeedCategory | str = DeedCategory.OTHER,
        unit: str | None = None,
        contributor_name: str | None = None,
        occasion_id: str | None = None,
        notes: str | None = None,
        performed_date: date | None = None,
    ) -> DeedEntry:
        """Build one entry from form input; raises ``ValidationError`` for a blank name or bad count."""

        resolved = DeedCategory.parse(category)
        return DeedEntry(
            occasion_id=occasion_id,
            contributor_name=contributor_name or DEFAULT_CONTRIBUTOR,
            category=resolved,
            deed_name=self.canonicalizer.canonicalize((deed_name or "").strip()),
            count=count,
            unit=(unit or "").strip() or default_unit(resolved),
            notes=notes or None,
            performed_date=performed_date,
        )

    def stage_quran_selection(
        self,
        *,
        juz_numbers: Iterable[int] = (),
        whole_quran: bool = False,
        count: float = 1,
        unit: str | None = None,
        contributor_name: str | None = None,
        occasion_id: str | None = None,
        notes: str | None = None,
        performed_date: date | None = None,
    ) -> List[DeedEntry]:
        """Expand the form's Juz picker into one entry per selected Juz.

        ``whole_quran`` overrides any Juz selection and stages a single
        ``Whole Quran`` entry counted in khatam. Selected Juz are staged in
        ascending order. The count applies to each entry and is at least 1.
        """

        if whole_quran:
            names = [WHOLE_QURAN]
            resolved_unit = unit or KHATAM_UNIT
        else:
            numbers = sorted(set(juz_numbers))
            invalid = [number for number in numbers if not 1 <= number <= JUZ_COUNT]
            if invalid:
                raise ValueError(f"Juz numbers must be between 1 and {JUZ_COUNT}; got {invalid}")
            names = [QURAN_PART_NUMBERED.format(number=number) for number in numbers]
            resolved_unit = unit or default_unit(DeedCategory.QURAN)
        return [
            self.stage_manual(
                deed_name=name,
                count=max(1, count),
                category=DeedCategory.QURAN,
                unit=resolved_unit,
                contributor_name=contributor_name,
                occasion_id=occasion_id,
                notes=notes,
                performed_date=performed_date,
            )
            for name in names
        ]

    def stage_surah_selection(
        self,
        surahs: Iterable[str],
        *,
        count: float = 1,
        unit: str | None = None,
        contributor_name: str | None = None,
        occasion_id: str | None = None,
        notes: str | None = None,
        performed_date: date | None = None,
    ) -> List[DeedEntry]:
        """Stage ``Surah <Name>`` for each picked Surah, in selection order.

        Names must come from the Surah picker list (matched case-insensitively);
        anything else raises ``ValueError``.
        """

        picked: List[str] = []
        for raw in surahs:
            name = _SURAH_LOOKUP.get(raw.strip().lower())
            if name is None:
                raise ValueError(f"Unknown Surah {raw!r}")
            if name not in picked:
                picked.append(name)
        return [
            self.stage_manual(
                deed_name=f"Surah {name}",
                count=max(1, count),
                category=DeedCategory.SURAH,
                unit=unit,
                contributor_name=contributor_name,
                occasion_id=occasion_id,
                notes=notes,
                performed_date=performed_date,
            )
            for name in picked
        ]

    def stage_parsed(
        self,
        records: Iterable[ParsedDeed | Mapping[str, object]],
        *,
        occasion_id: str | None = None,
        contributor_name: str | None = None,
    ) -> List[DeedEntry]:
        """Canonicalize parser output into entries.

        ``contributor_name`` fills records that carry no contributor of their
        own. The original deed text is kept in ``original_text``.
        """

        staged: List[DeedEntry] = []
        for record in records:
            parsed = record if isinstance(record, ParsedDeed) else ParsedDeed.model_validate(record)
            raw_name = parsed.deed_name.strip()
            if not raw_name:
                LOGGER.warning("Skipping parsed record without a deed name: %s", parsed.original_text)
                continue
            staged.append(
                DeedEntry(
                    occasion_id=occasion_id,
                    contributor_name=parsed.contributor_name or contributor_name or DEFAULT_CONTRIBUTOR,
                    category=parsed.category,
                    deed_name=self.canonicalizer.canonicalize(raw_name),
                    count=parsed.count,
                    unit=(parsed.unit or "").strip() or default_unit(parsed.category),
                    notes=parsed.notes,
                    original_text=parsed.original_text or raw_name or None,
                    performed_date=parsed.performed_date,
                )
            )
        LOGGER.info("Staged %d parsed deed records", len(staged))
        return staged

    def advise(
        self,
        raw_name: str,
        category: DeedCategory | str,
        committed: Iterable[DeedEntry] = (),
        staged: Iterable[DeedEntry | str] = (),
    ) -> SimilarityVerdict:
        """Check ``raw_name`` against committed and staged names in ``category``."""

        target = DeedCategory.parse(category)
        staged_names = [
            item if isinstance(item, str) else item.deed_name
            for item in staged
            if isinstance(item, str) or item.category is target
        ]
        pool = build_known_pool(
            (entry.named() for entry in committed),
            target,
            staged_names,
            canonicalizer=self.canonicalizer,
        )
        return self.advisor.check(raw_name, pool)

    def import_chat_log(
        self,
        text: str,
        *,
        occasion_id: str | None = None,
        contributor_name: str | None = None,
    ) -> List[DeedEntry]:
        """Run the configured extractor over ``text`` and stage its records."""

        if self.extractor is None:
            raise IntakeError("No chat-log extractor configured")
        if not text or not text.strip():
            return []
        try:
            records = self.extractor.extract(text)
        except Exception as exc:
            LOGGER.exception("Chat-log extraction failed")
            raise IntakeError(f"Chat-log extraction failed: {exc}") from exc
        try:
            return self.stage_parsed(records, occasion_id=occasion_id, contributor_name=contributor_name)
        except ValidationError as exc:
            raise IntakeError(f"Extractor returned malformed records: {exc.error_count()} error(s)") from exc


__all__ = [
    "DeedExtractor",
    "DeedIntakeService",
    "IntakeError",
    "StaticDeedExtractor",
]
