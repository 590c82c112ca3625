"""Deed normalization API router."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from ibadat.normalization import DeedCategory, build_known_pool, list_category_defaults
from ibadat.observability import Observability, get_observability
from ibadat.services import (
    AggregatedTotal,
    DeedEntry,
    DeedIntakeService,
    IntakeError,
    Occasion,
    ParsedDeed,
    aggregate_totals,
    build_intake_service,
    compose_dua_text,
    filter_entries,
    find_active_occasion,
)

router = APIRouter(prefix="/deeds", tags=["deeds"])
LOGGER = logging.getLogger(__name__)


class CanonicalizeRequest(BaseModel):
    names: List[str] = Field(default_factory=list)


class CanonicalName(BaseModel):
    raw: str
    canonical: str
    rule: str


class CanonicalizeResponse(BaseModel):
    results: List[CanonicalName]
    rule_table_version: str


class SimilarityRequest(BaseModel):
    """Candidate plus the names already in use for its category."""

    candidate: str
    category: DeedCategory = DeedCategory.OTHER
    known_names: List[str] = Field(default_factory=list)
    staged_names: List[str] = Field(default_factory=list)


class SimilarityResponse(BaseModel):
    candidate: str
    is_concern: bool
    suggestion: Optional[str] = None
    distance: Optional[int] = None
    message: str = ""


class AggregateRequest(BaseModel):
    entries: List[DeedEntry] = Field(default_factory=list)


class DuaRequest(BaseModel):
    title: str
    entries: List[DeedEntry] = Field(default_factory=list)


class DuaResponse(BaseModel):
    title: str
    text: str


class StageRequest(BaseModel):
    records: List[ParsedDeed] = Field(default_factory=list)
    occasion_id: Optional[str] = None
    contributor_name: Optional[str] = None


class ImportRequest(BaseModel):
    text: str
    occasion_id: Optional[str] = None
    contributor_name: Optional[str] = None


class SelectionRequest(BaseModel):
    """Form picker selection: Juz numbers or Whole Quran for ``Quran``, Surah names for ``Surah``."""

    category: DeedCategory
    juz_numbers: List[int] = Field(default_factory=list)
    whole_quran: bool = False
    surahs: List[str] = Field(default_factory=list)
    count: float = 1
    unit: Optional[str] = None
    contributor_name: Optional[str] = None
    occasion_id: Optional[str] = None
    notes: Optional[str] = None
    performed_date: Optional[date] = None


class FilterRequest(BaseModel):
    entries: List[DeedEntry] = Field(default_factory=list)
    search: Optional[str] = None
    occasion_id: Optional[str] = None
    start: Optional[date] = None
    end: Optional[date] = None


class ActiveOccasionRequest(BaseModel):
    occasions: List[Occasion] = Field(default_factory=list)
    today: Optional[date] = None


def get_intake_service() -> DeedIntakeService:
    """Dependency provider returning a DeedIntakeService bound to current settings."""

    return build_intake_service()


def get_deeds_observability() -> Observability:
    """Dependency provider for the router's observability handle."""

    return get_observability(component="api.deeds")


@router.get("/categories", summary="List deed categories with their form defaults")
def list_categories() -> List[Dict[str, str]]:
    return [defaults.as_dict() for defaults in list_category_defaults()]


@router.post("/canonicalize", response_model=CanonicalizeResponse)
def canonicalize_names(
    payload: CanonicalizeRequest,
    service: DeedIntakeService = Depends(get_intake_service),
) -> CanonicalizeResponse:
    """Return the canonical form of each submitted name, in request order."""

    canonicalizer = service.canonicalizer
    results = []
    for raw in payload.names:
        canonical, rule = canonicalizer.explain(raw)
        results.append(CanonicalName(raw=raw, canonical=canonical, rule=rule))
    return CanonicalizeResponse(results=results, rule_table_version=canonicalizer.version)


@router.post("/similarity", response_model=SimilarityResponse)
def check_similarity(
    payload: SimilarityRequest,
    service: DeedIntakeService = Depends(get_intake_service),
    observability: Observability = Depends(get_deeds_observability),
) -> SimilarityResponse:
    """Advise whether ``candidate`` looks like a misspelling of a known name.

    ``known_names`` are treated as belonging to ``category``.
    """

    pool = build_known_pool(
        ((payload.category, name) for name in payload.known_names),
        payload.category,
        payload.staged_names,
        canonicalizer=service.canonicalizer,
    )
    verdict = service.advisor.check(payload.candidate, pool)
    if verdict.is_concern:
        observability.emit_event(
            "deed.similarity_flagged",
            candidate=verdict.candidate,
            suggestion=verdict.suggestion,
            distance=verdict.distance,
            category=payload.category.value,
        )
        observability.increment("deed.similarity_flagged", tags={"category": payload.category.name.lower()})
    return SimilarityResponse(**verdict.as_dict())


@router.post("/aggregate", response_model=List[AggregatedTotal])
def aggregate(
    payload: AggregateRequest,
    service: DeedIntakeService = Depends(get_intake_service),
) -> List[AggregatedTotal]:
    return aggregate_totals(payload.entries, canonicalizer=service.canonicalizer)


@router.post("/dua", response_model=DuaResponse)
def dua_text(
    payload: DuaRequest,
    service: DeedIntakeService = Depends(get_intake_service),
) -> DuaResponse:
    """Compose the shareable Dua summary for an occasion's entries."""

    text = compose_dua_text(payload.title, payload.entries, canonicalizer=service.canonicalizer)
    return DuaResponse(title=payload.title, text=text)


@router.post("/stage", response_model=List[DeedEntry])
def stage_records(
    payload: StageRequest,
    service: DeedIntakeService = Depends(get_intake_service),
) -> List[DeedEntry]:
    """Canonicalize parsed records into reviewable entries (nothing is persisted)."""

    staged = service.stage_parsed(
        payload.records,
        occasion_id=payload.occasion_id,
        contributor_name=payload.contributor_name,
    )
    LOGGER.info("Staged %d records for occasion %s", len(staged), payload.occasion_id)
    return staged


@router.post("/import", response_model=List[DeedEntry])
def import_chat_log(
    payload: ImportRequest,
    service: DeedIntakeService = Depends(get_intake_service),
) -> Any:
    """Run the configured chat-log extractor and stage its output."""

    try:
        return service.import_chat_log(
            payload.text,
            occasion_id=payload.occasion_id,
            contributor_name=payload.contributor_name,
        )
    except IntakeError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc


@router.post("/stage/selection", response_model=List[DeedEntry])
def stage_selection(
    payload: SelectionRequest,
    service: DeedIntakeService = Depends(get_intake_service),
) -> List[DeedEntry]:
    """Expand a Juz or Surah picker selection into one entry per item."""

    common = {
        "count": payload.count,
        "unit": payload.unit,
        "contributor_name": payload.contributor_name,
        "occasion_id": payload.occasion_id,
        "notes": payload.notes,
        "performed_date": payload.performed_date,
    }
    try:
        if payload.category is DeedCategory.QURAN:
            return service.stage_quran_selection(
                juz_numbers=payload.juz_numbers,
                whole_quran=payload.whole_quran,
                **common,
            )
        if payload.category is DeedCategory.SURAH:
            return service.stage_surah_selection(payload.surahs, **common)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    raise HTTPException(
        status_code=422,
        detail=f"Picker selection is only available for Quran and Surah, not {payload.category.value}",
    )


@router.post("/entries/filter", response_model=List[DeedEntry])
def filter_entry_list(payload: FilterRequest) -> List[DeedEntry]:
    """Apply the entries-list search, occasion and date filters, newest first."""

    return filter_entries(
        payload.entries,
        search=payload.search,
        occasion_id=payload.occasion_id,
        start=payload.start,
        end=payload.end,
    )


@router.post("/occasions/active", response_model=Optional[Occasion])
def active_occasion(payload: ActiveOccasionRequest) -> Optional[Occasion]:
    """Return the occasion new entries should default to, or ``null``."""

    return find_active_occasion(payload.occasions, today=payload.today)
