"""Pydantic models for deed entries and the records handed to/from collaborators."""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from ibadat.normalization.schema import DeedCategory

DEFAULT_CONTRIBUTOR = "Community Member"


def _new_id() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class ParsedDeed(BaseModel):
    """One record returned by the chat-log parser (or typed into the public form).

    Field aliases follow the camelCase keys the parser emits.
    """

    model_config = ConfigDict(populate_by_name=True)

    contributor_name: Optional[str] = Field(default=None, alias="contributorName")
    category: DeedCategory = DeedCategory.OTHER
    deed_name: str = Field(
        default="",
        validation_alias=AliasChoices("ibadatType", "deedName", "deed_name"),
        serialization_alias="ibadatType",
    )
    count: float = Field(default=1, gt=0)
    unit: Optional[str] = None
    notes: Optional[str] = None
    performed_date: Optional[date] = Field(default=None, alias="performedDate")
    original_text: Optional[str] = Field(default=None, alias="originalText")

    @field_validator("category", mode="before")
    @classmethod
    def _parse_category(cls, value: object) -> DeedCategory:
        return DeedCategory.parse(value)  # type: ignore[arg-type]


class DeedEntry(BaseModel):
    """A committed (or staged) deed entry with a canonical name."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=_new_id)
    occasion_id: Optional[str] = Field(default=None, alias="occasionId")
    contributor_name: str = Field(default=DEFAULT_CONTRIBUTOR, alias="contributorName")
    category: DeedCategory = DeedCategory.OTHER
    deed_name: str = Field(
        validation_alias=AliasChoices("ibadatType", "deedName", "deed_name"),
        serialization_alias="ibadatType",
    )
    count: float = Field(gt=0)
    unit: str = "times"
    notes: Optional[str] = None
    original_text: Optional[str] = Field(default=None, alias="originalText")
    performed_date: Optional[date] = Field(default=None, alias="performedDate")
    date_added: datetime = Field(default_factory=_utcnow, alias="dateAdded")

    @field_validator("category", mode="before")
    @classmethod
    def _parse_category(cls, value: object) -> DeedCategory:
        return DeedCategory.parse(value)  # type: ignore[arg-type]

    @field_validator("deed_name", mode="after")
    @classmethod
    def _require_deed_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("deed name must not be blank")
        return value

    @field_validator("date_added", mode="after")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)

    @field_validator("contributor_name", mode="after")
    @classmethod
    def _default_contributor(cls, value: str) -> str:
        return value.strip() or DEFAULT_CONTRIBUTOR

    def named(self) -> tuple[DeedCategory, str]:
        """``(category, deed name)`` pair used to build similarity pools."""

        return self.category, self.deed_name


class OccasionStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


class Occasion(BaseModel):
    """A collection drive (e.g. Ramadan or an exam week) that entries belong to."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=_new_id)
    title: str = Field(min_length=1)
    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")
    description: str = ""
    status: OccasionStatus = OccasionStatus.ACTIVE
    webhook_url: Optional[str] = Field(default=None, alias="webhookUrl")

    @model_validator(mode="after")
    def _check_range(self) -> "Occasion":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


class AggregatedTotal(BaseModel):
    """Summed count for one canonical deed name (and unit)."""

    name: str
    category: DeedCategory
    unit: str
    total_count: float = 0
    entries_count: int = 0


class CategoryTotals(BaseModel):
    """Totals for one category, alphabetically by name."""

    category: DeedCategory
    items: List[AggregatedTotal] = Field(default_factory=list)


class EntrySummary(BaseModel):
    """Headline numbers for a set of entries."""

    total_count: float = 0
    entries_count: int = 0
    contributors: int = 0
    distinct_deeds: int = 0


__all__ = [
    "AggregatedTotal",
    "CategoryTotals",
    "DEFAULT_CONTRIBUTOR",
    "DeedEntry",
    "EntrySummary",
    "Occasion",
    "OccasionStatus",
    "ParsedDeed",
]
