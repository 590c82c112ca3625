"""Service layer built on the normalization core."""

from .aggregation import aggregate_totals, compose_dua_text, group_by_category, summarize, totals_by_name
from .entries import entry_date, filter_entries
from .extraction import RuleBasedDeedExtractor
from .factories import build_deed_extractor, build_intake_service
from .intake import DeedExtractor, DeedIntakeService, IntakeError, StaticDeedExtractor
from .models import AggregatedTotal, CategoryTotals, DeedEntry, EntrySummary, Occasion, OccasionStatus, ParsedDeed
from .occasions import find_active_occasion

__all__ = [
    "AggregatedTotal",
    "CategoryTotals",
    "DeedEntry",
    "DeedExtractor",
    "DeedIntakeService",
    "EntrySummary",
    "IntakeError",
    "Occasion",
    "OccasionStatus",
    "ParsedDeed",
    "RuleBasedDeedExtractor",
    "StaticDeedExtractor",
    "aggregate_totals",
    "build_deed_extractor",
    "build_intake_service",
    "compose_dua_text",
    "entry_date",
    "filter_entries",
    "find_active_occasion",
    "group_by_category",
    "summarize",
    "totals_by_name",
]
