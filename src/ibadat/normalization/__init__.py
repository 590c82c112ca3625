"""Deed-name normalization and near-duplicate detection."""

from .canonicalizer import Canonicalizer, canonicalize, get_canonicalizer
from .rules import RuleTable, build_default_rule_table, title_case_tokens
from .schema import CATEGORY_DEFAULTS, CategoryDefaults, DeedCategory, default_unit, defaults_for, list_category_defaults
from .similarity import (
    SimilarityAdvisor,
    SimilarityVerdict,
    build_known_pool,
    check_similarity,
    edit_distance,
    get_advisor,
)

__all__ = [
    "CATEGORY_DEFAULTS",
    "Canonicalizer",
    "CategoryDefaults",
    "DeedCategory",
    "RuleTable",
    "SimilarityAdvisor",
    "SimilarityVerdict",
    "build_default_rule_table",
    "build_known_pool",
    "canonicalize",
    "check_similarity",
    "default_unit",
    "defaults_for",
    "edit_distance",
    "get_advisor",
    "get_canonicalizer",
    "list_category_defaults",
    "title_case_tokens",
]
