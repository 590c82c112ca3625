"""Deed-name canonicalizer.

Maps free-text deed names (English, transliterated Urdu/Arabic, or literal
script) to one canonical display name. The mapping is rule-ordered and pure:
no I/O, no randomness, and applying it to its own output returns the same
string, which aggregation relies on when it re-normalizes stored names.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from ibadat.normalization.rules import RuleTable, build_default_rule_table, title_case_tokens


class Canonicalizer:
    """Apply a :class:`RuleTable` to raw deed names, first match wins."""

    def __init__(self, table: RuleTable | None = None) -> None:
        self.table = table if table is not None else build_default_rule_table()

    @property
    def version(self) -> str:
        return self.table.version

    def __call__(self, raw: Any) -> Any:
        return self.canonicalize(raw)

    def canonicalize(self, raw: Any) -> Any:
        """Return the canonical name for ``raw``.

        Empty, whitespace-only, and non-string inputs are returned unchanged.
        Names no rule recognizes are trimmed and title-cased token by token.
        """

        return self.explain(raw)[0]

    def explain(self, raw: Any) -> tuple[Any, str]:
        """Return ``(canonical, rule_name)``; the rule name is ``"title_case"`` for the fallback."""

        if not raw or not isinstance(raw, str) or not raw.strip():
            return raw, "passthrough"
        trimmed = raw.strip()
        lowered = trimmed.lower()
        for rule in self.table:
            canonical = rule.apply(lowered, trimmed)
            if canonical is not None:
                return canonical, rule.name
        return title_case_tokens(trimmed), "title_case"


@lru_cache(maxsize=1)
def get_canonicalizer() -> Canonicalizer:
    """Return the shared canonicalizer built from the default rule table."""

    return Canonicalizer()


def canonicalize(raw: Any) -> Any:
    """Canonicalize ``raw`` with the default rule table."""

    return get_canonicalizer().canonicalize(raw)


__all__ = ["Canonicalizer", "canonicalize", "get_canonicalizer"]
