"""Rule types for the deed-name canonicalizer.

Each rule inspects the lowercased, trimmed input (and, where it needs to, the
trimmed original) and either returns a canonical name or ``None`` to pass the
input on to the next rule. A :class:`RuleTable` is an ordered, immutable
collection of rules; the first rule that answers wins.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional, Protocol, Tuple

from ibadat.normalization import reference_data as ref

_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")
_DIGITS = re.compile(r"\d+")
_TOKEN_START = re.compile(r"(^|\s)(\S)")


def _upper_first(ch: str) -> str:
    # Keep characters whose upper case is two characters (ß, ﬁ) or lowers back
    # differently (ı, ς); either would change the lowered text rules match on.
    upper = ch.upper()
    if len(upper) != 1 or upper.lower() != ch.lower():
        return ch
    return upper


def title_case_tokens(text: str) -> str:
    """Capitalize the first character of every whitespace-delimited token.

    The rest of each token is left as typed, so ``"darood-e-Mustan"`` becomes
    ``"Darood-e-Mustan"`` and ``"Surah Al-Ma'idah"`` is unchanged.
    """

    return _TOKEN_START.sub(lambda match: match.group(1) + _upper_first(match.group(2)), text)


class Rule(Protocol):
    """Interface shared by every canonicalization rule."""

    name: str

    def apply(self, lowered: str, original: str) -> Optional[str]:  # pragma: no cover - interface only
        ...


@dataclass(frozen=True, slots=True)
class ScriptPhraseRule:
    """Map a literal script phrase, found anywhere in the input, to a canonical name."""

    phrase: str
    canonical: str
    name: str = "script_phrase"

    def apply(self, lowered: str, original: str) -> Optional[str]:
        return self.canonical if self.phrase in lowered else None


@dataclass(frozen=True, slots=True)
class PatternRule:
    """Regex rule. ``anchored`` patterns must match the whole trimmed input."""

    pattern: str
    canonical: str
    anchored: bool = False
    name: str = "pattern"
    _compiled: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        source = f"^(?:{self.pattern})$" if self.anchored else self.pattern
        object.__setattr__(self, "_compiled", re.compile(source))

    def apply(self, lowered: str, original: str) -> Optional[str]:
        return self.canonical if self._compiled.search(lowered) else None


@dataclass(frozen=True, slots=True)
class KeywordRule:
    """Substring rule matching when any (or, with ``require_all``, every) keyword is present."""

    keywords: Tuple[str, ...]
    canonical: str
    require_all: bool = False
    name: str = "keyword"

    def apply(self, lowered: str, original: str) -> Optional[str]:
        check = all if self.require_all else any
        return self.canonical if check(keyword in lowered for keyword in self.keywords) else None


@dataclass(frozen=True, slots=True)
class DaroodNameRule:
    """Specific Darood name; optionally requires a Salawat keyword alongside the alias."""

    aliases: Tuple[str, ...]
    canonical: str
    requires_keyword: bool = False
    keywords: Tuple[str, ...] = ref.SALAWAT_KEYWORDS
    name: str = "darood_name"

    def apply(self, lowered: str, original: str) -> Optional[str]:
        if not any(alias in lowered for alias in self.aliases):
            return None
        if self.requires_keyword and not any(keyword in lowered for keyword in self.keywords):
            return None
        return self.canonical


@dataclass(frozen=True, slots=True)
class GenericSalawatRule:
    """Collapse generic Salawat phrasings; keep unknown specific names as typed.

    Runs after every :class:`DaroodNameRule`. An input containing a Salawat
    keyword either equals a generic phrasing (after punctuation is stripped)
    and becomes ``canonical``, or is title-cased and returned as-is so a
    user-supplied Darood name is never forced into a guess.
    """

    keywords: Tuple[str, ...] = ref.SALAWAT_KEYWORDS
    generics: frozenset = ref.GENERIC_SALAWAT_PHRASES
    canonical: str = ref.GENERIC_SALAWAT_CANONICAL
    name: str = "generic_salawat"

    def apply(self, lowered: str, original: str) -> Optional[str]:
        if not any(keyword in lowered for keyword in self.keywords):
            return None
        cleaned = _WHITESPACE.sub(" ", _PUNCTUATION.sub("", lowered)).strip()
        if cleaned in self.generics:
            return self.canonical
        return title_case_tokens(original)


@dataclass(frozen=True, slots=True)
class QuranPartRule:
    """Juz/Para/Sipara references, keeping the first number found."""

    keywords: Tuple[str, ...]
    numbered: str = ref.QURAN_PART_NUMBERED
    unnumbered: str = ref.QURAN_PART_UNNUMBERED
    name: str = "quran_part"

    def apply(self, lowered: str, original: str) -> Optional[str]:
        if not any(keyword in lowered for keyword in self.keywords):
            return None
        match = _DIGITS.search(lowered)
        if not match:
            return self.unnumbered
        digits = match.group()
        # Urdu and Arabic-Indic digits are rendered as ASCII.
        if not digits.isascii():
            digits = str(int(digits))
        return self.numbered.format(number=digits)


@dataclass(frozen=True)
class RuleTable:
    """Ordered, immutable rule configuration for :class:`~ibadat.normalization.canonicalizer.Canonicalizer`."""

    rules: Tuple[Rule, ...]
    version: str = ref.RULE_TABLE_VERSION

    def __iter__(self):
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def extended(self, extra: Iterable[Rule], *, before: bool = True) -> "RuleTable":
        """Return a new table with ``extra`` rules placed ahead of (or after) the current ones."""

        additions = tuple(extra)
        rules = additions + self.rules if before else self.rules + additions
        return RuleTable(rules=rules, version=self.version)


def _surah_rules() -> list[Rule]:
    rules: list[Rule] = []
    for name_pattern, canonical, needs_prefix, takes_article in ref.SURAH_PATTERNS:
        prefix = ref.SURAH_PREFIX_REQUIRED if needs_prefix else ref.SURAH_PREFIX
        article = ref.ARTICLE if takes_article else ""
        rules.append(PatternRule(f"{prefix}{article}{name_pattern}", canonical, anchored=True, name="surah"))
    return rules


def build_default_rule_table() -> RuleTable:
    """Assemble the rule table from :mod:`ibadat.normalization.reference_data`.

    Stage order: script phrases, Surah names, verses, Nawafil, Darood names,
    generic Salawat, other Zikr, Quran parts.
    """

    rules: list[Rule] = [ScriptPhraseRule(phrase, canonical) for phrase, canonical in ref.SCRIPT_PHRASES]
    rules.append(QuranPartRule(ref.SCRIPT_QURAN_PART_KEYWORDS, name="script_quran_part"))
    rules.extend(_surah_rules())
    rules.extend(KeywordRule(keywords, canonical, require_all=True, name="verse") for keywords, canonical in ref.VERSE_KEYWORDS)
    rules.extend(KeywordRule(keywords, canonical, name="verse") for keywords, canonical in ref.VERSE_ALTERNATIVES)
    rules.extend(PatternRule(pattern, canonical, name="nawafil") for pattern, canonical in ref.NAWAFIL_PATTERNS)
    rules.extend(
        DaroodNameRule(aliases, canonical, requires_keyword=requires_keyword)
        for aliases, canonical, requires_keyword in ref.DAROOD_NAMES
    )
    rules.append(GenericSalawatRule())
    rules.extend(PatternRule(pattern, canonical, name="kalma") for pattern, canonical in ref.KALMA_PATTERNS)
    rules.extend(KeywordRule(keywords, canonical, name="zikr") for keywords, canonical in ref.ZIKR_KEYWORDS)
    rules.append(QuranPartRule(ref.QURAN_PART_KEYWORDS))
    return RuleTable(rules=tuple(rules))


__all__ = [
    "DaroodNameRule",
    "GenericSalawatRule",
    "KeywordRule",
    "PatternRule",
    "QuranPartRule",
    "Rule",
    "RuleTable",
    "ScriptPhraseRule",
    "build_default_rule_table",
    "title_case_tokens",
]
