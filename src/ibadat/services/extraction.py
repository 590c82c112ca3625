"""
Rule-based chat-log extraction.

Reads WhatsApp-style exports line by line and pulls out deed pledges with
regex heuristics. It is not an LLM parser: it understands ``Name: 3 juz``,
``100 salawat and 1000 astaghfar``, Juz ranges, ``x``/``times``/``rakat``
counts and a trailing ``for ...`` intention, and leaves anything else alone.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Dict, List, Optional, Tuple

from ibadat.normalization.canonicalizer import Canonicalizer, get_canonicalizer
from ibadat.normalization.reference_data import QURAN_PART_NUMBERED
from ibadat.normalization.schema import DeedCategory

LOGGER = logging.getLogger(__name__)

# 1/15/24, 9:41 PM - ...   or   [1/15/24, 9:41:07 PM] ...
_TIMESTAMP = re.compile(
    r"^\[?(?P<month>\d{1,2})/(?P<day>\d{1,2})/(?P<year>\d{2,4}),?\s+"
    r"\d{1,2}:\d{2}(?::\d{2})?(?:\s*[AaPp]\.?[Mm]\.?)?\]?\s*(?:-\s*)?"
)
_SENDER = re.compile(r"^(?P<sender>[^:]{1,60}?):\s*(?P<body>.+)$")
_INTENTION = re.compile(r"\s+(?:for|on behalf of)\s+(?P<notes>.+)$", re.IGNORECASE)
_SEPARATORS = re.compile(r"\s*(?:,|&|\+|\band\b|\bاور\b)\s*", re.IGNORECASE)
_JUZ_RANGE = re.compile(r"(?:juz|para|sipara)\s*(?P<start>\d+)\s*(?:-|to)\s*(?P<end>\d+)", re.IGNORECASE)
_JUZ_NUMBER = re.compile(r"(?:juz|para|sipara)\s*\d+", re.IGNORECASE)
_COUNT = re.compile(
    r"(?P<count>\d+(?:\.\d+)?)\s*(?P<unit>x|times?|rakats?|rakaat|rakahs?|khatams?|pages?)?(?!\w)",
    re.IGNORECASE,
)
_LEFTOVER = re.compile(r"^[\s\-:.]+|[\s\-:.]+$")
_JUZ_WORD = re.compile(r"(?:juz|paras?|siparas?)", re.IGNORECASE)

_UNITS = {
    "x": "times",
    "time": "times",
    "times": "times",
    "rakat": "rakat",
    "rakats": "rakat",
    "rakaat": "rakat",
    "rakah": "rakat",
    "rakahs": "rakat",
    "khatam": "khatam",
    "khatams": "khatam",
    "page": "pages",
    "pages": "pages",
}

_RULE_CATEGORIES = {
    "surah": DeedCategory.SURAH,
    "verse": DeedCategory.VERSES,
    "nawafil": DeedCategory.NAWAFIL,
    "darood_name": DeedCategory.SALAWAT,
    "generic_salawat": DeedCategory.SALAWAT,
    "kalma": DeedCategory.ZIKR,
    "zikr": DeedCategory.ZIKR,
    "quran_part": DeedCategory.QURAN,
    "script_quran_part": DeedCategory.QURAN,
}

_NAME_PREFIXES = (
    ("Surah ", DeedCategory.SURAH),
    ("Juz ", DeedCategory.QURAN),
    ("Quran", DeedCategory.QURAN),
    ("Darood", DeedCategory.SALAWAT),
    ("Salawat", DeedCategory.SALAWAT),
    ("Subhan Allah", DeedCategory.ZIKR),
    ("Alhamdulillah", DeedCategory.ZIKR),
    ("Allahu Akbar", DeedCategory.ZIKR),
)


def _parse_date(month: str, day: str, year: str) -> Optional[date]:
    full_year = int(year) + 2000 if len(year) == 2 else int(year)
    try:
        return date(full_year, int(month), int(day))
    except ValueError:
        return None


def _number(text: str) -> float:
    value = float(text)
    return int(value) if value.is_integer() else value


class RuleBasedDeedExtractor:
    """Regex extractor for pasted chat logs; satisfies ``DeedExtractor``."""

    def __init__(self, canonicalizer: Canonicalizer | None = None) -> None:
        self.canonicalizer = canonicalizer or get_canonicalizer()

    def extract(self, text: str) -> List[Dict[str, object]]:
        records: List[Dict[str, object]] = []
        sender: Optional[str] = None
        performed: Optional[date] = None
        for raw_line in text.splitlines():
            line = raw_line.strip()
            if not line:
                continue
            stamp = _TIMESTAMP.match(line)
            if stamp:
                performed = _parse_date(stamp["month"], stamp["day"], stamp["year"])
                line = line[stamp.end():]
            match = _SENDER.match(line)
            if match:
                sender = match["sender"].strip()
                line = match["body"].strip()
            elif stamp:
                # timestamped line without a sender is a system notice
                continue
            records.extend(self._parse_body(line, sender, performed))
        LOGGER.debug("Extracted %d deed records from %d characters", len(records), len(text))
        return records

    def _parse_body(self, body: str, sender: Optional[str], performed: Optional[date]) -> List[Dict[str, object]]:
        notes: Optional[str] = None
        intention = _INTENTION.search(body)
        if intention:
            notes = intention["notes"].strip()
            body = body[: intention.start()]

        records = []
        for part in filter(None, (piece.strip() for piece in _SEPARATORS.split(body))):
            for name, count, unit in self._parse_part(part):
                records.append(
                    {
                        "contributorName": sender,
                        "category": self.infer_category(name).value,
                        "ibadatType": name,
                        "count": count,
                        "unit": unit,
                        "notes": notes,
                        "performedDate": performed,
                        "originalText": part,
                    }
                )
        return records

    def _parse_part(self, part: str) -> List[Tuple[str, float, Optional[str]]]:
        juz_range = _JUZ_RANGE.search(part)
        if juz_range:
            start, end = int(juz_range["start"]), int(juz_range["end"])
            if 1 <= start <= end <= 30:
                return [(QURAN_PART_NUMBERED.format(number=number), 1, "juz") for number in range(start, end + 1)]

        if _JUZ_NUMBER.search(part):
            return [(part, 1, "juz")]

        count_match = _COUNT.search(part)
        if count_match is None:
            return [(part, 1, None)]
        name = _LEFTOVER.sub("", part[: count_match.start()] + " " + part[count_match.end():]).strip()
        name = re.sub(r"\s{2,}", " ", name)
        if not name:
            return []
        unit = count_match["unit"]
        if unit:
            resolved_unit = _UNITS[unit.lower()]
        elif _JUZ_WORD.fullmatch(name):
            resolved_unit = "juz"
        else:
            resolved_unit = None
        return [(name, _number(count_match["count"]), resolved_unit)]

    def infer_category(self, name: str) -> DeedCategory:
        """Guess the category from the rule that canonicalizes ``name``."""

        canonical, rule = self.canonicalizer.explain(name)
        if rule == "script_phrase":
            # script canonicals are English names with their own rule
            rule = self.canonicalizer.explain(canonical)[1]
        if rule in _RULE_CATEGORIES:
            return _RULE_CATEGORIES[rule]
        for prefix, category in _NAME_PREFIXES:
            if canonical.startswith(prefix):
                return category
        return DeedCategory.OTHER


__all__ = ["RuleBasedDeedExtractor"]
