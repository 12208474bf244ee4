"""
eastcal.format.patterns
-----------------------
Reference date patterns per calendar type, display style and locale.

Pattern letters: r = related Gregorian year, U = cyclic year name,
M/MM/MMM/MMMM = month, d/dd = day of month, EEEE = weekday name.
Display names behind the letters are resolved by the rendering layer.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterator, Optional


class DisplayStyle(Enum):
    FULL = "full"
    LONG = "long"
    MEDIUM = "medium"
    SHORT = "short"


ROOT = "root"

PatternTable = Dict[str, Dict[DisplayStyle, str]]

_S = DisplayStyle

CHINESE_PATTERNS: PatternTable = {
    ROOT: {
        _S.FULL: "r(U) MMMM d, EEEE",
        _S.LONG: "r(U) MMMM d",
        _S.MEDIUM: "r MMM d",
        _S.SHORT: "r-MM-dd",
    },
    "en": {
        _S.FULL: "EEEE, MMMM d, r(U)",
        _S.LONG: "MMMM d, r(U)",
        _S.MEDIUM: "MMM d, r",
        _S.SHORT: "M/d/r",
    },
    "zh": {
        _S.FULL: "rU年MMMMd日EEEE",
        _S.LONG: "rU年MMMMd日",
        _S.MEDIUM: "r年MMMd日",
        _S.SHORT: "r/M/d",
    },
    "zh_TW": {
        _S.FULL: "rU年MMMMd日 EEEE",
        _S.LONG: "rU年MMMMd日",
        _S.MEDIUM: "rU年MMMd日",
        _S.SHORT: "r/M/d",
    },
    "ko": {
        _S.FULL: "r(U)년 MMMM d일 EEEE",
        _S.LONG: "r(U)년 MMMM d일",
        _S.MEDIUM: "r. MMM d.",
        _S.SHORT: "r. M. d.",
    },
    "vi": {
        _S.FULL: "EEEE, 'ngày' dd MMMM 'năm' U",
        _S.LONG: "'Ngày' dd 'tháng' M 'năm' U",
        _S.MEDIUM: "dd-MM U",
        _S.SHORT: "dd/MM/r",
    },
}

PATTERNS: Dict[str, PatternTable] = {
    "chinese": CHINESE_PATTERNS,
}


def locale_chain(locale: Optional[str]) -> Iterator[str]:
    """Candidate keys from most to least specific: lang_REGION, lang, root."""
    if locale:
        parts = locale.replace("-", "_").split("_")
        lang = parts[0].lower()
        region = next((p.upper() for p in parts[1:] if len(p) in (2, 3) and p.isalnum()), None)
        if region:
            yield f"{lang}_{region}"
        yield lang
    yield ROOT


def get_pattern(calendar_type: str, style: DisplayStyle, locale: Optional[str] = None) -> str:
    try:
        table = PATTERNS[calendar_type]
    except KeyError:
        raise KeyError(f"No patterns for calendar type '{calendar_type}'. Available: {sorted(PATTERNS)}") from None
    for key in locale_chain(locale):
        styles = table.get(key)
        if styles is not None and style in styles:
            return styles[style]
    raise KeyError(f"No {style.value} pattern for '{calendar_type}'")
