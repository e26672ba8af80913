from __future__ import annotations

import logging
import re
from typing import Optional, Tuple

from library_helpers.core.lc_parser import (
    LOW_SORT_CHAR,
    CallNumberNormalizer,
    CallNumberParseError,
    RegexLCNormalizer,
)

logger = logging.getLogger(__name__)

# surrounding whitespace trimmed between rules
_TRIM = " \t\n\r\0\x0b"

# (name, pattern, replacement, trim afterwards); applied in this order
CLEAN_RULES: Tuple[Tuple[str, re.Pattern, str, bool], ...] = (
    ("subfield", re.compile(r"\$[a-z]|ǂ[a-z]|\|[a-z]", re.IGNORECASE), " ", True),
    ("prefix", re.compile(r"^\[QRT\]\s?", re.IGNORECASE), "", True),
    ("copy", re.compile(r"\sc[0-9\-]+$|\sc\.[0-9\-]+$"), "", True),
    ("ebook", re.compile(r"eb$"), "", False),
    ("volume", re.compile(r"v\.[0-9a-z\-\s]+"), "", False),
    ("issue", re.compile(r"no\.[0-9a-z\-\s]+"), "", False),
    ("part", re.compile(r"pt\.[0-9a-z\-\s]+"), "", False),
    ("chapter", re.compile(r"ch\.[0-9a-z\-\s]+"), "", False),
    ("double_space", re.compile(r"\s{2,}"), " ", False),
)

VALID_RE = re.compile(r"^[A-Z][0-9A-Z\s.]*$", re.IGNORECASE)

_default_normalizer = RegexLCNormalizer()


def _clean_once(text: str) -> str:
    for _name, pattern, repl, trim in CLEAN_RULES:
        text = pattern.sub(repl, text)
        if trim:
            text = text.strip(_TRIM)
    # keep a leading dot: ".A1" is a sub-class fragment, not class "A1"
    return text.strip(" ,").rstrip(".").strip(_TRIM)


def clean(call_number) -> str:
    """
    Strip [QRT] prefixes, subfield markers, copy/volume/issue/part/chapter
    suffixes and stray punctuation from a call number.
    """
    text = "" if call_number is None else str(call_number)
    while True:
        cleaned = _clean_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned


def is_valid(call_number) -> bool:
    return bool(VALID_RE.match(clean(call_number)))


def _sort_char(sort_char) -> str:
    if isinstance(sort_char, str) and len(sort_char) == 1:
        return sort_char
    return LOW_SORT_CHAR


def normalize(
    call_number,
    sort_char: Optional[str] = None,
    normalizer: Optional[CallNumberNormalizer] = None,
) -> Optional[str]:
    """Sortable form of a call number, or None if it is not usable."""
    text = clean(call_number)
    if not is_valid(text):
        return None
    lc = normalizer or _default_normalizer
    try:
        parsed = lc.parse(text.strip())
    except CallNumberParseError as e:
        logger.debug("call number rejected by parser: %r (%s)", text, e)
        return None
    return lc.normalize(parsed, _sort_char(sort_char)).strip()


def normalize_class(
    class_text,
    sort_char: Optional[str] = None,
    normalizer: Optional[CallNumberNormalizer] = None,
) -> Optional[str]:
    lc = normalizer or _default_normalizer
    try:
        parsed = lc.parse(("" if class_text is None else str(class_text)).strip())
    except CallNumberParseError as e:
        logger.debug("class rejected by parser: %r (%s)", class_text, e)
        return None
    return lc.normalize_class(parsed, _sort_char(sort_char))
