from __future__ import annotations

import re
from typing import List, Protocol, Tuple

from library_helpers.core.models import LCCallNumber

LOW_SORT_CHAR = " "
HIGH_SORT_CHAR = "~"

LETTERS_WIDTH = 3
NUMBER_WIDTH = 4
DECIMAL_WIDTH = 6
CUTTER_WIDTH = 6
MAX_CUTTERS = 3

_CLASS_RE = re.compile(r"^([A-Za-z]{1,3})(?![A-Za-z])\s*(?:([0-9]+)(?:\.([0-9]+))?)?")
_CUTTER_RE = re.compile(r"^\s*\.?\s*([A-Za-z])([0-9]+)(?=[\s.]|$)")


class CallNumberParseError(ValueError):
    pass


class CallNumberNormalizer(Protocol):
    """Parses LC call numbers and renders padded sort keys from them."""

    def parse(self, text: str) -> LCCallNumber:
        ...

    def normalize(self, parsed: LCCallNumber, sort_char: str) -> str:
        ...

    def normalize_class(self, parsed: LCCallNumber, sort_char: str) -> str:
        ...


class RegexLCNormalizer:
    """
    Loose regex reading of an LC call number.

    Grammar: 1-3 class letters, optional class number with optional decimal,
    up to three cutters (".A12" or "A12"), then any remaining tokens (dates,
    edition marks) kept verbatim. It does not know the LC schedules.
    """

    def parse(self, text: str) -> LCCallNumber:
        t = (text or "").strip()
        if not t:
            raise CallNumberParseError("empty call number")
        m = _CLASS_RE.match(t)
        if not m:
            raise CallNumberParseError(f"no LC class letters in: {text!r}")

        letters, number, decimal = m.group(1), m.group(2) or "", m.group(3) or ""
        rest = t[m.end():]

        cutters: List[Tuple[str, str]] = []
        while len(cutters) < MAX_CUTTERS:
            cm = _CUTTER_RE.match(rest)
            if not cm:
                break
            cutters.append((cm.group(1).upper(), cm.group(2)))
            rest = rest[cm.end():]

        remainder = tuple(tok for tok in rest.replace(".", " ").split() if tok)
        return LCCallNumber(
            letters=letters.upper(),
            number=number,
            decimal=decimal,
            cutters=tuple(cutters),
            remainder=remainder,
        )

    def normalize_class(self, parsed: LCCallNumber, sort_char: str) -> str:
        out = parsed.letters.upper().ljust(LETTERS_WIDTH, sort_char)
        if parsed.number:
            out += parsed.number.zfill(NUMBER_WIDTH)
            if parsed.decimal:
                out += parsed.decimal.ljust(DECIMAL_WIDTH, sort_char)
        return out

    def normalize(self, parsed: LCCallNumber, sort_char: str) -> str:
        parts = [self.normalize_class(parsed, sort_char)]
        for letter, digits in parsed.cutters:
            parts.append(letter + digits.ljust(CUTTER_WIDTH, sort_char))
        parts.extend(tok.upper() for tok in parsed.remainder)
        return " ".join(parts)
