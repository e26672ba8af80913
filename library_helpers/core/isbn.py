from __future__ import annotations

import re
from typing import Optional

# ISBN-13 = "978" + first nine digits of the ISBN-10 + a fresh ISBN-13 check digit.
# Converting is extract + re-checksum; the old check character is never reused.

ISBN10_RE = re.compile(r"^[0-9]*[0-9Xx]\Z")
ISBN13_RE = re.compile(r"^978[0-9]{10}\Z")
ISBN13_BODY_RE = re.compile(r"^978[0-9]{9}\Z")
DIGITS_RE = re.compile(r"^[0-9]+\Z")

PREFIX_978 = "978"


def _strip_hyphens(isbn) -> str:
    if isbn is None:
        return ""
    return str(isbn).replace("-", "")


def _compute_check10(digits: str) -> Optional[str]:
    if not DIGITS_RE.match(digits) or len(digits) > 9:
        return None
    digits = digits.zfill(9)
    total = 0
    for i, ch in enumerate(digits, start=1):
        total += i * int(ch)
    rem = total % 11
    return "X" if rem == 10 else str(rem)


def _extract_check10(isbn10: str) -> Optional[str]:
    if not is_valid10(isbn10):
        return None
    return isbn10[-1].upper()


def _compute_check13(digits: str) -> str:
    total = 0
    for i, ch in enumerate(digits[:12]):
        total += int(ch) * (1 if i % 2 == 0 else 3)
    return str((10 - (total % 10)) % 10)


def checksum10(isbn) -> Optional[str]:
    """
    ISBN-10 check character for up to nine digits (short input is zero-padded).

    A full ten-character ISBN-10 is validated instead and its own check
    character is returned. None on anything else.
    """
    isbn = _strip_hyphens(isbn)
    if not ISBN10_RE.match(isbn) or len(isbn) > 10:
        return None
    if len(isbn) == 10:
        return _extract_check10(isbn)
    return _compute_check10(isbn)


def checksum13(isbn) -> Optional[str]:
    """
    ISBN-13 check digit for a 12-digit "978" body.

    A full 13-digit ISBN-13 is validated instead and its 13th digit returned.
    """
    isbn = _strip_hyphens(isbn)
    if ISBN13_BODY_RE.match(isbn):
        return _compute_check13(isbn)
    if ISBN13_RE.match(isbn):
        return isbn[12] if is_valid13(isbn) else None
    return None


def is_valid10(isbn) -> bool:
    isbn = _strip_hyphens(isbn)
    if not ISBN10_RE.match(isbn) or len(isbn) < 2 or len(isbn) > 10:
        return False
    return _compute_check10(isbn[:-1]) == isbn[-1].upper()


def is_valid13(isbn) -> bool:
    isbn = _strip_hyphens(isbn)
    if not ISBN13_RE.match(isbn):
        return False
    return _compute_check13(isbn[:12]) == isbn[12]


def convert_to10(isbn, strict: bool = False) -> Optional[str]:
    """
    Convert to ISBN-10.

    strict=True: None unless the input is a valid ISBN-13.
    strict=False: a valid ISBN-10 is passed through unchanged.
    """
    if is_valid13(isbn):
        body = _strip_hyphens(isbn)[3:12]
        return body + _compute_check10(body)
    if not strict and is_valid10(isbn):
        return isbn
    return None


def convert_to13(isbn, strict: bool = False) -> Optional[str]:
    """
    Convert to ISBN-13.

    strict=True: None unless the input is a valid ISBN-10.
    strict=False: a valid ISBN-13 is passed through unchanged.
    """
    if is_valid10(isbn):
        # some ISBN-10s are just shorter
        body = PREFIX_978 + _strip_hyphens(isbn).zfill(10)[:9]
        return body + _compute_check13(body)
    if not strict and is_valid13(isbn):
        return isbn
    return None


def patch10(isbn) -> Optional[str]:
    if not is_valid10(isbn):
        return None
    return _strip_hyphens(isbn).upper().zfill(10)
