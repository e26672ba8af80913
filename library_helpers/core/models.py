from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple


@dataclass(frozen=True)
class LCCallNumber:
    letters: str
    number: str = ""
    decimal: str = ""
    cutters: Tuple[Tuple[str, str], ...] = ()
    remainder: Tuple[str, ...] = ()


@dataclass(frozen=True)
class IdentifierRecord:
    isbn_input: str
    isbn10: str
    isbn13: str
    isbn_status: str  # "isbn10" | "isbn13" | "invalid" | "empty"

    callnumber_input: str
    callnumber_clean: str
    callnumber_sort: str
    callnumber_status: str  # "valid" | "invalid" | "empty"


@dataclass
class BatchStats:
    rows: int = 0
    isbn10: int = 0
    isbn13: int = 0
    isbn_invalid: int = 0
    isbn_empty: int = 0
    isbn_duplicates: int = 0
    callnumber_valid: int = 0
    callnumber_invalid: int = 0
    callnumber_empty: int = 0
    duplicate_isbn13: Dict[str, int] = field(default_factory=dict)
    lc_classes: Dict[str, int] = field(default_factory=dict)

    def as_dict(self) -> dict:
        return {
            "rows": self.rows,
            "isbn10": self.isbn10,
            "isbn13": self.isbn13,
            "isbn_invalid": self.isbn_invalid,
            "isbn_empty": self.isbn_empty,
            "isbn_duplicates": self.isbn_duplicates,
            "callnumber_valid": self.callnumber_valid,
            "callnumber_invalid": self.callnumber_invalid,
            "callnumber_empty": self.callnumber_empty,
        }
