from __future__ import annotations

import csv
import logging
import re
from collections import Counter
from dataclasses import asdict
from typing import Dict, List, Optional, Tuple

from library_helpers.core import callnumber, isbn
from library_helpers.core.lc_parser import LOW_SORT_CHAR, CallNumberNormalizer
from library_helpers.core.models import BatchStats, IdentifierRecord
from library_helpers.io.utils import atomic_write

logger = logging.getLogger(__name__)

OUTPUT_FIELDS = [
    "isbn10",
    "isbn13",
    "isbn_status",
    "callnumber_clean",
    "callnumber_sort",
    "callnumber_status",
]

_LC_CLASS_RE = re.compile(r"^[A-Za-z]{1,3}")


def normalize_isbn_value(raw: str) -> Tuple[str, str, str]:
    """Returns (isbn10, isbn13, status) for one raw ISBN cell."""
    value = (raw or "").strip()
    if not value:
        return "", "", "empty"
    if isbn.is_valid13(value):
        return isbn.convert_to10(value, strict=True) or "", value.replace("-", ""), "isbn13"
    if isbn.is_valid10(value):
        return isbn.patch10(value) or "", isbn.convert_to13(value, strict=True) or "", "isbn10"
    return "", "", "invalid"


def normalize_callnumber_value(
    raw: str,
    sort_char: str = LOW_SORT_CHAR,
    normalizer: Optional[CallNumberNormalizer] = None,
) -> Tuple[str, str, str]:
    """Returns (cleaned, sort_key, status) for one raw call number cell."""
    cleaned = callnumber.clean(raw)
    if not cleaned:
        return "", "", "empty"
    if not callnumber.is_valid(cleaned):
        return cleaned, "", "invalid"
    sort_key = callnumber.normalize(cleaned, sort_char=sort_char, normalizer=normalizer)
    if sort_key is None:
        return cleaned, "", "invalid"
    return cleaned, sort_key, "valid"


def normalize_record(
    isbn_raw: str,
    callnumber_raw: str,
    sort_char: str = LOW_SORT_CHAR,
    normalizer: Optional[CallNumberNormalizer] = None,
) -> IdentifierRecord:
    isbn10, isbn13, isbn_status = normalize_isbn_value(isbn_raw)
    cleaned, sort_key, cn_status = normalize_callnumber_value(callnumber_raw, sort_char, normalizer)
    return IdentifierRecord(
        isbn_input=isbn_raw or "",
        isbn10=isbn10,
        isbn13=isbn13,
        isbn_status=isbn_status,
        callnumber_input=callnumber_raw or "",
        callnumber_clean=cleaned,
        callnumber_sort=sort_key,
        callnumber_status=cn_status,
    )


def _tally(stats: BatchStats, rec: IdentifierRecord, seen13: Counter, classes: Counter) -> None:
    stats.rows += 1
    if rec.isbn_status == "isbn10":
        stats.isbn10 += 1
    elif rec.isbn_status == "isbn13":
        stats.isbn13 += 1
    elif rec.isbn_status == "invalid":
        stats.isbn_invalid += 1
    else:
        stats.isbn_empty += 1

    if rec.isbn13:
        if seen13[rec.isbn13]:
            stats.isbn_duplicates += 1
        seen13[rec.isbn13] += 1

    if rec.callnumber_status == "valid":
        stats.callnumber_valid += 1
        m = _LC_CLASS_RE.match(rec.callnumber_clean)
        if m:
            classes[m.group(0).upper()] += 1
    elif rec.callnumber_status == "invalid":
        stats.callnumber_invalid += 1
    else:
        stats.callnumber_empty += 1


def _require_column(name: Optional[str], headers: List[str], path: str) -> None:
    if name and name not in headers:
        raise SystemExit(f"Column {name!r} not found in {path} (columns: {', '.join(headers) or '(none)'})")


def normalize_csv(
    in_path: str,
    out_path: str,
    isbn_column: Optional[str] = "isbn",
    callnumber_column: Optional[str] = "call_number",
    sort_char: str = LOW_SORT_CHAR,
    normalizer: Optional[CallNumberNormalizer] = None,
) -> Tuple[List[IdentifierRecord], BatchStats]:
    """
    Normalize the ISBN and call number columns of a CSV.

    Original columns are kept; the normalized columns in OUTPUT_FIELDS are
    appended (or overwritten when the input already has them). Rows that fail
    to normalize are written with an "invalid" status, never dropped.
    """
    try:
        f = open(in_path, "r", newline="", encoding="utf-8-sig")
    except FileNotFoundError as e:
        raise SystemExit(f"Input CSV not found: {in_path}") from e

    with f:
        reader = csv.DictReader(f)
        headers = list(reader.fieldnames or [])
        _require_column(isbn_column, headers, in_path)
        _require_column(callnumber_column, headers, in_path)
        rows: List[Dict[str, str]] = list(reader)

    stats = BatchStats()
    seen13: Counter = Counter()
    classes: Counter = Counter()
    records: List[IdentifierRecord] = []
    out_rows: List[Dict[str, str]] = []

    for row in rows:
        rec = normalize_record(
            row.get(isbn_column, "") if isbn_column else "",
            row.get(callnumber_column, "") if callnumber_column else "",
            sort_char=sort_char,
            normalizer=normalizer,
        )
        records.append(rec)
        _tally(stats, rec, seen13, classes)

        rec_dict = asdict(rec)
        out = dict(row)
        for k in OUTPUT_FIELDS:
            out[k] = rec_dict[k]
        out_rows.append(out)

    stats.duplicate_isbn13 = {k: v for k, v in seen13.items() if v > 1}
    stats.lc_classes = dict(classes)

    fieldnames = headers + [k for k in OUTPUT_FIELDS if k not in headers]

    def _write(path: str) -> None:
        with open(path, "w", newline="", encoding="utf-8") as out_f:
            w = csv.DictWriter(out_f, fieldnames=fieldnames, extrasaction="ignore")
            w.writeheader()
            w.writerows(out_rows)

    atomic_write(_write, out_path)
    logger.info("Wrote normalized CSV: %s rows=%s", out_path, stats.rows)
    if stats.isbn_invalid:
        logger.warning("%s rows with an invalid ISBN", stats.isbn_invalid)
    if stats.isbn_duplicates:
        logger.warning("%s rows repeat an ISBN-13 already seen", stats.isbn_duplicates)
    return records, stats
