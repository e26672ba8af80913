from __future__ import annotations

import html
from collections import Counter
from datetime import datetime, timezone
from typing import List, Tuple

from library_helpers.core.models import BatchStats


def _top(counts: dict, n: int = 20) -> List[Tuple[str, int]]:
    return Counter(counts).most_common(n)


def build_report_data(stats: BatchStats) -> dict:
    data = stats.as_dict()
    data["generated_at"] = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%SZ")
    data["top_duplicates"] = _top(stats.duplicate_isbn13)
    data["top_classes"] = _top(stats.lc_classes)
    return data


_SUMMARY = (
    ("rows", "Rows"),
    ("isbn10", "ISBN-10 inputs"),
    ("isbn13", "ISBN-13 inputs"),
    ("isbn_invalid", "Invalid ISBNs"),
    ("isbn_empty", "Missing ISBNs"),
    ("isbn_duplicates", "Duplicate ISBN-13 rows"),
    ("callnumber_valid", "Valid call numbers"),
    ("callnumber_invalid", "Invalid call numbers"),
    ("callnumber_empty", "Missing call numbers"),
)


def _md_table(rows: List[Tuple[str, int]], headers: Tuple[str, str]) -> str:
    lines = [f"| {headers[0]} | {headers[1]} |", "| --- | --- |"]
    for k, v in rows:
        lines.append(f"| {k} | {v} |")
    return "\n".join(lines)


def render_markdown(data: dict) -> str:
    out = []
    out.append("# Identifier Report")
    out.append("")
    out.append(f"Generated: {data['generated_at']}")
    out.append("")
    out.append(_md_table([(label, data[key]) for key, label in _SUMMARY], ("Metric", "Count")))
    out.append("")
    out.append("## Duplicate ISBN-13")
    out.append(_md_table(data["top_duplicates"], ("ISBN-13", "Rows")))
    out.append("")
    out.append("## LC Classes")
    out.append(_md_table(data["top_classes"], ("Class", "Count")))
    return "\n".join(out)


def _html_table(rows: List[Tuple[str, int]], headers: Tuple[str, str]) -> str:
    head = f"<tr><th>{html.escape(headers[0])}</th><th>{html.escape(headers[1])}</th></tr>"
    body = "".join(
        f"<tr><td>{html.escape(str(k))}</td><td>{v}</td></tr>" for k, v in rows
    )
    return f"<table>{head}{body}</table>"


def render_html(data: dict) -> str:
    sections = []
    sections.append("<h1>Identifier Report</h1>")
    sections.append(f"<p><strong>Generated:</strong> {html.escape(data['generated_at'])}</p>")
    sections.append(_html_table([(label, data[key]) for key, label in _SUMMARY], ("Metric", "Count")))
    sections.append("<h2>Duplicate ISBN-13</h2>")
    sections.append(_html_table(data["top_duplicates"], ("ISBN-13", "Rows")))
    sections.append("<h2>LC Classes</h2>")
    sections.append(_html_table(data["top_classes"], ("Class", "Count")))

    return (
        "<!doctype html>"
        "<html><head><meta charset='utf-8'>"
        "<title>Identifier Report</title>"
        "<style>"
        "body{font-family:Arial, sans-serif; margin:24px; color:#111;}"
        "table{border-collapse:collapse; margin:12px 0; width:100%; max-width:900px;}"
        "th,td{border:1px solid #ddd; padding:6px 10px; text-align:left;}"
        "th{background:#f3f3f3;}"
        "</style></head><body>"
        + "".join(sections)
        + "</body></html>"
    )


def write_report(stats: BatchStats, out_path: str) -> None:
    data = build_report_data(stats)
    if out_path.lower().endswith(".html"):
        content = render_html(data)
    else:
        content = render_markdown(data)
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(content)
