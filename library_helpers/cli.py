# library_helpers/cli.py
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from rich.logging import RichHandler

from library_helpers.config import AppConfig, load_dotenv, load_settings_file
from library_helpers.core import callnumber, isbn
from library_helpers.io.batch import normalize_csv
from library_helpers.io.report import write_report

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

INVALID = "INVALID"


def _read_values(values: List[str]) -> List[str]:
    if values and values != ["-"]:
        return values
    return [line.strip() for line in sys.stdin if line.strip()]


def _setup_logging(level_name: str) -> None:
    level = LOG_LEVELS.get(level_name.lower(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def _cmd_isbn_check(args, cfg: AppConfig) -> int:
    bad = 0
    for v in _read_values(args.values):
        ok10 = isbn.is_valid10(v)
        ok13 = isbn.is_valid13(v)
        check = isbn.checksum13(v) if ok13 else isbn.checksum10(v)
        if not (ok10 or ok13):
            bad += 1
        print(f"{v}\tisbn10={ok10}\tisbn13={ok13}\tcheck={check or '-'}")
    return 1 if bad else 0


def _cmd_isbn_convert(args, cfg: AppConfig) -> int:
    strict = args.strict or cfg.strict
    fn = isbn.convert_to10 if args.to == "10" else isbn.convert_to13
    bad = 0
    for v in _read_values(args.values):
        out = fn(v, strict=strict)
        if out is None:
            bad += 1
        print(f"{v}\t{out or INVALID}")
    return 1 if bad else 0


def _cmd_isbn_patch(args, cfg: AppConfig) -> int:
    bad = 0
    for v in _read_values(args.values):
        out = isbn.patch10(v)
        if out is None:
            bad += 1
        print(f"{v}\t{out or INVALID}")
    return 1 if bad else 0


def _cmd_callnumber(args, cfg: AppConfig) -> int:
    sort_char = cfg.sort_char
    bad = 0
    for v in _read_values(args.values):
        if args.action == "clean":
            out = callnumber.clean(v)
        elif args.action == "validate":
            ok = callnumber.is_valid(v)
            bad += 0 if ok else 1
            out = str(ok)
        elif args.class_only:
            out = callnumber.normalize_class(callnumber.clean(v), sort_char=sort_char)
        else:
            out = callnumber.normalize(v, sort_char=sort_char)
        if out is None:
            bad += 1
        print(f"{v}\t{INVALID if out is None else out}")
    return 1 if bad else 0


def _cmd_batch(args, cfg: AppConfig) -> int:
    logger = logging.getLogger(__name__)
    isbn_column = cfg.isbn_column if args.isbn_column is None else args.isbn_column
    callnumber_column = cfg.callnumber_column if args.callnumber_column is None else args.callnumber_column

    logger.info("Input: %s", args.inp)
    logger.info("Output: %s", args.out)
    logger.info("Columns: isbn=%s | call number=%s", isbn_column or "(none)", callnumber_column or "(none)")

    _, stats = normalize_csv(
        args.inp,
        args.out,
        isbn_column=isbn_column or None,
        callnumber_column=callnumber_column or None,
        sort_char=cfg.sort_char,
    )
    logger.info(
        "Done: rows=%s isbn10=%s isbn13=%s invalid=%s duplicates=%s",
        stats.rows,
        stats.isbn10,
        stats.isbn13,
        stats.isbn_invalid,
        stats.isbn_duplicates,
    )
    if args.report:
        write_report(stats, args.report)
        logger.info("Report: %s", args.report)
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="library-helpers",
        description="Validate/convert ISBN-10 and ISBN-13, clean and normalize LC call numbers",
    )
    ap.add_argument("--log-level", default=None, help="Log level: debug, info, warning, error")
    ap.add_argument("--env-file", default=".env", help=".env file to load before reading settings")
    ap.add_argument("--config", default=None, help="YAML settings file (sort_char, strict, columns, log_level)")
    sub = ap.add_subparsers(dest="command", required=True)

    # isbn
    p_isbn = sub.add_parser("isbn", help="ISBN-10 / ISBN-13 tools")
    isbn_sub = p_isbn.add_subparsers(dest="action", required=True)

    p = isbn_sub.add_parser("check", help="Validate values and show the check character")
    p.add_argument("values", nargs="*", help="ISBNs ('-' or none reads stdin)")
    p.set_defaults(func=_cmd_isbn_check)

    p = isbn_sub.add_parser("convert", help="Convert between ISBN-10 and ISBN-13")
    p.add_argument("--to", choices=("10", "13"), required=True, help="Target format")
    p.add_argument("--strict", action="store_true", help="Fail unless the input is in the other format")
    p.add_argument("values", nargs="*", help="ISBNs ('-' or none reads stdin)")
    p.set_defaults(func=_cmd_isbn_convert)

    p = isbn_sub.add_parser("patch", help="Zero-pad short ISBN-10s")
    p.add_argument("values", nargs="*", help="ISBN-10s ('-' or none reads stdin)")
    p.set_defaults(func=_cmd_isbn_patch)

    # call numbers
    p_cn = sub.add_parser("callnumber", help="LC call number tools")
    p_cn.add_argument("action", choices=("clean", "validate", "normalize"))
    p_cn.add_argument("--sort-char", default=None, help="Padding character for sort keys (default: space)")
    p_cn.add_argument("--class-only", action="store_true", help="normalize: classification portion only")
    p_cn.add_argument("values", nargs="*", help="Call numbers ('-' or none reads stdin)")
    p_cn.set_defaults(func=_cmd_callnumber)

    # batch
    p_b = sub.add_parser("batch", help="Normalize the identifier columns of a CSV")
    p_b.add_argument("--in", dest="inp", required=True, help="Input CSV")
    p_b.add_argument("--out", required=True, help="Output CSV (input columns + normalized columns)")
    p_b.add_argument("--report", default=None, help="Optional summary report (.md or .html)")
    p_b.add_argument("--isbn-column", default=None, help="ISBN column name (empty string to skip)")
    p_b.add_argument("--callnumber-column", default=None, help="Call number column name (empty string to skip)")
    p_b.add_argument("--sort-char", default=None, help="Padding character for sort keys (default: space)")
    p_b.set_defaults(func=_cmd_batch)

    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    used_env = load_dotenv(args.env_file)
    settings = load_settings_file(args.config) if args.config else None
    cfg = AppConfig.from_env(settings)
    if args.log_level:
        cfg.log_level = args.log_level
    if getattr(args, "sort_char", None) is not None:
        cfg.sort_char = args.sort_char
    cfg.validate()

    _setup_logging(cfg.log_level)
    if used_env:
        logging.getLogger(__name__).debug("loaded .env: %s", used_env)
    logging.getLogger(__name__).debug("config: %s", cfg)
    return args.func(args, cfg)


if __name__ == "__main__":
    raise SystemExit(main())
