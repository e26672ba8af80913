from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from library_helpers.core.lc_parser import LOW_SORT_CHAR

logger = logging.getLogger(__name__)

LOG_LEVEL_NAMES = ("debug", "info", "warning", "error")

ENV_PREFIX = "LIBRARY_HELPERS_"


def _parse_env_file(path: Path) -> None:
    # KEY=value lines; "#" starts a comment, surrounding quotes are dropped
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.split(" #", 1)[0].strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, v = (part.strip() for part in line.split("=", 1))
        v = v.strip("\"'")
        if k and k not in os.environ:
            os.environ[k] = v


def load_dotenv(path: str = ".env") -> Optional[str]:
    """
    Loads environment variables from a .env file without overriding
    variables that are already set.

    Search order:
    1) ENV_PATH (if set)
    2) explicit `path` as provided (relative to CWD or absolute)
    3) project root (parent of the library_helpers package directory)
    4) current working directory

    Returns the resolved .env path used, or None if not found.
    """
    candidates: List[Path] = []
    override = os.getenv("ENV_PATH")
    if override:
        candidates.append(Path(override).expanduser())

    p = Path(path).expanduser()
    candidates.append(p if p.is_absolute() else (Path.cwd() / p))

    project_root = Path(__file__).resolve().parent.parent
    candidates.append(project_root / ".env")

    candidates.append(Path.cwd() / ".env")

    seen = set()
    for c in candidates:
        c = c.resolve()
        if str(c) in seen:
            continue
        seen.add(str(c))
        if c.is_file():
            try:
                _parse_env_file(c)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("could not read %s: %s", c, e)
                continue
            return str(c)

    return None


def load_settings_file(path: str) -> Dict[str, Any]:
    p = Path(path)
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except FileNotFoundError as e:
        raise SystemExit(f"Settings file not found: {p}") from e
    except (OSError, yaml.YAMLError) as e:
        raise SystemExit(f"Failed to read settings file: {p} ({e})") from e
    if not isinstance(data, dict):
        raise SystemExit(f"Settings file must be a mapping: {p}")
    logger.info("Loaded settings file: %s", p)
    return data


def _env_bool(val: str) -> bool:
    return val.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class AppConfig:
    sort_char: str = LOW_SORT_CHAR
    strict: bool = False
    log_level: str = "info"
    isbn_column: str = "isbn"
    callnumber_column: str = "call_number"

    @classmethod
    def from_env(cls, settings: Optional[Dict[str, Any]] = None) -> "AppConfig":
        cfg = cls()
        for f in fields(cls):
            raw = os.getenv(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            setattr(cfg, f.name, _env_bool(raw) if f.type in (bool, "bool") else raw)

        known = {f.name for f in fields(cls)}
        for key, value in (settings or {}).items():
            if key not in known:
                logger.debug("ignoring unknown setting: %s", key)
                continue
            setattr(cfg, key, value)
        return cfg

    def validate(self) -> None:
        if not isinstance(self.sort_char, str) or len(self.sort_char) != 1:
            raise SystemExit(f"sort_char must be a single character, got {self.sort_char!r}.")
        if str(self.log_level).lower() not in LOG_LEVEL_NAMES:
            raise SystemExit(f"Unknown log level: {self.log_level} (use one of {', '.join(LOG_LEVEL_NAMES)}).")
        if not isinstance(self.strict, bool):
            raise SystemExit(f"strict must be true or false, got {self.strict!r}.")
