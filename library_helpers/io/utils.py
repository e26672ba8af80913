from __future__ import annotations

import logging
import os
import tempfile
from typing import Callable

logger = logging.getLogger(__name__)


def atomic_write(write_fn: Callable[[str], None], out_path: str) -> None:
    """Run write_fn against a temp file next to out_path, then move it into place."""
    d = os.path.dirname(out_path) or "."
    os.makedirs(d, exist_ok=True)
    with tempfile.NamedTemporaryFile("w", delete=False, dir=d, newline="", encoding="utf-8") as tf:
        tmp_path = tf.name
    try:
        write_fn(tmp_path)
        os.replace(tmp_path, out_path)
    finally:
        if os.path.exists(tmp_path):
            try:
                os.remove(tmp_path)
            except OSError as e:
                logger.warning("could not remove temp file %s: %s", tmp_path, e)
