from __future__ import annotations

import logging
import os
import sys


def _level_from_env(default: int) -> int:
    # LRCSHIFT_LOG_LEVEL=warning (or 30) keeps shell pipelines quiet
    level_name = os.getenv("LRCSHIFT_LOG_LEVEL")
    if not level_name:
        return default
    if level_name.isdigit():
        return int(level_name)
    level = logging.getLevelName(level_name.upper())
    return level if isinstance(level, int) else default


def setup_logging(debug: bool) -> None:
    level = _level_from_env(logging.DEBUG if debug else logging.INFO)

    # stdout carries the lyrics
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
