#!/usr/bin/env python3
"""
config.py

Runtime settings for the kanji catalog.

Defaults come from kanjidb.paths. A .env file (python-dotenv) or the process
environment can override them:

    KANJIDB_KANJIDIC_PATH   kanjidic2 XML (.xml or .xml.gz)
    KANJIDB_IDS_PATH        CHISE IDS file (optional source)
    KANJIDB_CACHE_PATH      binary catalog cache
    KANJIDB_LOG_LEVEL       logging level name, e.g. DEBUG
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .paths import CACHE_PATH, CHISE_IDS_PATH, ENV_FILE, KANJIDIC_PATH

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    kanjidic_path: Path = KANJIDIC_PATH
    ids_path: Optional[Path] = CHISE_IDS_PATH
    cache_path: Path = CACHE_PATH
    log_level: str = "WARNING"


def _env_path(name: str, default: Optional[Path]) -> Optional[Path]:
    value = os.environ.get(name)
    if value is None:
        return default
    value = value.strip()
    # An explicitly empty value disables an optional source
    return Path(value).expanduser() if value else None


def load_settings(env_file: Optional[Path] = ENV_FILE) -> Settings:
    """
    Build Settings from defaults, the .env file and the environment.

    Variables already present in the environment win over the .env file.
    """
    if env_file is not None and Path(env_file).exists():
        load_dotenv(env_file, override=False)

    kanjidic_path = _env_path("KANJIDB_KANJIDIC_PATH", KANJIDIC_PATH) or KANJIDIC_PATH
    cache_path = _env_path("KANJIDB_CACHE_PATH", CACHE_PATH) or CACHE_PATH

    return Settings(
        kanjidic_path=kanjidic_path,
        ids_path=_env_path("KANJIDB_IDS_PATH", CHISE_IDS_PATH),
        cache_path=cache_path,
        log_level=os.environ.get("KANJIDB_LOG_LEVEL", "WARNING").strip().upper() or "WARNING",
    )


def configure_logging(level: str = "WARNING") -> None:
    """Route kanjidb log records to stderr."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.WARNING
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
