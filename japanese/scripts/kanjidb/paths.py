#!/usr/bin/env python3
"""
paths.py

Default file locations for the kanji catalog.
Scripts take their defaults from here (through kanjidb.config) rather than
hard-coding paths; KANJIDB_* environment variables override them.
"""

from pathlib import Path

# ---------------------------------------------------------------------------
# Repository Layout
# ---------------------------------------------------------------------------

PACKAGE_DIR = Path(__file__).resolve().parent      # japanese/scripts/kanjidb
SCRIPT_DIR = PACKAGE_DIR.parent                    # japanese/scripts
JAPANESE_ROOT = SCRIPT_DIR.parent                  # japanese

DATA_DIR = JAPANESE_ROOT / "data"

# ---------------------------------------------------------------------------
# Dictionary Sources (downloaded separately)
# ---------------------------------------------------------------------------

SOURCE_DIR = SCRIPT_DIR / "source"

# EDRDG kanjidic2, as .xml or .xml.gz
KANJIDIC_PATH = SOURCE_DIR / "kanjidic2.xml"

# CHISE IDS decompositions
CHISE_IDS_PATH = SOURCE_DIR / "chise-ids" / "IDS-UCS-Basic.txt"

# ---------------------------------------------------------------------------
# Binary Catalog Cache
# ---------------------------------------------------------------------------

CACHE_PATH = DATA_DIR / "cache" / "kanji-catalog.bin"

# Optional KANJIDB_* overrides, loaded with python-dotenv
ENV_FILE = JAPANESE_ROOT / ".env"
