#!/usr/bin/env python3
"""
builder.py

Build a KanjiCatalog from dictionary sources, or load it from the binary
cache when a usable one exists.
"""

import logging
from pathlib import Path
from typing import Optional

from . import persistence
from .adapters.component_analysis import attach_components, load_chise_ids
from .adapters.kanjidic import parse_kanjidic_full
from .catalog import KanjiCatalog
from .config import Settings
from .errors import CatalogFormatError, UnencodableRecordError

logger = logging.getLogger(__name__)


def register_components(catalog: KanjiCatalog, faulty: dict[str, str]) -> int:
    """
    Create component pseudo-records for every component used by the catalog.

    A component takes its stroke count from the catalog record of the same
    character, when there is one. Components are registered in codepoint
    order so ordinals do not depend on ingestion order.

    Returns:
        Number of components registered
    """
    codepoints: set[int] = set()
    for kanji in catalog:
        codepoints.update(kanji.components)

    for codepoint in sorted(codepoints):
        literal = chr(codepoint)
        same_char = catalog.by_codepoint(codepoint)
        strokes = same_char.stroke_count if same_char is not None else 0
        catalog.add_component(literal, strokes, faulty.get(literal, ""))

    return len(codepoints)


def build_catalog(kanjidic_path: Path, ids_path: Optional[Path] = None) -> KanjiCatalog:
    """
    Parse kanjidic2 (and optionally CHISE IDS) into a new catalog.

    Args:
        kanjidic_path: kanjidic2.xml or kanjidic2.xml.gz
        ids_path: CHISE IDS file; components are left empty without it

    Returns:
        A fully indexed KanjiCatalog
    """
    entries = parse_kanjidic_full(kanjidic_path)

    faulty: dict[str, str] = {}
    if ids_path is not None:
        faulty = attach_components(entries, load_chise_ids(ids_path))

    catalog = KanjiCatalog()
    skipped = 0
    for entry in entries:
        if catalog.add_entry(entry) is None:
            skipped += 1

    components = register_components(catalog, faulty)
    logger.info("Built catalog: %d kanji, %d components, %d skipped entries",
                len(catalog), components, skipped)
    return catalog


def load_or_build(settings: Settings, rebuild: bool = False) -> KanjiCatalog:
    """
    Return the cached catalog, rebuilding it from source when needed.

    A missing, foreign, outdated or damaged cache is a cache miss: the
    catalog is rebuilt from kanjidic2 and the cache rewritten. Failing to
    write the cache only costs the next run a rebuild.
    """
    cache_path = Path(settings.cache_path)

    if not rebuild and cache_path.exists():
        try:
            return persistence.load(cache_path)
        except (CatalogFormatError, OSError) as e:
            logger.warning("Ignoring catalog cache %s: %s", cache_path, e)

    ids_path = settings.ids_path
    if ids_path is not None and not Path(ids_path).exists():
        logger.warning("CHISE IDS file %s not found; building without components", ids_path)
        ids_path = None

    catalog = build_catalog(settings.kanjidic_path, ids_path)

    try:
        persistence.save(catalog, cache_path)
    except (UnencodableRecordError, OSError) as e:
        logger.warning("Could not write catalog cache %s: %s", cache_path, e)

    return catalog
