#!/usr/bin/env python3
"""
build_kanji_cache.py

Build the kanji catalog from kanjidic2.xml (plus CHISE IDS components, when
available) and write it to the binary catalog cache.

Usage:
    python generators/build_kanji_cache.py [--kanjidic PATH] [--ids PATH]
                                           [--output PATH] [--dry-run]
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path for kanjidb imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from kanjidb import persistence
from kanjidb.builder import build_catalog
from kanjidb.catalog import GRADE, JLPT
from kanjidb.config import configure_logging, load_settings


def main():
    settings = load_settings()

    parser = argparse.ArgumentParser(description="Build the binary kanji catalog cache")
    parser.add_argument("--kanjidic", type=Path, default=settings.kanjidic_path,
                        help="kanjidic2.xml or kanjidic2.xml.gz")
    parser.add_argument("--ids", type=Path, default=settings.ids_path,
                        help="CHISE IDS file for component data")
    parser.add_argument("--no-components", action="store_true",
                        help="Skip component decomposition")
    parser.add_argument("--output", type=Path, default=settings.cache_path,
                        help="Cache file to write")
    parser.add_argument("--dry-run", action="store_true",
                        help="Build the catalog but do not write the cache")
    args = parser.parse_args()

    configure_logging(settings.log_level)

    print("Building Kanji Catalog")
    print("=" * 40)

    if not args.kanjidic.exists():
        print(f"Error: kanjidic2 not found at {args.kanjidic}")
        print("Download it from http://www.edrdg.org/kanjidic/kanjidic2.xml.gz")
        sys.exit(1)

    ids_path = None if args.no_components else args.ids
    if ids_path is not None and not ids_path.exists():
        print(f"Note: CHISE IDS not found at {ids_path}, components will be empty")
        ids_path = None

    # Step 1: Parse and index
    print(f"\n1. Parsing {args.kanjidic.name}...")
    catalog = build_catalog(args.kanjidic, ids_path)
    stats = catalog.stats()
    print(f"   Kanji: {stats['kanji']}")
    print(f"   Stroke counts: {catalog.min_strokes}-{catalog.max_strokes}")
    print(f"   Components: {stats['component_records']} ({stats['faulty_components']} faulty)")

    # Step 2: Write cache
    if args.dry_run:
        print("\n2. DRY RUN - cache not written")
    else:
        print(f"\n2. Writing {args.output}...")
        persistence.save(catalog, args.output)
        print(f"   Size: {args.output.stat().st_size:,} bytes")

    # Summary
    print("\n" + "=" * 40)
    print("Summary:")

    grade_labels = {
        1: "Grade 1 (kyouiku)", 2: "Grade 2 (kyouiku)", 3: "Grade 3 (kyouiku)",
        4: "Grade 4 (kyouiku)", 5: "Grade 5 (kyouiku)", 6: "Grade 6 (kyouiku)",
        8: "Grade 8 (jouyou remainder)", 9: "Jinmeiyou", 10: "Jinmeiyou variant",
    }
    for grade in catalog.keys(GRADE):
        label = grade_labels.get(grade, f"Grade {grade}")
        print(f"  {label}: {len(catalog.lookup(GRADE, grade))}")

    for level in catalog.keys(JLPT):
        print(f"  JLPT {level}: {len(catalog.lookup(JLPT, level))}")

    print(f"  Total: {len(catalog)}")
    print("\nDone.")


if __name__ == "__main__":
    main()
