#!/usr/bin/env python3
"""
query_kanji.py

Run a catalog query and print the matching kanji.

The catalog is read from the binary cache; if the cache is missing, stale or
unreadable it is rebuilt from kanjidic2 first.

Usage:
    python analyzers/query_kanji.py "grade=1&jlpt=4"
    python analyzers/query_kanji.py "strokes<3" --json
    python analyzers/query_kanji.py 日本語
"""

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

# Add parent directory to path for kanjidb imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from kanjidb import persistence
from kanjidb.builder import load_or_build
from kanjidb.config import configure_logging, load_settings
from kanjidb.documents import build_kanji_document
from kanjidb.errors import CatalogFormatError
from kanjidb.query import run_query


def format_kanji(kanji) -> str:
    on = "、".join(sorted(kanji.on_readings)) or "-"
    kun = "、".join(sorted(kanji.kun_readings)) or "-"
    meanings = ", ".join(sorted(kanji.english_meanings)) or "-"
    return (f"{kanji.literal}  U+{kanji.codepoint:04X}  strokes={kanji.stroke_count}  "
            f"on={on}  kun={kun}  {meanings}")


def main():
    settings = load_settings()

    parser = argparse.ArgumentParser(description="Query the kanji catalog")
    parser.add_argument("query", help="Query string, e.g. 'grade=1&jlpt=4' or plain kanji")
    parser.add_argument("--cache", type=Path, default=settings.cache_path,
                        help="Catalog cache file")
    parser.add_argument("--rebuild", action="store_true",
                        help="Rebuild the catalog from source even if the cache is valid")
    parser.add_argument("--json", action="store_true",
                        help="Print results as kanji documents (JSON)")
    parser.add_argument("--limit", type=int, default=0,
                        help="Show at most N results (0 = all)")
    args = parser.parse_args()

    configure_logging(settings.log_level)

    cache_settings = replace(settings, cache_path=args.cache)
    kanjidic_path = cache_settings.kanjidic_path

    if kanjidic_path.exists():
        catalog = load_or_build(cache_settings, rebuild=args.rebuild)
    elif args.rebuild:
        print(f"Error: cannot rebuild, kanjidic2 not found at {kanjidic_path}")
        sys.exit(1)
    else:
        # Without a source the cache is all there is
        try:
            catalog = persistence.load(args.cache)
        except FileNotFoundError:
            print(f"Error: no cache at {args.cache} and no kanjidic2 at {kanjidic_path}")
            sys.exit(1)
        except (CatalogFormatError, OSError) as e:
            print(f"Error: unusable cache {args.cache} ({e}) and no kanjidic2 at {kanjidic_path}")
            sys.exit(1)

    result = run_query(catalog, args.query)

    shown = result.kanji[:args.limit] if args.limit > 0 else result.kanji

    if args.json:
        docs = [build_kanji_document(k) for k in shown]
        print(json.dumps(docs, ensure_ascii=False, indent=2))
        return

    mode = "keyword query" if result.keyed else "character lookup"
    print(f"{len(result)} match(es) ({mode})")
    for kanji in shown:
        print(f"  {format_kanji(kanji)}")
    if len(shown) < len(result):
        print(f"  ... {len(result) - len(shown)} more")


if __name__ == "__main__":
    main()
