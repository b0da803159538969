#!/usr/bin/env python3
"""
documents.py

Export catalog records as OSMF kanji documents (JSON-ready dicts).

The document shape is described by the data-model schema shipped next to
this module (kanji.schema.json).
"""

import json
from pathlib import Path

from .kanji import Kanji

KANJI_SCHEMA_PATH = Path(__file__).resolve().parent / "kanji.schema.json"


def codepoint_str(cp: int) -> str:
    """Convert a codepoint to 'U+XXXX' format."""
    if cp > 0xFFFF:
        return f"U+{cp:05X}"
    return f"U+{cp:04X}"


def load_kanji_schema() -> dict:
    with open(KANJI_SCHEMA_PATH, "r", encoding="utf-8") as f:
        return json.load(f)


def build_kanji_document(kanji: Kanji) -> dict:
    """
    Build an OSMF kanji document from a catalog record.

    Optional fields are only emitted when the record has a value for them.
    Set-valued fields are sorted so documents are stable between runs.

    Args:
        kanji: A record from a KanjiCatalog

    Returns:
        Document dict matching kanji.schema.json
    """
    unicode = codepoint_str(kanji.codepoint)

    doc = {
        "$id": f"kanji:{unicode}",
        "unicode": unicode,
        "symbol": kanji.literal,
        "meanings": sorted(kanji.english_meanings),
    }

    if kanji.on_readings:
        doc["onyomi"] = sorted(kanji.on_readings)

    if kanji.kun_readings:
        doc["kunyomi"] = sorted(kanji.kun_readings)

    if kanji.nanori:
        doc["nanori"] = sorted(kanji.nanori)

    if kanji.stroke_count:
        doc["strokeCount"] = kanji.stroke_count

    if kanji.grade:
        doc["grade"] = kanji.grade

    doc["jlptLevel"] = kanji.jlpt if kanji.jlpt else "unspecified"

    if kanji.frequency:
        doc["frequency"] = kanji.frequency

    if kanji.classical_radical:
        doc["radical"] = kanji.classical_radical

    codes = {
        name: value
        for name, value in (("jis208", kanji.jis208), ("jis212", kanji.jis212), ("jis213", kanji.jis213))
        if value
    }
    if codes:
        doc["codes"] = codes

    if kanji.components:
        doc["components"] = [chr(cp) for cp in sorted(kanji.components)]

    return doc
