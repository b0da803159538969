#!/usr/bin/env python3
"""
conftest.py

Shared fixtures: a small hand-built catalog and a kanjidic2 sample file.
"""

import sys
from pathlib import Path

import pytest

# Add parent directories to path for kanjidb imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "scripts"))

from kanjidb.builder import register_components
from kanjidb.catalog import KanjiCatalog
from kanjidb.kanji import KanjiEntry, ReadingMeaningGroup


# ---------------------------------------------------------------------------
# Sample Catalog
# ---------------------------------------------------------------------------

# literal, codepoint, strokes, radical, grade, jlpt, jis208, components
SAMPLE_ROWS = [
    ("一", 0x4E00, 1, 1, 1, 4, "1-16-76", ""),
    ("二", 0x4E8C, 2, 7, 1, 4, "1-38-83", ""),
    ("人", 0x4EBA, 2, 9, 1, 4, "1-31-45", ""),
    ("口", 0x53E3, 3, 30, 1, 4, "1-24-93", ""),
    ("川", 0x5DDD, 3, 47, 1, 3, "1-36-14", ""),
    ("日", 0x65E5, 4, 72, 1, 4, "1-38-92", ""),
    ("木", 0x6728, 4, 75, 1, 4, "1-44-58", ""),
    ("本", 0x672C, 5, 75, 1, 4, "1-43-60", ""),
    ("休", 0x4F11, 6, 9, 1, 4, "1-21-57", "亻木"),
    ("体", 0x4F53, 7, 9, 2, 4, "1-34-46", "亻本"),
    ("海", 0x6D77, 9, 85, 2, 3, "1-19-04", "氵毎"),
    ("語", 0x8A9E, 14, 149, 2, 4, "1-24-76", "言五口"),
    ("體", 0x9AD4, 23, 188, 0, 0, "", ""),
]


def make_entries() -> list[KanjiEntry]:
    entries = []
    for literal, codepoint, strokes, radical, grade, jlpt, jis208, components in SAMPLE_ROWS:
        entries.append(KanjiEntry(
            literal=literal,
            codepoint=codepoint,
            jis208=jis208,
            classical_radical=radical,
            grade=grade,
            stroke_count=strokes,
            jlpt=jlpt,
            components=list(components),
        ))

    by_literal = {entry.literal: entry for entry in entries}

    ichi = by_literal["一"]
    ichi.frequency = 2
    ichi.nanori = ["かず", "ひ"]
    ichi.codepoint_variants = [0x5F0C]   # 弌, not in the sample
    ichi.groups.append(ReadingMeaningGroup(
        on_readings={"イチ", "イツ"},
        kun_readings={"ひと-", "ひと.つ"},
        english_meanings={"one", "one radical (no.1)"},
        french_meanings={"un"},
    ))

    by_literal["体"].codepoint_variants = [0x9AD4]

    tai = by_literal["體"]
    tai.jis212 = "1-74-24"
    tai.codepoint_variants = [0x4F53]
    tai.jis208_variants = ["1-34-46"]

    by_literal["海"].groups.append(ReadingMeaningGroup(
        on_readings={"カイ"},
        kun_readings={"うみ"},
        english_meanings={"sea", "ocean"},
    ))

    return entries


@pytest.fixture
def sample_entries() -> list[KanjiEntry]:
    return make_entries()


@pytest.fixture
def sample_catalog() -> KanjiCatalog:
    catalog = KanjiCatalog()
    for entry in make_entries():
        catalog.add_entry(entry)
    register_components(catalog, {"毎": "IDS of 毎 refers to unencoded glyphs: &CDP-8BF1;"})
    return catalog


# ---------------------------------------------------------------------------
# kanjidic2 Sample
# ---------------------------------------------------------------------------

KANJIDIC_SAMPLE = """<?xml version="1.0" encoding="UTF-8"?>
<kanjidic2>
<header>
<file_version>4</file_version>
<database_version>2024-001</database_version>
</header>
<character>
<literal>亜</literal>
<codepoint>
<cp_value cp_type="ucs">4e9c</cp_value>
<cp_value cp_type="jis208">1-16-01</cp_value>
</codepoint>
<radical>
<rad_value rad_type="classical">7</rad_value>
<rad_value rad_type="nelson_c">1</rad_value>
</radical>
<misc>
<grade>8</grade>
<stroke_count>7</stroke_count>
<stroke_count>8</stroke_count>
<variant var_type="jis208">1-48-19</variant>
<variant var_type="ucs">4e9e</variant>
<freq>1509</freq>
<jlpt>1</jlpt>
</misc>
<reading_meaning>
<rmgroup>
<reading r_type="pinyin">ya4</reading>
<reading r_type="ja_on">ア</reading>
<reading r_type="ja_kun">つ.ぐ</reading>
<meaning>Asia</meaning>
<meaning>rank next</meaning>
<meaning m_lang="fr">Asie</meaning>
<meaning m_lang="es">pref. para Asia</meaning>
</rmgroup>
<nanori>や</nanori>
<nanori>つぎ</nanori>
</reading_meaning>
</character>
<character>
<literal>乙</literal>
<codepoint>
<cp_value cp_type="ucs">4e59</cp_value>
<cp_value cp_type="jis208">1-18-21</cp_value>
</codepoint>
<radical>
<rad_value rad_type="classical">5</rad_value>
</radical>
<misc>
<grade>8</grade>
<stroke_count>1</stroke_count>
<rad_name>おつ</rad_name>
<jlpt>1</jlpt>
</misc>
<reading_meaning>
<rmgroup>
<reading r_type="ja_on">オツ</reading>
<reading r_type="ja_kun">おと-</reading>
<meaning>the latter</meaning>
<meaning>duplicate</meaning>
</rmgroup>
<nanori>お</nanori>
</reading_meaning>
</character>
<character>
<literal>丂</literal>
<codepoint>
<cp_value cp_type="ucs">4e02</cp_value>
<cp_value cp_type="jis212">1-16-20</cp_value>
</codepoint>
<radical>
<rad_value rad_type="classical">1</rad_value>
</radical>
<misc>
<stroke_count>2</stroke_count>
</misc>
</character>
</kanjidic2>
"""

IDS_SAMPLE = """;; sample of IDS-UCS-Basic.txt
U+4E02\t丂\t⿱一&CDP-8BF1;
U+4E59\t乙\t⿰丂乙
U+4E9C\t亜\t⿱一⿻口&M-00161;@apparent=⿱一⿻口一
"""


@pytest.fixture
def kanjidic_path(tmp_path) -> Path:
    path = tmp_path / "kanjidic2.xml"
    path.write_text(KANJIDIC_SAMPLE, encoding="utf-8")
    return path


@pytest.fixture
def ids_path(tmp_path) -> Path:
    path = tmp_path / "IDS-UCS-Basic.txt"
    path.write_text(IDS_SAMPLE, encoding="utf-8")
    return path
