#!/usr/bin/env python3
"""
radicals.py

The 214 classical (Kangxi) radicals as a fixed, read-only table.

The canonical literal of each radical is the NFKC fold of its character in
the Kangxi Radicals block (U+2F00 + ordinal - 1). Every radical also answers
to a set of variant codepoints: the Kangxi block character itself, the
positional forms used inside characters (亻, 氵, 扌, ...) and the CJK
Radicals Supplement forms that fold onto those.
"""

import unicodedata
from bisect import bisect_right
from functools import lru_cache
from typing import Iterator, Optional, Union

from .kanji import Kanji
from .normalizers import nfkc, nfkc_plus, supplement_forms_of

KANGXI_RADICALS_START = 0x2F00
RADICAL_COUNT = 214

# First radical ordinal of each stroke-count group (1 stroke .. 17 strokes)
STROKE_GROUP_STARTS = [
    1, 7, 30, 61, 95, 118, 147, 167, 176, 187, 195, 201, 205, 209, 211, 212, 214,
]

# Positional and abbreviated forms, by radical ordinal
POSITIONAL_FORMS: dict[int, str] = {
    9: "亻",
    18: "刂",
    42: "⺌⺍",
    47: "川",
    58: "彑",
    61: "忄",
    64: "扌",
    66: "攵",
    78: "歺",
    85: "氵氺",
    86: "灬",
    87: "爫",
    90: "丬",
    93: "牜",
    94: "犭",
    96: "王⺩",
    113: "礻",
    122: "罒⺲",
    125: "耂",
    130: "⺼",
    140: "艹⺾",
    145: "衤",
    146: "覀",
    162: "辶",
    163: "⻏",      # 阝 on the right
    170: "阝",      # 阝 on the left
    184: "飠",
}


def radical_stroke_count(ordinal: int) -> int:
    """Stroke count of a radical, from its position in the Kangxi ordering."""
    if not 1 <= ordinal <= RADICAL_COUNT:
        return 0
    return bisect_right(STROKE_GROUP_STARTS, ordinal)


def kangxi_character(ordinal: int) -> str:
    return chr(KANGXI_RADICALS_START + ordinal - 1)


def radical_name(ordinal: int) -> str:
    """English name from the Unicode character name, e.g. 'water'."""
    name = unicodedata.name(kangxi_character(ordinal), "")
    return name.removeprefix("KANGXI RADICAL ").lower()


class RadicalCatalog:
    """
    Canonical radical pseudo-records with char -> ordinal and
    ordinal -> record tables.

    Built once and never mutated afterwards; use default_radicals() to share
    a single instance across a process.
    """

    def __init__(self):
        self._by_ordinal: dict[int, Kanji] = {}
        self._ordinal_by_codepoint: dict[int, int] = {}

        for ordinal in range(1, RADICAL_COUNT + 1):
            literal = nfkc(kangxi_character(ordinal))
            record = Kanji(
                literal=literal,
                codepoint=ord(literal),
                classical_radical=ordinal,
                stroke_count=radical_stroke_count(ordinal),
                radical_names={radical_name(ordinal)},
            )
            self._by_ordinal[ordinal] = record
            self._ordinal_by_codepoint[record.codepoint] = ordinal

        # Variants never take over a codepoint already claimed, so canonical
        # literals win over forms, and explicit forms win over folded ones.
        for ordinal, record in self._by_ordinal.items():
            self._claim(record, ord(kangxi_character(ordinal)))
            for form in POSITIONAL_FORMS.get(ordinal, ""):
                self._claim(record, ord(form))

        for ordinal, record in self._by_ordinal.items():
            forms = [record.literal, *POSITIONAL_FORMS.get(ordinal, "")]
            for form in forms:
                for supplement in supplement_forms_of(form):
                    self._claim(record, ord(supplement))

    def _claim(self, record: Kanji, codepoint: int) -> None:
        if codepoint in self._ordinal_by_codepoint:
            return
        self._ordinal_by_codepoint[codepoint] = record.classical_radical
        record.codepoint_variants.add(codepoint)

    def __len__(self) -> int:
        return len(self._by_ordinal)

    def __iter__(self) -> Iterator[Kanji]:
        return iter(self._by_ordinal.values())

    def by_ordinal(self, ordinal: int) -> Optional[Kanji]:
        return self._by_ordinal.get(ordinal)

    def by_codepoint(self, codepoint: int) -> Optional[Kanji]:
        """Look up a radical by its canonical codepoint or any variant."""
        return self._by_ordinal.get(self.ordinal_of(codepoint))

    def ordinal_of(self, char: Union[str, int]) -> int:
        """
        Resolve a character (or codepoint) to its radical ordinal.

        Returns:
            1..214, or 0 if the character is not a known radical form
        """
        if isinstance(char, int):
            if char <= 0 or char > 0x10FFFF:
                return 0
            char = chr(char)
        if len(char) != 1:
            return 0

        ordinal = self._ordinal_by_codepoint.get(ord(char))
        if ordinal is None:
            ordinal = self._ordinal_by_codepoint.get(ord(nfkc_plus(char)), 0)
        return ordinal


@lru_cache(maxsize=None)
def default_radicals() -> RadicalCatalog:
    """Process-wide radical table."""
    return RadicalCatalog()
