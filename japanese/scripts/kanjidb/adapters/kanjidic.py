#!/usr/bin/env python3
"""
kanjidic.py

Parse kanjidic2.xml into KanjiEntry values, one per <character>.
The file may be gzip-compressed (kanjidic2.xml.gz as distributed by EDRDG).
"""

import gzip
import logging
from pathlib import Path
from typing import Optional
from xml.sax import ContentHandler, parse as sax_parse
from xml.sax.xmlreader import AttributesImpl

from ..kanji import KanjiEntry, ReadingMeaningGroup
from ..paths import KANJIDIC_PATH

logger = logging.getLogger(__name__)

# Leaf elements whose text we keep, and the section each must appear in
_LEAVES = {
    "literal": "character",
    "cp_value": "codepoint",
    "rad_value": "radical",
    "grade": "misc",
    "stroke_count": "misc",
    "variant": "misc",
    "freq": "misc",
    "rad_name": "misc",
    "jlpt": "misc",
    "reading": "rmgroup",
    "meaning": "rmgroup",
    "nanori": "reading_meaning",
}

_SECTIONS = {"codepoint", "radical", "misc", "reading_meaning", "rmgroup"}


def _to_int(text: str, base: int = 10) -> int:
    """Parse a non-negative number, or 0 if the text is not one."""
    try:
        value = int(text.strip(), base)
    except ValueError:
        return 0
    return max(value, 0)


class KanjidicCharacterHandler(ContentHandler):
    """
    SAX handler turning each <character> of kanjidic2.xml into a KanjiEntry.

    Extracts codepoints, radicals, misc data, readings/meanings and nanori.
    Values that fail to parse are left at their "absent" default.
    """

    def __init__(self):
        super().__init__()
        self.entries: list[KanjiEntry] = []
        self.current: Optional[KanjiEntry] = None
        self.current_group: Optional[ReadingMeaningGroup] = None
        self.content = ""

        # Element tracking
        self.in_character = False
        self.open_sections: set[str] = set()
        self.leaf: Optional[str] = None
        self.leaf_attrs: dict[str, str] = {}
        self.got_stroke_count = False

    def startElement(self, name: str, attrs: AttributesImpl):
        self.content = ""

        if name == "character":
            self.in_character = True
            self.current = KanjiEntry()
            self.got_stroke_count = False
            return

        if not self.in_character:
            return

        if name in _SECTIONS:
            self.open_sections.add(name)
            if name == "rmgroup":
                self.current_group = ReadingMeaningGroup()

        elif name in _LEAVES and (
            _LEAVES[name] == "character" or _LEAVES[name] in self.open_sections
        ):
            self.leaf = name
            self.leaf_attrs = dict(attrs.items())

    def endElement(self, name: str):
        if name == "character":
            if self.current and self.current.literal:
                self.entries.append(self.current)
            self.current = None
            self.in_character = False
            self.open_sections.clear()
            return

        if self.current is None:
            return

        if name in _SECTIONS:
            self.open_sections.discard(name)
            if name == "rmgroup" and self.current_group is not None:
                self.current.groups.append(self.current_group)
                self.current_group = None
            return

        if name == self.leaf:
            self._store_leaf(name, self.content.strip(), self.leaf_attrs)
            self.leaf = None
            self.leaf_attrs = {}

    def characters(self, content: str):
        self.content += content

    def _store_leaf(self, name: str, text: str, attrs: dict[str, str]):
        entry = self.current
        if not text:
            return

        if name == "literal":
            entry.literal = text

        elif name == "cp_value":
            cp_type = attrs.get("cp_type")
            if cp_type == "ucs":
                entry.codepoint = _to_int(text, 16)
            elif cp_type == "jis208":
                entry.jis208 = text
            elif cp_type == "jis212":
                entry.jis212 = text
            elif cp_type == "jis213":
                entry.jis213 = text

        elif name == "rad_value":
            rad_type = attrs.get("rad_type")
            if rad_type == "classical":
                entry.classical_radical = _to_int(text)
            elif rad_type == "nelson_c":
                entry.nelson_radical = _to_int(text)

        elif name == "grade":
            entry.grade = _to_int(text)

        elif name == "stroke_count":
            # Only take the first stroke_count (primary count)
            if not self.got_stroke_count:
                entry.stroke_count = _to_int(text)
                self.got_stroke_count = True

        elif name == "variant":
            var_type = attrs.get("var_type")
            if var_type == "ucs":
                codepoint = _to_int(text, 16)
                if codepoint:
                    entry.codepoint_variants.append(codepoint)
            elif var_type == "jis208":
                entry.jis208_variants.append(text)
            elif var_type == "jis212":
                entry.jis212_variants.append(text)
            elif var_type == "jis213":
                entry.jis213_variants.append(text)

        elif name == "freq":
            entry.frequency = _to_int(text)

        elif name == "rad_name":
            entry.radical_names.append(text)

        elif name == "jlpt":
            entry.jlpt = _to_int(text)

        elif name == "reading" and self.current_group is not None:
            r_type = attrs.get("r_type")
            if r_type == "ja_on":
                self.current_group.on_readings.add(text)
            elif r_type == "ja_kun":
                self.current_group.kun_readings.add(text)

        elif name == "meaning" and self.current_group is not None:
            # No m_lang attribute means English
            m_lang = attrs.get("m_lang", "en")
            if m_lang == "en":
                self.current_group.english_meanings.add(text)
            elif m_lang == "fr":
                self.current_group.french_meanings.add(text)

        elif name == "nanori":
            entry.nanori.append(text)


def parse_kanjidic_full(path: Path = KANJIDIC_PATH) -> list[KanjiEntry]:
    """
    Parse kanjidic2.xml and extract full kanji entries.

    Args:
        path: Path to kanjidic2.xml (or kanjidic2.xml.gz)

    Returns:
        List of KanjiEntry objects, in file order
    """
    path = Path(path)
    handler = KanjidicCharacterHandler()
    if path.suffix == ".gz":
        with gzip.open(path, "rb") as f:
            sax_parse(f, handler)
    else:
        sax_parse(str(path), handler)
    logger.debug("Parsed %d characters from %s", len(handler.entries), path)
    return handler.entries
