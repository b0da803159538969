#!/usr/bin/env python3
"""
catalog.py

In-memory kanji catalog: one owning index by codepoint plus non-owning
secondary indices by legacy JIS code, stroke count, radical, grade, JLPT
level and structural component.

Every record lives exactly once in `KanjiCatalog.kanji`; secondary buckets
only hold references to those same objects. Buckets are dicts used as
insertion-ordered sets.
"""

import logging
from typing import Iterator, Optional, Union

from .errors import CatalogError
from .kanji import Kanji, KanjiEntry
from .radicals import RadicalCatalog, default_radicals

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Index Names
# ---------------------------------------------------------------------------

JIS208 = "jis208"
JIS212 = "jis212"
JIS213 = "jis213"

STROKES = "strokes"
RADICAL = "radical"
GRADE = "grade"
JLPT = "jlpt"
COMPONENT = "component"

# Legacy codes identify a single character
CODE_INDICES = (JIS208, JIS212, JIS213)

# Numeric keys group many characters
GROUP_INDICES = (STROKES, RADICAL, GRADE, JLPT, COMPONENT)

Bucket = dict[Kanji, None]


class KanjiCatalog:
    """
    Kanji records indexed by several independent keys.

    Built once (by ingestion or by reading a cache) and then only read.
    Concurrent queries are safe; rebuilding while queries run is not.
    """

    def __init__(self, radicals: Optional[RadicalCatalog] = None):
        self.radicals = radicals if radicals is not None else default_radicals()

        # Owning index
        self.kanji: dict[int, Kanji] = {}

        # Non-owning indices
        self.codes: dict[str, dict[str, Kanji]] = {name: {} for name in CODE_INDICES}
        self.groups: dict[str, dict[int, Bucket]] = {name: {} for name in GROUP_INDICES}

        # Component pseudo-records
        self.components: dict[int, Kanji] = {}
        self.component_ordinals: dict[int, int] = {}     # ordinal -> codepoint
        self.component_ordinal_of: dict[int, int] = {}   # codepoint -> ordinal
        self.faulty_components: dict[int, str] = {}      # codepoint -> diagnostic

        self.min_strokes = 0
        self.max_strokes = 0

    def __len__(self) -> int:
        return len(self.kanji)

    def __iter__(self) -> Iterator[Kanji]:
        return iter(self.kanji.values())

    def __contains__(self, kanji: Kanji) -> bool:
        return self.kanji.get(kanji.codepoint) is kanji

    # -----------------------------------------------------------------------
    # Building
    # -----------------------------------------------------------------------

    def insert_primary(self, codepoint: int, kanji: Kanji) -> bool:
        """
        Take ownership of a record.

        Returns:
            False if the codepoint is 0 or already owned by another record
        """
        if codepoint <= 0:
            logger.warning("Ignoring %r: codepoint must be positive", kanji)
            return False
        if codepoint in self.kanji:
            logger.warning("Duplicate codepoint U+%04X: keeping %r, dropping %r",
                           codepoint, self.kanji[codepoint], kanji)
            return False
        self.kanji[codepoint] = kanji
        return True

    def index_by(self, index: str, key: Union[str, int], kanji: Kanji) -> None:
        """Add an owned record under `key` in a secondary index."""
        if kanji not in self:
            raise CatalogError(f"{kanji!r} is not owned by this catalog")

        if index in self.codes:
            if key:
                self.codes[index][key] = kanji
            return

        if index not in self.groups:
            raise CatalogError(f"Unknown index: {index}")
        if not key:
            return

        bucket = self.groups[index].setdefault(key, {})
        bucket[kanji] = None

        if index == STROKES:
            if not self.min_strokes or key < self.min_strokes:
                self.min_strokes = key
            if key > self.max_strokes:
                self.max_strokes = key

    def index_by_jis208(self, code: str, kanji: Kanji) -> None:
        self.index_by(JIS208, code, kanji)

    def index_by_jis212(self, code: str, kanji: Kanji) -> None:
        self.index_by(JIS212, code, kanji)

    def index_by_jis213(self, code: str, kanji: Kanji) -> None:
        self.index_by(JIS213, code, kanji)

    def index_by_strokes(self, strokes: int, kanji: Kanji) -> None:
        self.index_by(STROKES, strokes, kanji)

    def index_by_radical(self, ordinal: int, kanji: Kanji) -> None:
        self.index_by(RADICAL, ordinal, kanji)

    def index_by_grade(self, grade: int, kanji: Kanji) -> None:
        self.index_by(GRADE, grade, kanji)

    def index_by_jlpt(self, level: int, kanji: Kanji) -> None:
        self.index_by(JLPT, level, kanji)

    def index_by_component(self, codepoint: int, kanji: Kanji) -> None:
        self.index_by(COMPONENT, codepoint, kanji)

    def add_entry(self, entry: KanjiEntry) -> Optional[Kanji]:
        """
        Ingest one source character and fan it out into every index.

        Returns:
            The new record, or None if its codepoint was invalid or taken
        """
        kanji = entry.to_kanji()
        if not self.insert_primary(kanji.codepoint, kanji):
            return None

        self.index_by_jis208(kanji.jis208, kanji)
        self.index_by_jis212(kanji.jis212, kanji)
        self.index_by_jis213(kanji.jis213, kanji)
        self.index_by_strokes(kanji.stroke_count, kanji)
        self.index_by_radical(kanji.classical_radical, kanji)
        self.index_by_grade(kanji.grade, kanji)
        self.index_by_jlpt(kanji.jlpt, kanji)
        for codepoint in kanji.components:
            self.index_by_component(codepoint, kanji)

        return kanji

    def add_component(self, literal: str, stroke_count: int = 0, faulty: str = "") -> Kanji:
        """
        Register a component pseudo-record, assigning it the next ordinal.

        Registering the same component twice returns the existing record.
        """
        if len(literal) != 1:
            raise ValueError(f"Component must be a single character: {literal!r}")

        codepoint = ord(literal)
        component = self.components.get(codepoint)
        if component is None:
            component = Kanji(literal=literal, codepoint=codepoint, stroke_count=stroke_count)
            self.components[codepoint] = component
            ordinal = len(self.component_ordinals) + 1
            self.component_ordinals[ordinal] = codepoint
            self.component_ordinal_of[codepoint] = ordinal

        if faulty:
            self.faulty_components[codepoint] = faulty
        return component

    def clear(self) -> None:
        """Drop every record and empty every index. Safe to repeat."""
        self.kanji.clear()
        for table in self.codes.values():
            table.clear()
        for table in self.groups.values():
            table.clear()
        self.components.clear()
        self.component_ordinals.clear()
        self.component_ordinal_of.clear()
        self.faulty_components.clear()
        self.min_strokes = 0
        self.max_strokes = 0

    def replace_with(self, other: "KanjiCatalog") -> None:
        """Take over the records and indices of a freshly built catalog."""
        self.kanji = other.kanji
        self.codes = other.codes
        self.groups = other.groups
        self.components = other.components
        self.component_ordinals = other.component_ordinals
        self.component_ordinal_of = other.component_ordinal_of
        self.faulty_components = other.faulty_components
        self.min_strokes = other.min_strokes
        self.max_strokes = other.max_strokes

    # -----------------------------------------------------------------------
    # Lookups
    # -----------------------------------------------------------------------

    def by_codepoint(self, codepoint: int) -> Optional[Kanji]:
        return self.kanji.get(codepoint)

    def by_literal(self, literal: str) -> Optional[Kanji]:
        if len(literal) != 1:
            return None
        return self.kanji.get(ord(literal))

    def lookup(self, index: str, key: Union[str, int]) -> list[Kanji]:
        """Records stored under `key`, in insertion order (empty if none)."""
        if index in self.codes:
            kanji = self.codes[index].get(key)
            return [kanji] if kanji is not None else []
        if index in self.groups:
            return list(self.groups[index].get(key, ()))
        raise CatalogError(f"Unknown index: {index}")

    def keys(self, index: str) -> list:
        if index in self.codes:
            return list(self.codes[index])
        return sorted(self.groups[index])

    def variants_of(self, kanji: Kanji) -> list[Kanji]:
        """
        Records declared as variants of `kanji`.

        Variant codepoints and JIS codes that do not resolve to a record in
        this catalog are skipped.
        """
        found: Bucket = {}

        for codepoint in sorted(kanji.codepoint_variants):
            variant = self.kanji.get(codepoint)
            if variant is not None:
                found[variant] = None

        for index, codes in (
            (JIS208, kanji.jis208_variants),
            (JIS212, kanji.jis212_variants),
            (JIS213, kanji.jis213_variants),
        ):
            for code in sorted(codes):
                variant = self.codes[index].get(code)
                if variant is not None:
                    found[variant] = None

        found.pop(kanji, None)
        return list(found)

    def component(self, codepoint: int) -> Optional[Kanji]:
        return self.components.get(codepoint)

    def component_by_ordinal(self, ordinal: int) -> Optional[Kanji]:
        codepoint = self.component_ordinals.get(ordinal)
        if codepoint is None:
            return None
        return self.components.get(codepoint)

    def component_ordinal(self, char: Union[str, int]) -> int:
        """Ordinal of a registered component, or 0."""
        codepoint = ord(char) if isinstance(char, str) and len(char) == 1 else char
        return self.component_ordinal_of.get(codepoint, 0)

    def search(self, strokes: int = 0, jlpt: int = 0, grade: int = 0, radical: int = 0) -> list[Kanji]:
        """
        Characters matching every non-zero criterion.

        A criterion with no indexed characters empties the result; with no
        criteria at all the result is empty.
        """
        result: Optional[Bucket] = None

        for index, key in ((STROKES, strokes), (JLPT, jlpt), (GRADE, grade), (RADICAL, radical)):
            if not key:
                continue
            bucket = self.groups[index].get(key, {})
            if result is None:
                result = dict(bucket)
            else:
                result = {k: None for k in result if k in bucket}

        return list(result) if result else []

    def stats(self) -> dict[str, int]:
        """Record and key counts, for reports."""
        summary = {"kanji": len(self.kanji)}
        for index, table in self.codes.items():
            summary[index] = len(table)
        for index, table in self.groups.items():
            summary[index] = len(table)
        summary["component_records"] = len(self.components)
        summary["faulty_components"] = len(self.faulty_components)
        summary["min_strokes"] = self.min_strokes
        summary["max_strokes"] = self.max_strokes
        return summary
