#!/usr/bin/env python3
"""
kanji.py

Record types for the kanji catalog.

- ReadingMeaningGroup: one <rmgroup> worth of readings and meanings
- Kanji: a single character record (also used for radical and component
  pseudo-records)
- KanjiEntry: the raw field values handed over by an ingestion adapter,
  one per source character
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ReadingMeaningGroup:
    """Readings and translated meanings sharing one sense of a character."""
    on_readings: set[str] = field(default_factory=set)
    kun_readings: set[str] = field(default_factory=set)
    english_meanings: set[str] = field(default_factory=set)
    french_meanings: set[str] = field(default_factory=set)


@dataclass(eq=False)
class Kanji:
    """
    A character record.

    Records compare and hash by identity: the same record is shared between
    the primary index and every secondary index of its catalog, so two
    records are "the same" only if they are the same object.

    Numeric fields use 0 for "absent" and string fields use "".
    """
    literal: str = ""
    codepoint: int = 0
    jis208: str = ""
    jis212: str = ""
    jis213: str = ""
    classical_radical: int = 0
    nelson_radical: int = 0
    grade: int = 0                    # 0 = not taught in school
    stroke_count: int = 0
    frequency: int = 0                # 0 = not among the ranked characters
    jlpt: int = 0
    codepoint_variants: set[int] = field(default_factory=set)
    jis208_variants: set[str] = field(default_factory=set)
    jis212_variants: set[str] = field(default_factory=set)
    jis213_variants: set[str] = field(default_factory=set)
    radical_names: set[str] = field(default_factory=set)
    groups: list[ReadingMeaningGroup] = field(default_factory=list)
    nanori: set[str] = field(default_factory=set)   # readings used in names only
    components: set[int] = field(default_factory=set)

    def __repr__(self) -> str:
        return f"Kanji({self.literal!r}, U+{self.codepoint:04X})"

    @property
    def on_readings(self) -> set[str]:
        readings: set[str] = set()
        for group in self.groups:
            readings.update(group.on_readings)
        return readings

    @property
    def kun_readings(self) -> set[str]:
        readings: set[str] = set()
        for group in self.groups:
            readings.update(group.kun_readings)
        return readings

    @property
    def english_meanings(self) -> set[str]:
        meanings: set[str] = set()
        for group in self.groups:
            meanings.update(group.english_meanings)
        return meanings

    def add_group(self, group: ReadingMeaningGroup) -> None:
        self.groups.append(group)


@dataclass
class KanjiEntry:
    """A parsed character from a dictionary source, before indexing."""
    literal: str = ""
    codepoint: int = 0
    jis208: str = ""
    jis212: str = ""
    jis213: str = ""
    classical_radical: int = 0
    nelson_radical: int = 0
    grade: int = 0
    stroke_count: int = 0
    frequency: int = 0
    jlpt: int = 0
    codepoint_variants: list[int] = field(default_factory=list)
    jis208_variants: list[str] = field(default_factory=list)
    jis212_variants: list[str] = field(default_factory=list)
    jis213_variants: list[str] = field(default_factory=list)
    radical_names: list[str] = field(default_factory=list)
    groups: list[ReadingMeaningGroup] = field(default_factory=list)
    nanori: list[str] = field(default_factory=list)
    components: list[str] = field(default_factory=list)

    def resolved_codepoint(self) -> int:
        """The declared UCS codepoint, falling back to the literal's own."""
        if self.codepoint:
            return self.codepoint
        if len(self.literal) == 1:
            return ord(self.literal)
        return 0

    def to_kanji(self, codepoint: Optional[int] = None) -> Kanji:
        return Kanji(
            literal=self.literal,
            codepoint=codepoint if codepoint is not None else self.resolved_codepoint(),
            jis208=self.jis208,
            jis212=self.jis212,
            jis213=self.jis213,
            classical_radical=self.classical_radical,
            nelson_radical=self.nelson_radical,
            grade=self.grade,
            stroke_count=self.stroke_count,
            frequency=self.frequency,
            jlpt=self.jlpt,
            codepoint_variants=set(self.codepoint_variants),
            jis208_variants=set(self.jis208_variants),
            jis212_variants=set(self.jis212_variants),
            jis213_variants=set(self.jis213_variants),
            radical_names=set(self.radical_names),
            groups=[
                ReadingMeaningGroup(
                    on_readings=set(g.on_readings),
                    kun_readings=set(g.kun_readings),
                    english_meanings=set(g.english_meanings),
                    french_meanings=set(g.french_meanings),
                )
                for g in self.groups
            ],
            nanori=set(self.nanori),
            components={ord(c) for c in self.components if len(c) == 1},
        )
