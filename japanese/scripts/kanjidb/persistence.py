#!/usr/bin/env python3
"""
persistence.py

Binary cache of a KanjiCatalog, so the dictionary does not have to be
re-parsed on every run.

Format (big-endian):
┌──────────────────────────────────────────────────────────────┐
│ magic: u32 = 0x5AD5AD15                                      │
│ version: u32                                                 │
├──────────────────────────────────────────────────────────────┤
│ 1. primary index   count, (u32 codepoint, record, u64 tag)*  │
│ 2. jis208/212/213  count, (str code, u64 tag)*   x3          │
│ 3. strokes/radical/grade/jlpt/component                      │
│                    count, (u32 key, u32 n, u64 tag * n)*  x5 │
│ 4. components      count, (u32 codepoint, record)*           │
│ 5. ordinals        count, (u32 ordinal, u32 codepoint)*      │
│ 6. faulty          count, (u32 codepoint, str diagnostic)*   │
│ 7. stroke bounds   u32 min, u32 max                          │
└──────────────────────────────────────────────────────────────┘

Strings are a u32 byte length followed by UTF-8. Sets are a u32 count
followed by their items, sorted.

A record is written once, in the primary section, together with a tag (its
id() at write time). Every other index refers to it by tag only, and the
reader maps tags back to the records it rebuilt from the primary section.
Tags mean nothing outside a single stream.
"""

import io
import logging
import os
import struct
from pathlib import Path
from typing import BinaryIO, Iterable, Optional, Union

from .catalog import CODE_INDICES, GROUP_INDICES, KanjiCatalog
from .errors import (
    CatalogError,
    CorruptCatalogError,
    NotACatalogFileError,
    StaleCatalogError,
    TruncatedCatalogError,
    UnencodableRecordError,
)
from .kanji import Kanji, ReadingMeaningGroup
from .radicals import RadicalCatalog

logger = logging.getLogger(__name__)

MAGIC = 0x5AD5AD15
FORMAT_VERSION = 1

_U8 = struct.Struct(">B")
_U16 = struct.Struct(">H")
_U32 = struct.Struct(">I")
_U64 = struct.Struct(">Q")
_HEADER = struct.Struct(">II")


# ---------------------------------------------------------------------------
# Low-level Writer / Reader
# ---------------------------------------------------------------------------

class _Writer:
    def __init__(self, stream: BinaryIO):
        self._stream = stream

    def _pack(self, fmt: struct.Struct, value: int) -> None:
        try:
            data = fmt.pack(value)
        except struct.error as e:
            raise UnencodableRecordError(
                f"value {value!r} does not fit a {fmt.size * 8}-bit unsigned field"
            ) from e
        self._stream.write(data)

    def u8(self, value: int) -> None:
        self._pack(_U8, value)

    def u16(self, value: int) -> None:
        self._pack(_U16, value)

    def u32(self, value: int) -> None:
        self._pack(_U32, value)

    def u64(self, value: int) -> None:
        self._pack(_U64, value)

    def string(self, value: str) -> None:
        data = value.encode("utf-8")
        self.u32(len(data))
        self._stream.write(data)

    def strings(self, values: Iterable[str]) -> None:
        items = sorted(values)
        self.u32(len(items))
        for item in items:
            self.string(item)

    def u32s(self, values: Iterable[int]) -> None:
        items = sorted(values)
        self.u32(len(items))
        for item in items:
            self.u32(item)


class _Reader:
    def __init__(self, stream: BinaryIO):
        self._stream = stream

    def _take(self, size: int) -> bytes:
        data = self._stream.read(size)
        if len(data) != size:
            raise TruncatedCatalogError(
                f"unexpected end of cache: wanted {size} bytes, got {len(data)}"
            )
        return data

    def u8(self) -> int:
        return _U8.unpack(self._take(_U8.size))[0]

    def u16(self) -> int:
        return _U16.unpack(self._take(_U16.size))[0]

    def u32(self) -> int:
        return _U32.unpack(self._take(_U32.size))[0]

    def u64(self) -> int:
        return _U64.unpack(self._take(_U64.size))[0]

    def string(self) -> str:
        data = self._take(self.u32())
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CorruptCatalogError(f"invalid text in cache: {e}") from e

    def strings(self) -> set[str]:
        return {self.string() for _ in range(self.u32())}

    def u32s(self) -> set[int]:
        return {self.u32() for _ in range(self.u32())}


# ---------------------------------------------------------------------------
# Record Payload
# ---------------------------------------------------------------------------

def _write_kanji(w: _Writer, kanji: Kanji) -> None:
    w.string(kanji.literal)
    w.u32(kanji.codepoint)
    w.string(kanji.jis208)
    w.string(kanji.jis212)
    w.string(kanji.jis213)
    w.u8(kanji.classical_radical)
    w.u8(kanji.nelson_radical)
    w.u8(kanji.grade)
    w.u8(kanji.stroke_count)
    w.u32s(kanji.codepoint_variants)
    w.strings(kanji.jis208_variants)
    w.strings(kanji.jis212_variants)
    w.strings(kanji.jis213_variants)
    w.u16(kanji.frequency)
    w.strings(kanji.radical_names)
    w.u8(kanji.jlpt)
    w.u32(len(kanji.groups))
    for group in kanji.groups:
        w.strings(group.on_readings)
        w.strings(group.kun_readings)
        w.strings(group.english_meanings)
        w.strings(group.french_meanings)
    w.strings(kanji.nanori)
    w.u32s(kanji.components)


def _read_kanji(r: _Reader) -> Kanji:
    kanji = Kanji()
    kanji.literal = r.string()
    kanji.codepoint = r.u32()
    kanji.jis208 = r.string()
    kanji.jis212 = r.string()
    kanji.jis213 = r.string()
    kanji.classical_radical = r.u8()
    kanji.nelson_radical = r.u8()
    kanji.grade = r.u8()
    kanji.stroke_count = r.u8()
    kanji.codepoint_variants = r.u32s()
    kanji.jis208_variants = r.strings()
    kanji.jis212_variants = r.strings()
    kanji.jis213_variants = r.strings()
    kanji.frequency = r.u16()
    kanji.radical_names = r.strings()
    kanji.jlpt = r.u8()
    for _ in range(r.u32()):
        kanji.add_group(ReadingMeaningGroup(
            on_readings=r.strings(),
            kun_readings=r.strings(),
            english_meanings=r.strings(),
            french_meanings=r.strings(),
        ))
    kanji.nanori = r.strings()
    kanji.components = r.u32s()
    return kanji


# ---------------------------------------------------------------------------
# Catalog Stream
# ---------------------------------------------------------------------------

def dump(catalog: KanjiCatalog, stream: BinaryIO) -> None:
    """
    Write `catalog` to a binary stream.

    Raises:
        UnencodableRecordError: a field is out of range for its slot
    """
    w = _Writer(stream)
    stream.write(_HEADER.pack(MAGIC, FORMAT_VERSION))

    w.u32(len(catalog.kanji))
    for codepoint, kanji in catalog.kanji.items():
        w.u32(codepoint)
        _write_kanji(w, kanji)
        w.u64(id(kanji))

    for index in CODE_INDICES:
        table = catalog.codes[index]
        w.u32(len(table))
        for code, kanji in table.items():
            w.string(code)
            w.u64(id(kanji))

    for index in GROUP_INDICES:
        table = catalog.groups[index]
        w.u32(len(table))
        for key, bucket in table.items():
            w.u32(key)
            w.u32(len(bucket))
            for kanji in bucket:
                w.u64(id(kanji))

    w.u32(len(catalog.components))
    for codepoint, component in catalog.components.items():
        w.u32(codepoint)
        _write_kanji(w, component)

    w.u32(len(catalog.component_ordinals))
    for ordinal, codepoint in catalog.component_ordinals.items():
        w.u32(ordinal)
        w.u32(codepoint)

    w.u32(len(catalog.faulty_components))
    for codepoint, diagnostic in catalog.faulty_components.items():
        w.u32(codepoint)
        w.string(diagnostic)

    w.u32(catalog.min_strokes)
    w.u32(catalog.max_strokes)


def read(stream: BinaryIO, radicals: Optional[RadicalCatalog] = None) -> KanjiCatalog:
    """
    Read a catalog written by dump().

    Raises:
        NotACatalogFileError: the magic number does not match
        StaleCatalogError: the stream was written by an older format version
        TruncatedCatalogError: the stream ends early
        CorruptCatalogError: the stream is inconsistent
    """
    header = stream.read(_HEADER.size)
    if len(header) != _HEADER.size:
        raise NotACatalogFileError("not a recognized catalog file (header too short)")
    magic, version = _HEADER.unpack(header)
    if magic != MAGIC:
        raise NotACatalogFileError(f"not a recognized catalog file (magic 0x{magic:08X})")
    if version < FORMAT_VERSION:
        raise StaleCatalogError(version, FORMAT_VERSION)

    r = _Reader(stream)
    catalog = KanjiCatalog(radicals)
    by_tag: dict[int, Kanji] = {}

    def resolve(tag: int) -> Kanji:
        try:
            return by_tag[tag]
        except KeyError:
            raise CorruptCatalogError(f"unknown record tag {tag:#x}") from None

    def index(name: str, key: Union[str, int], kanji: Kanji) -> None:
        try:
            catalog.index_by(name, key, kanji)
        except CatalogError as e:
            raise CorruptCatalogError(f"bad {name} entry {key!r}: {e}") from e

    for _ in range(r.u32()):
        codepoint = r.u32()
        kanji = _read_kanji(r)
        tag = r.u64()
        if kanji.codepoint != codepoint:
            raise CorruptCatalogError(
                f"record U+{kanji.codepoint:04X} stored under key U+{codepoint:04X}"
            )
        if not catalog.insert_primary(codepoint, kanji):
            raise CorruptCatalogError(f"invalid or repeated codepoint U+{codepoint:04X}")
        by_tag[tag] = kanji

    for name in CODE_INDICES:
        for _ in range(r.u32()):
            code = r.string()
            index(name, code, resolve(r.u64()))

    for name in GROUP_INDICES:
        for _ in range(r.u32()):
            key = r.u32()
            for _ in range(r.u32()):
                index(name, key, resolve(r.u64()))

    for _ in range(r.u32()):
        codepoint = r.u32()
        catalog.components[codepoint] = _read_kanji(r)

    for _ in range(r.u32()):
        ordinal = r.u32()
        codepoint = r.u32()
        catalog.component_ordinals[ordinal] = codepoint
        catalog.component_ordinal_of[codepoint] = ordinal

    for _ in range(r.u32()):
        codepoint = r.u32()
        catalog.faulty_components[codepoint] = r.string()

    catalog.min_strokes = r.u32()
    catalog.max_strokes = r.u32()

    logger.debug("Read %d kanji and %d components from cache",
                 len(catalog.kanji), len(catalog.components))
    return catalog


def dumps(catalog: KanjiCatalog) -> bytes:
    buffer = io.BytesIO()
    dump(catalog, buffer)
    return buffer.getvalue()


def loads(data: bytes, radicals: Optional[RadicalCatalog] = None) -> KanjiCatalog:
    return read(io.BytesIO(data), radicals)


# ---------------------------------------------------------------------------
# Cache Files
# ---------------------------------------------------------------------------

def save(catalog: KanjiCatalog, path: Union[str, Path]) -> None:
    """
    Write the cache file.

    The data goes to a sibling temp file first and is renamed into place, so
    readers never see a half-written cache.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        with open(tmp_path, "wb") as f:
            dump(catalog, f)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    logger.info("Wrote catalog cache %s (%d kanji)", path, len(catalog))


def load(path: Union[str, Path], radicals: Optional[RadicalCatalog] = None) -> KanjiCatalog:
    with open(path, "rb") as f:
        return read(f, radicals)


def restore(catalog: KanjiCatalog, path: Union[str, Path]) -> None:
    """
    Replace the contents of `catalog` with the cache at `path`.

    `catalog` is left untouched if the cache cannot be read.
    """
    fresh = load(path, catalog.radicals)
    catalog.replace_with(fresh)
