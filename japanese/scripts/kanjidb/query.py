#!/usr/bin/env python3
"""
query.py

A compact query language over a KanjiCatalog.

A query is either plain text, where every character is looked up by
codepoint, or a list of key/value groups:

    grade=1,jlpt=5          union
    grade=1&jlpt=5          intersection
    strokes<4 radical=氵    stroke bucket range, radical by character
    ucs=4e00+component=口   hex codepoint, structural component

Union separators are space, comma and semicolon; intersection separators
are '&' and '+'. The separator after a group decides how the NEXT group is
combined with everything gathered so far. A run of separators counts as one
and is an intersection if it contains '&' or '+'.

Recognized keys:
    ucs=<hex>  jis208=<code>  jis212=<code>  jis213=<code>
    grade=<n>  jlpt=<n>  strokes=<n>  strokes<<n>  strokes><n>
    radical=<n or character>  component=<character>

Malformed values never raise: they match nothing, which leaves a union
unchanged and empties an intersection.
"""

import re
from dataclasses import dataclass
from typing import Iterator, Optional

from .catalog import COMPONENT, GRADE, JIS208, JIS212, JIS213, JLPT, RADICAL, STROKES, KanjiCatalog
from .kanji import Kanji

UNION_SEPARATORS = " ,;"
INTERSECTION_SEPARATORS = "&+"

_KEY = r"(?:ucs|jis208|jis212|jis213|grade|jlpt|radical|component)=|strokes[=<>]"
_VALUE = r"[^ ,;&+]*"
_SEP = r"[ ,;&+]+"
_GROUP = rf"(?:{_KEY}){_VALUE}"

_QUERY_RE = re.compile(rf"(?:{_SEP})?(?:{_GROUP}(?:{_SEP}{_GROUP})*)?(?:{_SEP})?")
_GROUP_RE = re.compile(rf"({_KEY})({_VALUE})")
_SEPARATOR_RE = re.compile(_SEP)
_HEX_RE = re.compile(r"[0-9A-Fa-f]+")
_DECIMAL_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class QueryGroup:
    """One key/value group and the class of the separator that ended it."""
    key: str                        # e.g. "grade=" or "strokes<"
    value: str
    union_after: Optional[bool]     # None when the group ends the query


@dataclass
class QueryResult:
    kanji: list[Kanji]
    keyed: bool                     # False: plain characters were looked up

    def __len__(self) -> int:
        return len(self.kanji)

    def __iter__(self) -> Iterator[Kanji]:
        return iter(self.kanji)

    def literals(self) -> str:
        return "".join(k.literal for k in self.kanji)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def is_keyed_query(text: str) -> bool:
    return _QUERY_RE.fullmatch(text.strip()) is not None


def parse_query(text: str) -> Optional[list[QueryGroup]]:
    """
    Split a keyed query into groups.

    Returns:
        The groups in order, or None if `text` is not a keyed query
    """
    text = text.strip()
    if _QUERY_RE.fullmatch(text) is None:
        return None

    groups: list[QueryGroup] = []
    leading = _SEPARATOR_RE.match(text)
    pos = leading.end() if leading else 0

    while pos < len(text):
        match = _GROUP_RE.match(text, pos)
        if match is None:
            break
        pos = match.end()

        separator = _SEPARATOR_RE.match(text, pos)
        if separator is None:
            union_after = None
        else:
            union_after = not any(c in INTERSECTION_SEPARATORS for c in separator.group())
            pos = separator.end()

        groups.append(QueryGroup(match.group(1), match.group(2), union_after))

    return groups


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------

def _decimal(value: str) -> Optional[int]:
    if _DECIMAL_RE.fullmatch(value) is None:
        return None
    return int(value)


def _stroke_range(catalog: KanjiCatalog, low: int, high: int) -> list[Kanji]:
    """Union of stroke buckets with low <= strokes <= high."""
    found: dict[Kanji, None] = {}
    for strokes in catalog.keys(STROKES):
        if low <= strokes <= high:
            found.update(dict.fromkeys(catalog.lookup(STROKES, strokes)))
    return list(found)


def evaluate_group(catalog: KanjiCatalog, key: str, value: str) -> list[Kanji]:
    """Records matched by a single group (empty when the value is unusable)."""
    if not value:
        return []

    if key == "ucs=":
        if _HEX_RE.fullmatch(value) is None:
            return []
        kanji = catalog.by_codepoint(int(value, 16))
        return [kanji] if kanji is not None else []

    if key in ("jis208=", "jis212=", "jis213="):
        index = {"jis208=": JIS208, "jis212=": JIS212, "jis213=": JIS213}[key]
        return catalog.lookup(index, value)

    if key in ("grade=", "jlpt=", "strokes="):
        number = _decimal(value)
        if number is None:
            return []
        index = {"grade=": GRADE, "jlpt=": JLPT, "strokes=": STROKES}[key]
        return catalog.lookup(index, number)

    if key == "strokes<":
        bound = _decimal(value)
        if bound is None or not catalog.min_strokes:
            return []
        return _stroke_range(catalog, catalog.min_strokes, bound - 1)

    if key == "strokes>":
        bound = _decimal(value)
        if bound is None or not catalog.max_strokes:
            return []
        return _stroke_range(catalog, bound + 1, catalog.max_strokes)

    if key == "radical=":
        ordinal = _decimal(value)
        if ordinal is None and len(value) == 1:
            ordinal = catalog.radicals.ordinal_of(value)
        if not ordinal:
            return []
        return catalog.lookup(RADICAL, ordinal)

    if key == "component=":
        if len(value) != 1:
            return []
        return catalog.lookup(COMPONENT, ord(value))

    return []


def combine(running: dict[Kanji, None], candidates: list[Kanji], union: bool) -> dict[Kanji, None]:
    """
    Merge a group's candidates into the running result.

    Union appends new records; intersection keeps only running records that
    are also candidates, in their existing order.
    """
    if union:
        for kanji in candidates:
            running.setdefault(kanji, None)
        return running

    keep = set(candidates)
    return {kanji: None for kanji in running if kanji in keep}


def lookup_characters(catalog: KanjiCatalog, text: str) -> list[Kanji]:
    """Look up each character of `text`, skipping unknown ones."""
    found: dict[Kanji, None] = {}
    for char in text:
        kanji = catalog.by_codepoint(ord(char))
        if kanji is not None:
            found.setdefault(kanji, None)
    return list(found)


def run_query(catalog: KanjiCatalog, text: str) -> QueryResult:
    """Evaluate a query string against `catalog`."""
    groups = parse_query(text)
    if groups is None:
        return QueryResult(lookup_characters(catalog, text), keyed=False)

    running: dict[Kanji, None] = {}
    combine_as_union = True
    for group in groups:
        candidates = evaluate_group(catalog, group.key, group.value)
        running = combine(running, candidates, combine_as_union)
        if group.union_after is not None:
            combine_as_union = group.union_after

    return QueryResult(list(running), keyed=True)
