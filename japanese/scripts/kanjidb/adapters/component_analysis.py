#!/usr/bin/env python3
"""
component_analysis.py

Structural components of kanji, read from CHISE IDS data.

An IDS (Ideographic Description Sequence) spells a character as layout
operators (⿰ ⿱ ...) applied to smaller characters. The smaller characters
are its components. Glyphs Unicode cannot encode appear as entity
references such as &CDP-8B7C; and make the character "faulty" when it is
itself used as a component.
"""

import logging
import re
from pathlib import Path
from typing import Callable, Iterable, Optional

from ..kanji import KanjiEntry
from ..normalizers import nfkc_plus
from ..paths import CHISE_IDS_PATH

logger = logging.getLogger(__name__)

# Ideographic Description Characters, U+2FF0-U+2FFF
IDS_OPERATORS = frozenset(map(chr, range(0x2FF0, 0x3000)))

# Lowest codepoint that can be a component (start of CJK Radicals Supplement)
MIN_COMPONENT_CODEPOINT = 0x2E80

ENTITY_REF_RE = re.compile(r"&[^;]+;")


# ---------------------------------------------------------------------------
# Reading IDS Files
# ---------------------------------------------------------------------------

def parse_ids_line(line: str) -> Optional[tuple[str, str]]:
    """
    Split one line of an IDS file into (character, IDS).

    Lines look like `U+4E9C<TAB>亜<TAB>⿱一⿻口&M-00161;@apparent=...`; the
    @apparent alternative is dropped. Comments (`;`) and short lines give None.
    """
    line = line.strip()
    if not line or line.startswith(";"):
        return None

    fields = line.split("\t")
    if len(fields) < 3:
        return None

    ids, _, _apparent = fields[2].partition("@apparent=")
    return fields[1], ids.strip()


def load_chise_ids(path: Path = CHISE_IDS_PATH) -> dict[str, str]:
    """Map every character of a CHISE IDS file to its IDS ({} if the file is missing)."""
    path = Path(path)
    if not path.exists():
        logger.warning("CHISE IDS file not found: %s", path)
        return {}

    with open(path, "r", encoding="utf-8") as f:
        parsed = (parse_ids_line(line) for line in f)
        return dict(item for item in parsed if item is not None)


def extract_ids_components(ids: str) -> tuple[set[str], list[str]]:
    """
    Split an IDS into its component characters and unencoded glyph references.

    Layout operators, whitespace and anything below the CJK radical blocks
    are not components.
    """
    unencoded = ENTITY_REF_RE.findall(ids)
    components = {
        char
        for char in ENTITY_REF_RE.sub("", ids)
        if char not in IDS_OPERATORS
        and not char.isspace()
        and ord(char) >= MIN_COMPONENT_CODEPOINT
    }
    return components, unencoded


def get_chise_components(
    char: str,
    chise_ids: dict[str, str],
    normalizer: Callable[[str], str] = nfkc_plus,
) -> set[str]:
    """
    Normalized components of `char`.

    Empty when `char` has no IDS, or when its IDS is just the character
    itself (atomic characters such as 一).
    """
    ids = chise_ids.get(char)
    if ids is None:
        return set()

    components, _ = extract_ids_components(ids)
    return {normalizer(c) for c in components} - {char}


def faulty_diagnostic(char: str, chise_ids: dict[str, str]) -> str:
    """Describe why `char` cannot be decomposed cleanly, or '' if it can."""
    ids = chise_ids.get(char)
    if ids is None:
        return ""
    _, unencoded = extract_ids_components(ids)
    if not unencoded:
        return ""
    return f"IDS of {char} refers to unencoded glyphs: {' '.join(unencoded)}"


# ---------------------------------------------------------------------------
# Attaching Components to Entries
# ---------------------------------------------------------------------------

def attach_components(
    entries: Iterable[KanjiEntry],
    chise_ids: dict[str, str],
) -> dict[str, str]:
    """
    Fill `entry.components` for every entry from CHISE IDS data.

    Returns:
        Dict mapping component char -> diagnostic, for faulty components
    """
    faulty: dict[str, str] = {}
    decomposed = 0

    for entry in entries:
        components = get_chise_components(entry.literal, chise_ids)
        entry.components = sorted(components)
        if components:
            decomposed += 1

        for component in components:
            if component not in faulty:
                diagnostic = faulty_diagnostic(component, chise_ids)
                if diagnostic:
                    faulty[component] = diagnostic

    logger.debug("Decomposed %d characters, %d faulty components", decomposed, len(faulty))
    return faulty
