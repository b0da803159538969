#!/usr/bin/env python3
"""
Folding of radical and component forms onto the ideographs they stand for.

Kangxi Radicals (U+2F00-2FDF) and CJK Compatibility Ideographs already fold
under NFKC. The CJK Radicals Supplement (U+2E80-2EFF) mostly does not, so
the supplement forms that look the same as an ordinary ideograph are listed
here by hand.
"""

import unicodedata

# Base ideograph -> CJK Radicals Supplement forms drawn the same way.
# Left out on purpose: ⺄ (not 乙), ⺆ (not 匚), ⺌ ⺍ (fewer strokes than 小)
SUPPLEMENT_FORMS: dict[str, str] = {
    "亻": "⺅",       # PERSON
    "刂": "⺉",       # KNIFE TWO
    "忄": "⺖⺗",     # HEART ONE, HEART TWO
    "犭": "⺨",       # DOG
    "羊": "⺶⺷⺸",   # SHEEP, RAM, EWE
    "辶": "⻌⻍⻎",   # SIMPLIFIED WALK, WALK ONE, WALK TWO
    "阝": "⻏⻖",     # CITY, MOUND TWO
    "食": "⻞⻟⻠",   # EAT TWO, EAT THREE, C-SIMPLIFIED EAT
}

# Supplement codepoint -> base ideograph
CJK_RAD_SUPP_MAP: dict[int, str] = {
    ord(form): base
    for base, forms in SUPPLEMENT_FORMS.items()
    for form in forms
}


def nfkc(char: str) -> str:
    """
    NFKC-fold a single character until it stops changing.

    Multi-character strings are returned unchanged.
    """
    if len(char) != 1:
        return char

    seen = {char}
    while True:
        folded = unicodedata.normalize("NFKC", char)
        if folded == char or folded in seen:
            return char
        seen.add(folded)
        char = folded


def nfkc_plus(char: str) -> str:
    """nfkc(), then fold CJK Radicals Supplement forms onto their base ideograph."""
    folded = nfkc(char)
    if len(folded) != 1:
        return folded
    return CJK_RAD_SUPP_MAP.get(ord(folded), folded)


def supplement_forms_of(char: str) -> list[str]:
    """All CJK Radicals Supplement characters that fold to `char`, in codepoint order."""
    return sorted(SUPPLEMENT_FORMS.get(char, ""))
