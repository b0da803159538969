#!/usr/bin/env python3
"""
test_documents.py

Exported kanji documents must validate against the data-model schema that
ships with kanjidb.
"""

import pytest

from kanjidb.documents import build_kanji_document, codepoint_str, load_kanji_schema
from kanjidb.kanji import Kanji

# Try to import jsonschema - required for validation
try:
    from jsonschema import ValidationError
    from jsonschema.validators import validator_for
except ImportError:
    pytest.skip("jsonschema not installed", allow_module_level=True)


@pytest.fixture(scope="module")
def validator():
    schema = load_kanji_schema()
    assert schema["name"] == "japanese-kanji"
    document_schema = schema["schema"]
    validator_cls = validator_for(document_schema)
    validator_cls.check_schema(document_schema)
    return validator_cls(document_schema)


def test_codepoint_str():
    assert codepoint_str(0x4E00) == "U+4E00"
    assert codepoint_str(0x20089) == "U+20089"


def test_every_sample_document_validates(sample_catalog, validator):
    for kanji in sample_catalog:
        doc = build_kanji_document(kanji)
        errors = sorted(validator.iter_errors(doc), key=lambda e: list(e.path))
        assert not errors, f"{kanji!r}: {errors[0].message}"


def test_full_document(sample_catalog):
    doc = build_kanji_document(sample_catalog.by_literal("一"))
    assert doc == {
        "$id": "kanji:U+4E00",
        "unicode": "U+4E00",
        "symbol": "一",
        "meanings": ["one", "one radical (no.1)"],
        "onyomi": ["イチ", "イツ"],
        "kunyomi": ["ひと-", "ひと.つ"],
        "nanori": ["かず", "ひ"],
        "strokeCount": 1,
        "grade": 1,
        "jlptLevel": 4,
        "frequency": 2,
        "radical": 1,
        "codes": {"jis208": "1-16-76"},
    }


def test_sparse_document_omits_absent_fields(sample_catalog):
    doc = build_kanji_document(sample_catalog.by_literal("體"))
    assert doc["jlptLevel"] == "unspecified"
    assert doc["meanings"] == []
    assert doc["codes"] == {"jis212": "1-74-24"}
    for absent in ("grade", "frequency", "onyomi", "kunyomi", "nanori", "components"):
        assert absent not in doc


def test_components_are_listed_as_characters(sample_catalog):
    doc = build_kanji_document(sample_catalog.by_literal("語"))
    assert doc["components"] == ["五", "口", "言"]


def test_invalid_document_is_rejected(validator):
    doc = build_kanji_document(Kanji(literal="一", codepoint=0x4E00, jlpt=4))
    doc["grade"] = 0
    with pytest.raises(ValidationError):
        validator.validate(doc)
