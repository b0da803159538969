#!/usr/bin/env python3
"""
test_scripts.py

End-to-end runs of the command-line scripts against the sample sources.
"""

import importlib.util
import json
import sys
from pathlib import Path

import pytest

SCRIPTS_DIR = Path(__file__).resolve().parent.parent / "scripts"


def load_script(relative: str):
    path = SCRIPTS_DIR / relative
    spec = importlib.util.spec_from_file_location(path.stem, path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def run_script(module, monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", [module.__name__, *args])
    module.main()


@pytest.fixture
def built_cache(kanjidic_path, ids_path, tmp_path, monkeypatch, capsys) -> Path:
    cache_path = tmp_path / "kanji-catalog.bin"
    build = load_script("generators/build_kanji_cache.py")
    run_script(build, monkeypatch,
               "--kanjidic", str(kanjidic_path),
               "--ids", str(ids_path),
               "--output", str(cache_path))
    capsys.readouterr()
    return cache_path


def test_build_kanji_cache_report(kanjidic_path, ids_path, tmp_path, monkeypatch, capsys):
    cache_path = tmp_path / "kanji-catalog.bin"
    build = load_script("generators/build_kanji_cache.py")
    run_script(build, monkeypatch,
               "--kanjidic", str(kanjidic_path),
               "--ids", str(ids_path),
               "--output", str(cache_path))

    out = capsys.readouterr().out
    assert "Kanji: 3" in out
    assert "Components: 3 (1 faulty)" in out
    assert "Grade 8 (jouyou remainder): 2" in out
    assert cache_path.exists()


def test_build_kanji_cache_dry_run(kanjidic_path, tmp_path, monkeypatch, capsys):
    cache_path = tmp_path / "kanji-catalog.bin"
    build = load_script("generators/build_kanji_cache.py")
    run_script(build, monkeypatch,
               "--kanjidic", str(kanjidic_path),
               "--no-components",
               "--output", str(cache_path),
               "--dry-run")

    assert "DRY RUN" in capsys.readouterr().out
    assert not cache_path.exists()


def test_build_kanji_cache_missing_source(tmp_path, monkeypatch, capsys):
    build = load_script("generators/build_kanji_cache.py")
    with pytest.raises(SystemExit) as exc_info:
        run_script(build, monkeypatch, "--kanjidic", str(tmp_path / "missing.xml"))

    assert exc_info.value.code == 1
    assert "kanjidic2 not found" in capsys.readouterr().out


def test_query_kanji_text_output(built_cache, monkeypatch, capsys):
    query = load_script("analyzers/query_kanji.py")
    run_script(query, monkeypatch, "grade=8&jlpt=1", "--cache", str(built_cache))

    out = capsys.readouterr().out
    assert "2 match(es) (keyword query)" in out
    assert "亜  U+4E9C  strokes=7" in out


def test_query_kanji_json_output(built_cache, monkeypatch, capsys):
    query = load_script("analyzers/query_kanji.py")
    run_script(query, monkeypatch, "乙亜", "--cache", str(built_cache), "--json", "--limit", "1")

    docs = json.loads(capsys.readouterr().out)
    assert [d["symbol"] for d in docs] == ["乙"]
    assert docs[0]["$id"] == "kanji:U+4E59"


@pytest.fixture
def no_source(tmp_path, monkeypatch) -> Path:
    missing = tmp_path / "missing-kanjidic2.xml"
    monkeypatch.setenv("KANJIDB_KANJIDIC_PATH", str(missing))
    return missing


def test_query_kanji_uses_cache_without_source(built_cache, no_source, monkeypatch, capsys):
    query = load_script("analyzers/query_kanji.py")
    run_script(query, monkeypatch, "乙", "--cache", str(built_cache))

    assert "1 match(es) (character lookup)" in capsys.readouterr().out


def test_query_kanji_missing_cache_and_source(no_source, tmp_path, monkeypatch, capsys):
    query = load_script("analyzers/query_kanji.py")
    with pytest.raises(SystemExit) as exc_info:
        run_script(query, monkeypatch, "乙", "--cache", str(tmp_path / "none.bin"))

    assert exc_info.value.code == 1
    assert "no cache at" in capsys.readouterr().out


def test_query_kanji_rebuild_without_source(built_cache, no_source, monkeypatch, capsys):
    query = load_script("analyzers/query_kanji.py")
    with pytest.raises(SystemExit) as exc_info:
        run_script(query, monkeypatch, "乙", "--cache", str(built_cache), "--rebuild")

    assert exc_info.value.code == 1
    assert "cannot rebuild" in capsys.readouterr().out


def test_query_kanji_corrupt_cache_without_source(built_cache, no_source, monkeypatch, capsys):
    data = built_cache.read_bytes()
    built_cache.write_bytes(data[:len(data) // 2])

    query = load_script("analyzers/query_kanji.py")
    with pytest.raises(SystemExit) as exc_info:
        run_script(query, monkeypatch, "乙", "--cache", str(built_cache))

    assert exc_info.value.code == 1
    assert "unusable cache" in capsys.readouterr().out
