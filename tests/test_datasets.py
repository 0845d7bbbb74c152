from __future__ import annotations

from pathlib import Path

import pytest

from vocabulary_lid.datasets import load_csv_records, load_jsonl_records, load_records
from vocabulary_lid.errors import DatasetError
from vocabulary_lid.languages import Language


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_load_csv_with_kaggle_columns(tmp_path: Path) -> None:
    p = _write(
        tmp_path / "data.csv",
        "Text,language\n"
        "hello world,English\n"
        '"bonjour, le monde",French\n'
        "ola mundo,Portugese\n"
        "qapla,Klingon\n"
        ",English\n",
    )
    res = load_csv_records(p)
    assert res.n_rows == 5
    assert res.n_skipped == 2
    assert [(r.language, r.text) for r in res.records] == [
        (Language.ENGLISH, "hello world"),
        (Language.FRENCH, "bonjour, le monde"),
        (Language.PORTUGUESE, "ola mundo"),
    ]
    assert res.source == str(p)


def test_load_csv_columns_match_case_insensitively(tmp_path: Path) -> None:
    p = _write(tmp_path / "data.csv", "text,Language\nhallo wereld,dutch\n")
    res = load_csv_records(p)
    assert [r.language for r in res.records] == [Language.DUTCH]


def test_load_csv_missing_column(tmp_path: Path) -> None:
    p = _write(tmp_path / "data.csv", "sentence,lang\nhello,English\n")
    with pytest.raises(DatasetError):
        load_csv_records(p)


def test_load_csv_empty_file(tmp_path: Path) -> None:
    p = _write(tmp_path / "data.csv", "")
    with pytest.raises(DatasetError):
        load_csv_records(p)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_records(tmp_path / "nope.csv")


def test_load_jsonl(tmp_path: Path) -> None:
    p = _write(
        tmp_path / "data.jsonl",
        '{"text": "hello world", "language": "en"}\n'
        "\n"
        '{"text": "привет мир", "language": "Russian"}\n'
        '["not", "an", "object"]\n',
    )
    res = load_jsonl_records(p)
    assert res.n_rows == 2
    assert [r.language for r in res.records] == [Language.ENGLISH, Language.RUSSIAN]


def test_load_jsonl_rejects_bad_lines(tmp_path: Path) -> None:
    p = _write(tmp_path / "data.jsonl", '{"text": "hi", "language": "en"}\n{oops\n')
    with pytest.raises(DatasetError):
        load_jsonl_records(p)


def test_load_records_dispatches_on_suffix(tmp_path: Path) -> None:
    csv_path = _write(tmp_path / "a.csv", "Text,language\nhello,English\n")
    jsonl_path = _write(tmp_path / "b.ndjson", '{"sentence": "hello", "lang": "en"}\n')
    assert len(load_records(csv_path).records) == 1
    res = load_records(jsonl_path, text_column="sentence", language_column="lang")
    assert [r.text for r in res.records] == ["hello"]

    with pytest.raises(DatasetError):
        load_records(_write(tmp_path / "c.txt", "hello"))
