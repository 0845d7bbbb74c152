from __future__ import annotations

import csv
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from .errors import DatasetError
from .languages import language_for_name
from .training import LabeledRecord


@dataclass(frozen=True)
class DatasetLoadResult:
    records: list[LabeledRecord]
    n_rows: int
    # Rows whose label is not a supported language, or whose text is empty.
    n_skipped: int
    source: str


def _pick_column(fieldnames: list[str], wanted: str) -> Optional[str]:
    for name in fieldnames:
        if name == wanted:
            return name
    low = wanted.strip().lower()
    for name in fieldnames:
        if (name or "").strip().lower() == low:
            return name
    return None


def _collect(rows: Iterable[tuple[object, object]], *, source: str) -> DatasetLoadResult:
    out: list[LabeledRecord] = []
    n_rows = 0
    n_skipped = 0
    for raw_text, raw_label in rows:
        n_rows += 1
        lang = language_for_name(str(raw_label or ""))
        text = str(raw_text or "")
        if lang is None or not text.strip():
            n_skipped += 1
            continue
        out.append(LabeledRecord(language=lang, text=text))
    return DatasetLoadResult(records=out, n_rows=n_rows, n_skipped=n_skipped, source=source)


def load_csv_records(
    path: str | Path,
    *,
    text_column: str = "Text",
    language_column: str = "language",
) -> DatasetLoadResult:
    """
    Load (text, language) rows from a CSV with a header row.

    Column names match case-insensitively, so the Kaggle "Language Detection" layout
    (`Text,language`) and lower-case variants both work.
    """
    p = Path(path).expanduser()
    if not p.exists():
        raise FileNotFoundError(f"Dataset not found: {p}")

    with p.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None:
            raise DatasetError("CSV has no header row (fieldnames).")
        fieldnames = list(reader.fieldnames)
        text_key = _pick_column(fieldnames, text_column)
        lang_key = _pick_column(fieldnames, language_column)
        if text_key is None or lang_key is None:
            raise DatasetError(
                f"CSV must have columns {text_column!r} and {language_column!r}; "
                f"found: {', '.join(fieldnames)}"
            )
        return _collect(((row.get(text_key), row.get(lang_key)) for row in reader), source=str(p))


def iter_jsonl(path: str | Path) -> Iterable[dict[str, object]]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        for line in f:
            s = (line or "").strip()
            if not s:
                continue
            try:
                rec = json.loads(s)
            except json.JSONDecodeError as e:
                raise DatasetError(f"Invalid JSONL line in {p}: {e}") from e
            if isinstance(rec, dict):
                yield rec


def load_jsonl_records(
    path: str | Path,
    *,
    text_key: str = "text",
    language_key: str = "language",
) -> DatasetLoadResult:
    p = Path(path).expanduser()
    if not p.exists():
        raise FileNotFoundError(f"Dataset not found: {p}")
    return _collect(
        ((rec.get(text_key), rec.get(language_key)) for rec in iter_jsonl(p)), source=str(p)
    )


def load_records(
    path: str | Path,
    *,
    text_column: Optional[str] = None,
    language_column: Optional[str] = None,
) -> DatasetLoadResult:
    """Load a labeled dataset, choosing the reader from the file suffix (.csv / .jsonl)."""
    p = Path(path).expanduser()
    suffix = p.suffix.lower()
    if suffix == ".csv":
        return load_csv_records(
            p, text_column=text_column or "Text", language_column=language_column or "language"
        )
    if suffix in {".jsonl", ".ndjson"}:
        return load_jsonl_records(
            p, text_key=text_column or "text", language_key=language_column or "language"
        )
    raise DatasetError(f"Unsupported dataset format: {suffix} (use .csv/.jsonl)")
