from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from .classifier import LanguageClassifier
from .config import LidConfig
from .datasets import DatasetLoadResult, load_records
from .errors import InvalidConfigError, LidError
from .languages import language_for_name
from .results import ClassificationResult, vocabulary_distribution
from .training import Trainer

app = typer.Typer(add_completion=False, no_args_is_help=True)
_console = Console()
# Progress notes go to stderr so stdout stays the result.
_err_console = Console(stderr=True)

_DATA_HELP = "Labeled dataset (.csv with Text,language columns or .jsonl)."


def _data_option() -> Any:
    return typer.Option(..., "--data", envvar="VLID_DATASET_PATH", help=_DATA_HELP)


def _load(data: Path, text_column: Optional[str], language_column: Optional[str]) -> DatasetLoadResult:
    try:
        res = load_records(data, text_column=text_column, language_column=language_column)
    except (FileNotFoundError, LidError) as e:
        _err_console.print(f"[red]Could not load dataset:[/red] {e}")
        raise typer.Exit(code=2)
    _err_console.print(
        f"[dim]Loaded {len(res.records)} records from {res.source} "
        f"({res.n_skipped} skipped)[/dim]"
    )
    return res


def _make_config(**kwargs: object) -> LidConfig:
    try:
        return LidConfig.from_dict(dict(kwargs), strict=True)
    except InvalidConfigError as e:
        _console.print(f"[red]Invalid option:[/red] {e}")
        raise typer.Exit(code=2)


def _print_result(result: ClassificationResult, *, show_all: bool) -> None:
    winner = result.find_winner()
    if winner is None:
        _console.print("[yellow]No winner[/yellow] (no known words in any language)")
    else:
        _console.print(f"[green]{winner.language.value}[/green]: {winner.score:.4f}")
    if not show_all:
        return
    table = Table("language", "score", "words")
    for obs in result.ranking():
        if not obs.n_tokens:
            continue
        words = " ".join(f"{w.text}({w.weight:.2f})" for w in obs.words)
        table.add_row(obs.language.value, f"{obs.score:.4f}", words)
    _console.print(table)


@app.command()
def classify(
    text: str = typer.Argument(..., help="Sample to classify."),
    data: Path = _data_option(),
    text_column: Optional[str] = typer.Option(None, help="Text column/key in the dataset."),
    language_column: Optional[str] = typer.Option(None, help="Language column/key in the dataset."),
    show_all: bool = typer.Option(False, "--all", help="Show the score of every contender."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
) -> None:
    """Train on a labeled dataset, then classify one sample."""
    res = _load(data, text_column, language_column)
    clf = LanguageClassifier()
    Trainer(clf).ingest_records(res.records)
    result = clf.classify(text)
    if as_json:
        # Plain echo keeps machine-readable output free of console wrapping.
        typer.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        _print_result(result, show_all=show_all)


@app.command()
def interactive(
    data: Path = _data_option(),
    text_column: Optional[str] = typer.Option(None, help="Text column/key in the dataset."),
    language_column: Optional[str] = typer.Option(None, help="Language column/key in the dataset."),
    show_all: bool = typer.Option(True, "--all/--winner-only", help="Show every contender."),
) -> None:
    """Train on a labeled dataset, then classify prompts until an empty line."""
    res = _load(data, text_column, language_column)
    clf = LanguageClassifier()
    Trainer(clf).ingest_records(res.records)
    while True:
        try:
            sample = typer.prompt("Ready", default="", show_default=False)
        except typer.Abort:
            break
        if not sample.strip():
            break
        _print_result(clf.classify(sample), show_all=show_all)


@app.command()
def validate(
    data: Path = _data_option(),
    axiom_ratio: float = typer.Option(0.9, help="Share of records learned as axioms (0..1)."),
    seed: Optional[int] = typer.Option(None, help="Shuffle seed for reproducible splits."),
    weight_policy: str = typer.Option("mean", help="Weight adjustment: mean or threshold."),
    adjust_min_tokens: int = typer.Option(6, help="Token threshold for the threshold policy."),
    text_column: Optional[str] = typer.Option(None, help="Text column/key in the dataset."),
    language_column: Optional[str] = typer.Option(None, help="Language column/key in the dataset."),
    report: Optional[Path] = typer.Option(
        None, help="Write a JSON report to this path (directories auto-created)."
    ),
) -> None:
    """Semi-supervised run: learn part of the dataset, classify the rest blind, report accuracy."""
    cfg = _make_config(
        axiom_ratio=axiom_ratio,
        seed=seed,
        weight_policy=weight_policy,
        adjust_min_tokens=adjust_min_tokens,
    )
    res = _load(data, text_column, language_column)
    clf = LanguageClassifier(config=cfg)
    rep = Trainer(clf).ingest_unlabeled_batch(res.records)

    payload = dict(rep.summary())
    payload["config"] = cfg.to_dict()
    payload["vocabulary"] = {
        d.language.value: {
            "axioms": d.n_axioms,
            "inductions": d.n_inductions,
            "confident_inductions": d.n_confident_inductions,
        }
        for d in vocabulary_distribution(clf.store)
        if d.n_axioms or d.n_inductions
    }

    table = Table("language", "support", "true+", "false+")
    for lang, counts in rep.per_language().items():
        table.add_row(
            lang.value,
            str(counts["support"]),
            str(counts["true_positive"]),
            str(counts["false_positive"]),
        )
    _console.print(table)
    _console.print(
        f"Correct: {rep.n_correct}  Wrong: {rep.n_incorrect}  Undecided: {rep.n_undecided}  "
        f"Accuracy: {rep.accuracy:.3f}"
    )
    if report:
        report.parent.mkdir(parents=True, exist_ok=True)
        report.write_text(json.dumps(payload, ensure_ascii=True, indent=2) + "\n", encoding="utf-8")
        _console.print(f"[green]Wrote report:[/green] {report}")


@app.command()
def vocab(
    language: str = typer.Argument(..., help="Language name, e.g. english or en."),
    data: Path = _data_option(),
    top: int = typer.Option(20, help="Number of words to show (0 for all)."),
    axiom_ratio: float = typer.Option(
        1.0, help="Below 1.0, hold out that share and classify it so inductions show up."
    ),
    seed: Optional[int] = typer.Option(None, help="Shuffle seed for reproducible splits."),
    text_column: Optional[str] = typer.Option(None, help="Text column/key in the dataset."),
    language_column: Optional[str] = typer.Option(None, help="Language column/key in the dataset."),
) -> None:
    """Show a language's vocabulary, highest weight first."""
    lang = language_for_name(language)
    if lang is None:
        _console.print(f"[red]Unknown language:[/red] {language}")
        raise typer.Exit(code=2)
    cfg = _make_config(axiom_ratio=axiom_ratio, seed=seed)
    res = _load(data, text_column, language_column)
    clf = LanguageClassifier(config=cfg)
    Trainer(clf).ingest_unlabeled_batch(res.records)

    words = sorted(clf.store.vocabulary(lang).snapshot(), key=lambda w: (-w.weight, w.text))
    if top > 0:
        words = words[:top]
    table = Table("word", "weight", "kind")
    for w in words:
        table.add_row(w.text, f"{w.weight:.4f}", w.kind.value)
    _console.print(table)


@app.command()
def doctor() -> None:
    """Print environment and feature report as JSON."""
    from .doctor import collect_doctor_info

    _console.print(json.dumps(collect_doctor_info(), ensure_ascii=True, indent=2))


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
