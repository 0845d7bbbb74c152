from __future__ import annotations

import pytest

from vocabulary_lid.classifier import LanguageClassifier
from vocabulary_lid.config import LidConfig
from vocabulary_lid.errors import InvalidConfigError
from vocabulary_lid.languages import Language
from vocabulary_lid.training import LabeledRecord, Trainer


def _mixed_records() -> list[LabeledRecord]:
    return [
        LabeledRecord(Language.ENGLISH, "the cat sat on the mat"),
        LabeledRecord(Language.ENGLISH, "the dog ate the bone"),
        LabeledRecord(Language.ENGLISH, "a cat and a dog"),
        LabeledRecord(Language.FRENCH, "le chat est sur le tapis"),
        LabeledRecord(Language.FRENCH, "le chien mange un os"),
        LabeledRecord(Language.FRENCH, "un chat et un chien"),
        LabeledRecord(Language.RUSSIAN, "кот сидит на ковре"),
        LabeledRecord(Language.RUSSIAN, "собака ест кость"),
        LabeledRecord(Language.RUSSIAN, "кот и собака"),
        LabeledRecord(Language.CHINESE, "猫坐在垫子上"),
    ]


def test_ingest_labeled_returns_axiom_snapshots() -> None:
    clf = LanguageClassifier()
    snaps = Trainer(clf).ingest_labeled(Language.FRENCH, "Bonjour le monde")
    assert [s.text for s in snaps] == ["bonjour", "le", "monde"]
    assert all(s.weight == 1.0 for s in snaps)
    assert clf.store.vocabulary(Language.FRENCH).axiom_count() == 3


def test_ingest_records_counts_records() -> None:
    clf = LanguageClassifier()
    n = Trainer(clf).ingest_records(_mixed_records())
    assert n == 10
    assert clf.store.vocabulary(Language.RUSSIAN).axiom_count() > 0
    assert clf.store.vocabulary(Language.CHINESE).axiom_count() == 6


def test_batch_split_follows_ratio() -> None:
    clf = LanguageClassifier()
    report = Trainer(clf).ingest_unlabeled_batch(_mixed_records(), 0.9, seed=7)
    assert report.n_axiom_records == 9
    assert report.n_total == 1


def test_batch_with_zero_ratio_is_all_undecided_and_learns_nothing() -> None:
    clf = LanguageClassifier()
    report = Trainer(clf).ingest_unlabeled_batch(_mixed_records(), 0.0, seed=1)
    assert report.n_axiom_records == 0
    assert report.n_total == 10
    assert report.n_undecided == 10
    assert report.n_correct == 0
    assert report.accuracy == 0.0
    assert all(len(clf.store.vocabulary(lang)) == 0 for lang in Language)


def test_batch_with_full_ratio_validates_nothing() -> None:
    clf = LanguageClassifier()
    report = Trainer(clf).ingest_unlabeled_batch(_mixed_records(), 1.0, seed=1)
    assert report.n_axiom_records == 10
    assert report.n_total == 0
    assert report.accuracy == 0.0


@pytest.mark.parametrize("ratio", [-0.1, 1.5])
def test_batch_rejects_invalid_ratio(ratio: float) -> None:
    with pytest.raises(InvalidConfigError):
        Trainer(LanguageClassifier()).ingest_unlabeled_batch(_mixed_records(), ratio)


def test_batch_is_deterministic_for_a_seed() -> None:
    def run() -> tuple[list[object], dict[Language, frozenset[object]]]:
        clf = LanguageClassifier()
        report = Trainer(clf).ingest_unlabeled_batch(_mixed_records(), 0.6, seed=42)
        preds = [(o.true_language, o.predicted) for o in report.observations]
        return preds, dict(clf.store.snapshot())

    assert run() == run()


def test_seed_and_ratio_default_from_config() -> None:
    cfg = LidConfig(axiom_ratio=0.5, seed=3)
    a = Trainer(LanguageClassifier(config=cfg)).ingest_unlabeled_batch(_mixed_records())
    b = Trainer(LanguageClassifier(config=cfg)).ingest_unlabeled_batch(_mixed_records())
    assert a.n_axiom_records == 5
    assert [o.true_language for o in a.observations] == [o.true_language for o in b.observations]


def test_identical_records_validate_perfectly() -> None:
    records = [LabeledRecord(Language.ENGLISH, "hello world")] * 10
    clf = LanguageClassifier()
    report = Trainer(clf).ingest_unlabeled_batch(records, 0.5, seed=0)
    assert report.n_total == 5
    assert report.accuracy == 1.0
    assert report.error_ratio == 0.0


def test_batch_emits_split_and_validate_events() -> None:
    events: list[dict[str, object]] = []
    clf = LanguageClassifier(on_event=events.append)
    Trainer(clf).ingest_unlabeled_batch(_mixed_records(), 0.8, seed=5)
    stages = [e["stage"] for e in events]
    assert stages[0] == "split"
    assert stages[-1] == "validate"
    assert events[0]["n_axioms"] == 8
    assert events[0]["n_held_out"] == 2
    assert events[-1]["n_validated"] == 2
