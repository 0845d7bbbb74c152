from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from .classifier import LanguageClassifier
from .errors import InvalidConfigError
from .events import emit
from .languages import Language
from .results import ValidationObservation, ValidationReport
from .vocabulary import WordSnapshot


@dataclass(frozen=True)
class LabeledRecord:
    language: Language
    text: str


class Trainer:
    """
    Feeds labeled text into a classifier's vocabularies.

    Labeled text becomes axioms. `ingest_unlabeled_batch` splits a labeled batch: one part is
    learned as axioms, the rest is classified blind so the labels only serve for scoring.
    """

    def __init__(self, classifier: LanguageClassifier) -> None:
        self.classifier = classifier

    def ingest_labeled(self, language: Language, text: str) -> list[WordSnapshot]:
        lang = Language(language)
        vocab = self.classifier.store.vocabulary(lang)
        words = self.classifier.tokenize(text or "", lang)
        with self.classifier.lock:
            inserted = [vocab.insert_axiom(w).snapshot() for w in words]
        emit(
            self.classifier.on_event,
            {"stage": "ingest_labeled", "language": lang.value, "n_words": len(inserted)},
        )
        return inserted

    def ingest_records(self, records: Iterable[LabeledRecord]) -> int:
        """Ingest every record as axioms. Returns the number of records consumed."""
        n = 0
        for rec in records:
            self.ingest_labeled(rec.language, rec.text)
            n += 1
        return n

    def ingest_unlabeled_batch(
        self,
        records: Sequence[LabeledRecord],
        axiom_ratio: Optional[float] = None,
        *,
        seed: Optional[int] = None,
    ) -> ValidationReport:
        """
        Shuffle `records`, learn the first `axiom_ratio` share as axioms, classify the rest.

        Defaults for `axiom_ratio` and `seed` come from the classifier config.
        """
        cfg = self.classifier.config
        ratio = cfg.axiom_ratio if axiom_ratio is None else float(axiom_ratio)
        if not (0.0 <= ratio <= 1.0):
            raise InvalidConfigError("axiom_ratio must be in [0.0, 1.0]")
        rng = random.Random(cfg.seed if seed is None else seed)

        shuffled = list(records)
        rng.shuffle(shuffled)
        n_axioms = int(len(shuffled) * ratio)
        axioms, held_out = shuffled[:n_axioms], shuffled[n_axioms:]

        emit(
            self.classifier.on_event,
            {
                "stage": "split",
                "n_records": len(shuffled),
                "n_axioms": len(axioms),
                "n_held_out": len(held_out),
            },
        )

        self.ingest_records(axioms)
        observations = tuple(
            ValidationObservation(true_language=rec.language, result=self.classifier.classify(rec.text))
            for rec in held_out
        )
        report = ValidationReport(observations=observations, n_axiom_records=len(axioms))

        emit(
            self.classifier.on_event,
            {
                "stage": "validate",
                "n_validated": report.n_total,
                "n_correct": report.n_correct,
                "accuracy": report.accuracy,
            },
        )
        return report
