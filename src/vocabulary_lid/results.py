from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Optional, Sequence

from .languages import Language
from .vocabulary import VocabularyStore, WordKind, WordSnapshot


@dataclass(frozen=True)
class LanguageObservation:
    """Score of one language for one sample, with the words that made it up."""

    language: Language
    words: tuple[WordSnapshot, ...]

    @property
    def score(self) -> float:
        return float(sum(w.weight for w in self.words))

    @property
    def n_tokens(self) -> int:
        return len(self.words)

    def contributions(self) -> list[tuple[str, float]]:
        return [(w.text, w.weight) for w in self.words]


@dataclass(frozen=True)
class ClassificationResult:
    """
    Immutable outcome of one classification round.

    Word weights are the values seen while scoring, before the winner's weights were adjusted.
    """

    sample: str
    observations: tuple[LanguageObservation, ...]
    epsilon: float

    def find_winner(self) -> Optional[LanguageObservation]:
        best: Optional[LanguageObservation] = None
        for obs in self.observations:
            # Strict ">" keeps the first language on ties.
            if best is None or obs.score > best.score:
                best = obs
        if best is None or best.score <= self.epsilon:
            return None
        return best

    @property
    def winner(self) -> Optional[Language]:
        w = self.find_winner()
        return None if w is None else w.language

    def observation(self, language: Language) -> LanguageObservation:
        for obs in self.observations:
            if obs.language == language:
                return obs
        return LanguageObservation(language=Language(language), words=())

    def scores(self) -> dict[Language, float]:
        return {obs.language: obs.score for obs in self.observations}

    def ranking(self) -> list[LanguageObservation]:
        """All contenders, highest score first."""
        return sorted(self.observations, key=lambda o: -o.score)

    def stacked_bars(self) -> list[tuple[Language, list[float]]]:
        """
        Per-language cumulative word weights, padded to the longest token list.

        Each row is ready for a stacked horizontal bar chart: segment i ends at the running sum
        of the first i+1 word weights.
        """
        width = max((obs.n_tokens for obs in self.observations), default=0)
        rows: list[tuple[Language, list[float]]] = []
        for obs in self.observations:
            running = 0.0
            ends: list[float] = []
            for i in range(width):
                if i < obs.n_tokens:
                    running += obs.words[i].weight
                ends.append(running)
            rows.append((obs.language, ends))
        return rows

    def to_dict(self) -> dict[str, object]:
        winner = self.winner
        return {
            "sample": self.sample,
            "winner": None if winner is None else winner.value,
            "scores": {obs.language.value: obs.score for obs in self.ranking() if obs.n_tokens},
            "words": {
                obs.language.value: [
                    {"text": w.text, "weight": w.weight, "kind": w.kind.value} for w in obs.words
                ]
                for obs in self.observations
                if obs.n_tokens
            },
        }


@dataclass(frozen=True)
class ValidationObservation:
    true_language: Language
    result: ClassificationResult

    @property
    def predicted(self) -> Optional[Language]:
        return self.result.winner

    @property
    def is_correct(self) -> bool:
        return self.predicted == self.true_language

    @property
    def is_undecided(self) -> bool:
        return self.predicted is None


@dataclass(frozen=True)
class ValidationReport:
    """
    Post-hoc accuracy of held-out records classified with their labels withheld.

    A record with no winner is undecided and never counts as correct, so error ratios run
    higher than with a scorer that treats "no guess" as a hit.
    """

    observations: tuple[ValidationObservation, ...]
    n_axiom_records: int = 0

    @property
    def n_total(self) -> int:
        return len(self.observations)

    @property
    def n_correct(self) -> int:
        return sum(1 for o in self.observations if o.is_correct)

    @property
    def n_undecided(self) -> int:
        return sum(1 for o in self.observations if o.is_undecided)

    @property
    def n_incorrect(self) -> int:
        return self.n_total - self.n_correct - self.n_undecided

    @property
    def accuracy(self) -> float:
        if not self.observations:
            return 0.0
        return self.n_correct / self.n_total

    @property
    def error_ratio(self) -> float:
        """Wrong guesses per right guess (undecided samples count as wrong)."""
        wrong = self.n_total - self.n_correct
        if self.n_correct == 0:
            return float(wrong) if wrong else 0.0
        return wrong / self.n_correct

    def per_language(self) -> dict[Language, dict[str, int]]:
        """
        True/false positives per predicted language, plus support per true language.
        """
        out: dict[Language, dict[str, int]] = {}

        def row(lang: Language) -> dict[str, int]:
            return out.setdefault(lang, {"support": 0, "true_positive": 0, "false_positive": 0})

        for o in self.observations:
            row(o.true_language)["support"] += 1
            if o.predicted is None:
                continue
            if o.is_correct:
                row(o.predicted)["true_positive"] += 1
            else:
                row(o.predicted)["false_positive"] += 1
        return {lang: out[lang] for lang in Language if lang in out}

    def confusion(self) -> Counter[tuple[Language, Optional[Language]]]:
        return Counter((o.true_language, o.predicted) for o in self.observations)

    def summary(self) -> dict[str, object]:
        return {
            "n_axiom_records": self.n_axiom_records,
            "n_validated": self.n_total,
            "n_correct": self.n_correct,
            "n_incorrect": self.n_incorrect,
            "n_undecided": self.n_undecided,
            "accuracy": self.accuracy,
            "error_ratio": self.error_ratio,
            "per_language": {
                lang.value: counts for lang, counts in self.per_language().items()
            },
        }


@dataclass(frozen=True)
class VocabularyDistribution:
    language: Language
    n_axioms: int
    n_inductions: int
    # Inductions that have gained any confidence (weight > 0).
    n_confident_inductions: int


def vocabulary_distribution(
    store: VocabularyStore, *, languages: Optional[Sequence[Language]] = None
) -> list[VocabularyDistribution]:
    """Axiom-count vs induction-count per language, from score-stable snapshots."""
    langs = list(languages) if languages is not None else list(store.languages())
    out: list[VocabularyDistribution] = []
    for lang in langs:
        words = store.vocabulary(lang).snapshot()
        inductions = [w for w in words if w.kind == WordKind.INDUCTION]
        out.append(
            VocabularyDistribution(
                language=lang,
                n_axioms=sum(1 for w in words if w.kind == WordKind.AXIOM),
                n_inductions=len(inductions),
                n_confident_inductions=sum(1 for w in inductions if w.weight > 0.0),
            )
        )
    return out
