from __future__ import annotations

import threading
from typing import Optional, Sequence

from .config import DEFAULT_EPSILON, LidConfig
from .events import EventHook, emit
from .languages import Language
from .results import ClassificationResult, LanguageObservation
from .tokenize import split_words
from .vocabulary import VocabularyStore, WordEntry
from .weighting import WeightPolicy, get_weight_policy

EPSILON = DEFAULT_EPSILON


class LanguageClassifier:
    """
    Scores samples against every language's vocabulary and learns from the winners.

    Whole classification rounds (resolve, score, adjust) are serialized by the classifier lock,
    so the read-modify-write on induction weights never races with another round.
    """

    def __init__(
        self,
        *,
        config: Optional[LidConfig] = None,
        store: Optional[VocabularyStore] = None,
        policy: Optional[WeightPolicy] = None,
        on_event: Optional[EventHook] = None,
    ) -> None:
        self.config = (config or LidConfig()).normalized()
        self.store = store if store is not None else VocabularyStore()
        self.policy: WeightPolicy = policy or get_weight_policy(
            self.config.weight_policy, min_tokens=self.config.adjust_min_tokens
        )
        self.on_event = on_event
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def languages(self) -> tuple[Language, ...]:
        return self.store.languages()

    def tokenize(self, text: str, language: Language) -> list[str]:
        return split_words(text, language, min_word_length=self.config.min_word_length)

    def classify(self, sample: str) -> ClassificationResult:
        """
        Classify `sample` and adjust the winner's induction weights.

        No winner (empty sample, or every score <= epsilon) is a normal outcome, not an error.
        """
        with self._lock:
            resolved: dict[Language, list[WordEntry]] = {}
            observations: list[LanguageObservation] = []
            for lang in self.store.languages():
                vocab = self.store.vocabulary(lang)
                entries = vocab.resolve(self.tokenize(sample or "", lang))
                resolved[lang] = entries
                # Copy weights now; the adjustment below must not leak into the result.
                observations.append(
                    LanguageObservation(language=lang, words=tuple(e.snapshot() for e in entries))
                )

            result = ClassificationResult(
                sample=sample or "",
                observations=tuple(observations),
                epsilon=self.config.epsilon,
            )
            winner = result.find_winner()

            emit(
                self.on_event,
                {
                    "stage": "classify",
                    "winner": None if winner is None else winner.language.value,
                    "scores": {o.language.value: o.score for o in observations if o.n_tokens},
                    "sample_len": len(sample or ""),
                },
            )

            if winner is not None and winner.n_tokens > 0:
                n_changed = self.store.vocabulary(winner.language).adjust(
                    resolved[winner.language],
                    total_score=winner.score,
                    n_tokens=winner.n_tokens,
                    policy=self.policy,
                )
                emit(
                    self.on_event,
                    {
                        "stage": "adjust",
                        "language": winner.language.value,
                        "policy": self.policy.name,
                        "mean_score": winner.score / winner.n_tokens,
                        "n_tokens": winner.n_tokens,
                        "n_changed": n_changed,
                    },
                )
            return result

    def classify_many(self, samples: Sequence[str]) -> list[ClassificationResult]:
        """Classify samples in order; each round sees the weights learned from the previous ones."""
        out: list[ClassificationResult] = []
        for s in samples:
            out.append(self.classify(s))
        return out
