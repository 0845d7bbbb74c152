from __future__ import annotations

import abc
import threading
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Iterator, Optional, Sequence

from .errors import InvalidWordError
from .languages import Language, get_language_profile
from .tokenize import normalize_word

if TYPE_CHECKING:
    from .weighting import WeightPolicy


class WordKind(str, Enum):
    AXIOM = "axiom"
    INDUCTION = "induction"


@dataclass(frozen=True)
class WordSnapshot:
    """Score-stable copy of a word entry, safe to keep for reporting."""

    language: Language
    text: str
    weight: float
    kind: WordKind

    @property
    def percent(self) -> int:
        return int(self.weight * 100)


class WordEntry(abc.ABC):
    """
    A word of one language's vocabulary.

    Entries are either axioms (labeled data, weight pinned at 1.0) or inductions (discovered by
    classification, weight in [0.0, 1.0] revised after each won round).
    """

    __slots__ = ("language", "text")
    kind: WordKind

    def __init__(self, language: Language, text: str) -> None:
        self.language = language
        self.text = text

    @property
    @abc.abstractmethod
    def weight(self) -> float:
        """Current confidence in [0.0, 1.0]."""

    def snapshot(self) -> WordSnapshot:
        return WordSnapshot(language=self.language, text=self.text, weight=self.weight, kind=self.kind)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.language.value}:{self.text!r}, w={self.weight:.4f})"


class AxiomEntry(WordEntry):
    __slots__ = ()
    kind = WordKind.AXIOM

    @property
    def weight(self) -> float:
        return 1.0


class InductionEntry(WordEntry):
    __slots__ = ("_weight",)
    kind = WordKind.INDUCTION

    def __init__(self, language: Language, text: str, weight: float = 0.0) -> None:
        super().__init__(language, text)
        self._weight = _clamp(weight)

    @property
    def weight(self) -> float:
        return self._weight

    def _set_weight(self, value: float) -> None:
        # Only Vocabulary.adjust writes weights, under the vocabulary lock.
        self._weight = _clamp(value)


def _clamp(w: float) -> float:
    w = float(w)
    if w != w:  # NaN guard
        return 0.0
    return max(0.0, min(1.0, w))


class Vocabulary:
    """
    Mutable word store owned by a single language.

    Every read and write takes the vocabulary lock, so snapshots never interleave with an
    in-flight weight adjustment.
    """

    def __init__(self, language: Language) -> None:
        self.language = Language(language)
        self._alphabet = get_language_profile(self.language).alphabet
        self._entries: dict[str, WordEntry] = {}
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def _key(self, text: str) -> str:
        key = normalize_word(text)
        if not key or not self._alphabet.may_contain_word(key):
            raise InvalidWordError(f"Not a {self.language.value} word: {text!r}")
        return key

    def insert_axiom(self, text: str) -> AxiomEntry:
        """Insert (or overwrite) `text` as an axiom. Replaces any prior induction entry."""
        key = self._key(text)
        entry = AxiomEntry(self.language, key)
        with self._lock:
            self._entries[key] = entry
        return entry

    def lookup_or_create_induction(self, text: str) -> WordEntry:
        """Return the existing entry for `text` (any kind), or store a new induction at 0.0."""
        key = self._key(text)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                entry = InductionEntry(self.language, key)
                self._entries[key] = entry
            return entry

    def resolve(self, tokens: Sequence[str]) -> list[WordEntry]:
        """
        Resolve the tokens of one sample against this vocabulary.

        New induction words are only admitted when the sample already contains at least one
        known word; otherwise nothing is inserted and the result is empty.
        """
        keys = [normalize_word(t) for t in tokens]
        with self._lock:
            if not any(k in self._entries for k in keys):
                return []
            return [self.lookup_or_create_induction(k) for k in keys]

    def adjust(
        self,
        entries: Iterable[WordEntry],
        *,
        total_score: float,
        n_tokens: int,
        policy: "WeightPolicy",
    ) -> int:
        """
        Apply `policy` to each distinct induction entry in `entries`. Returns how many changed.
        """
        if n_tokens <= 0:
            return 0
        n_changed = 0
        with self._lock:
            seen: set[int] = set()
            for entry in entries:
                if not isinstance(entry, InductionEntry) or id(entry) in seen:
                    continue
                seen.add(id(entry))
                # Entry may have been replaced by an axiom since it was resolved.
                if self._entries.get(entry.text) is not entry:
                    continue
                before = entry.weight
                entry._set_weight(policy.adjust(before, total_score, n_tokens))
                if entry.weight != before:
                    n_changed += 1
        return n_changed

    def get(self, text: str) -> Optional[WordSnapshot]:
        with self._lock:
            entry = self._entries.get(normalize_word(text))
            return None if entry is None else entry.snapshot()

    def snapshot(self) -> frozenset[WordSnapshot]:
        with self._lock:
            return frozenset(e.snapshot() for e in self._entries.values())

    def axiom_count(self) -> int:
        with self._lock:
            return sum(1 for e in self._entries.values() if e.kind == WordKind.AXIOM)

    def induction_count(self, *, nonzero: bool = False) -> int:
        with self._lock:
            return sum(
                1
                for e in self._entries.values()
                if e.kind == WordKind.INDUCTION and (not nonzero or e.weight > 0.0)
            )

    def __contains__(self, text: object) -> bool:
        if not isinstance(text, str):
            return False
        with self._lock:
            return normalize_word(text) in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class VocabularyStore:
    """One vocabulary per supported language, created up-front and never added to."""

    def __init__(self) -> None:
        self._vocabularies: dict[Language, Vocabulary] = {lang: Vocabulary(lang) for lang in Language}

    def vocabulary(self, language: Language) -> Vocabulary:
        return self._vocabularies[Language(language)]

    def languages(self) -> tuple[Language, ...]:
        return tuple(self._vocabularies)

    def snapshot(self) -> dict[Language, frozenset[WordSnapshot]]:
        return {lang: vocab.snapshot() for lang, vocab in self._vocabularies.items()}

    def __iter__(self) -> Iterator[Vocabulary]:
        return iter(self._vocabularies.values())

    def __len__(self) -> int:
        return len(self._vocabularies)
