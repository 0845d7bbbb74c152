from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Iterable

import regex as re

_APOSTROPHES = frozenset({"'", "’"})
_INHERITED_RE = re.compile(r"\p{Script=Inherited}", flags=re.VERSION1)


class Alphabet(abc.ABC):
    """
    Character-membership test for one language's writing system.

    Characters outside the alphabet never raise; they only disqualify the word they appear in.
    """

    @abc.abstractmethod
    def may_contain(self, char: str) -> bool:
        """True when `char` belongs to this writing system."""

    def may_contain_word(self, word: str) -> bool:
        # Apostrophes are word-internal punctuation ("don't"), not letters of any alphabet.
        chars = [c for c in word if c not in _APOSTROPHES]
        if not chars:
            return False
        return all(self.may_contain(c) for c in chars)


@dataclass(frozen=True)
class LetterSetAlphabet(Alphabet):
    letters: frozenset[str]

    def may_contain(self, char: str) -> bool:
        return char in self.letters


def _property_class(prop: str, values: Iterable[str]) -> re.Pattern:
    parts = "".join(f"\\p{{{prop}={v}}}" for v in values)
    return re.compile(f"[{parts}]", flags=re.VERSION1)


class ScriptAlphabet(Alphabet):
    """Accepts characters whose Unicode script is one of `scripts` (plus combining marks)."""

    def __init__(self, *scripts: str) -> None:
        if not scripts:
            raise ValueError("ScriptAlphabet needs at least one script")
        self.scripts = tuple(scripts)
        self._re = _property_class("Script", self.scripts)

    def may_contain(self, char: str) -> bool:
        return bool(self._re.fullmatch(char) or _INHERITED_RE.fullmatch(char))

    def __repr__(self) -> str:
        return f"ScriptAlphabet{self.scripts!r}"


class BlockAlphabet(Alphabet):
    """Accepts characters inside one of the given Unicode blocks. Coarser than scripts."""

    def __init__(self, *blocks: str) -> None:
        if not blocks:
            raise ValueError("BlockAlphabet needs at least one block")
        self.blocks = tuple(blocks)
        self._re = _property_class("Block", self.blocks)

    def may_contain(self, char: str) -> bool:
        return bool(self._re.fullmatch(char))

    def __repr__(self) -> str:
        return f"BlockAlphabet{self.blocks!r}"


def char_range(first: int, last: int) -> frozenset[str]:
    """Inclusive code point range as a set of characters."""
    return frozenset(chr(cp) for cp in range(first, last + 1))


def letter_set(base: Iterable[str] = (), extra: str = "") -> frozenset[str]:
    return frozenset(base) | frozenset(extra)


ASCII_LOWER = char_range(ord("a"), ord("z"))
