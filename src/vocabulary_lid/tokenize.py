from __future__ import annotations

import unicodedata

import regex as re

from .languages import Language, Segmentation, get_language_profile

_ZW_RE = re.compile(r"[\u200b\u200c\u200d\u2060\ufeff]")  # ZW*, WORD JOINER, BOM

# Everything except letters, combining marks, whitespace, apostrophes and dashes is discarded.
_DROP_RE = re.compile(r"[^\p{L}\p{M}\s'’\p{Pd}]+", flags=re.VERSION1)
_SPLIT_RE = re.compile(r"[\s\p{Pd}]+", flags=re.VERSION1)
_LETTER_RE = re.compile(r"\p{L}", flags=re.VERSION1)
_APOSTROPHES = "'’"


def normalize_sample(text: str) -> str:
    """
    Canonicalize raw text before segmentation.

    - Unicode NFC (so precomposed and decomposed diacritics compare equal)
    - Strip zero-width chars
    """
    if not text:
        return ""
    text = unicodedata.normalize("NFC", text)
    return _ZW_RE.sub("", text)


def _lower(text: str) -> str:
    # Python lower-cases "İ" to "i" + COMBINING DOT ABOVE; Turkish wants a plain "i".
    return text.replace("İ", "i").lower()


def normalize_word(text: str) -> str:
    """Canonical vocabulary key: NFC, lower-cased, outer whitespace and apostrophes stripped."""
    if not text:
        return ""
    return _lower(normalize_sample(text)).strip().strip(_APOSTROPHES).strip()


def _split_whitespace(text: str, language: Language, *, min_word_length: int) -> list[str]:
    alphabet = get_language_profile(language).alphabet
    kept = _DROP_RE.sub("", _lower(normalize_sample(text).strip()))
    out: list[str] = []
    for raw in _SPLIT_RE.split(kept):
        word = raw.strip(_APOSTROPHES)
        if not word or len(word) < min_word_length:
            continue
        if alphabet.may_contain_word(word):
            out.append(word)
    return out


def _split_characters(text: str, language: Language) -> list[str]:
    alphabet = get_language_profile(language).alphabet
    return [
        c
        for c in _lower(normalize_sample(text))
        if _LETTER_RE.match(c) and alphabet.may_contain(c)
    ]


def split_words(text: str, language: Language, *, min_word_length: int = 1) -> list[str]:
    """
    Segment `text` into the candidate words of `language`.

    The whole sample is segmented eagerly. Words containing characters outside the language
    alphabet are dropped; for character-segmented languages (Chinese, Japanese, Korean, Thai)
    every accepted letter is its own token and `min_word_length` does not apply.
    """
    if not text:
        return []
    profile = get_language_profile(language)
    if profile.segmentation == Segmentation.CHARACTER:
        return _split_characters(text, profile.code)
    return _split_whitespace(text, profile.code, min_word_length=max(1, int(min_word_length)))
