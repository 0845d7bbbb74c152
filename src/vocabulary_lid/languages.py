from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .alphabets import (
    ASCII_LOWER,
    Alphabet,
    BlockAlphabet,
    LetterSetAlphabet,
    ScriptAlphabet,
    char_range,
    letter_set,
)


class Language(str, Enum):
    # Declaration order is the tie-break order for classification.
    THAI = "thai"
    INDONESIAN = "indonesian"
    SPANISH = "spanish"
    ESTONIAN = "estonian"
    RUSSIAN = "russian"
    ARABIC = "arabic"
    LATIN = "latin"
    PERSIAN = "persian"
    CHINESE = "chinese"
    JAPANESE = "japanese"
    KOREAN = "korean"
    HINDI = "hindi"
    FRENCH = "french"
    TURKISH = "turkish"
    ENGLISH = "english"
    TAMIL = "tamil"
    ROMANIAN = "romanian"
    DUTCH = "dutch"
    PORTUGUESE = "portuguese"
    PUSHTO = "pushto"
    SWEDISH = "swedish"
    URDU = "urdu"


class Segmentation(str, Enum):
    # Split on whitespace/dash runs.
    WHITESPACE = "whitespace"
    # Every valid character is its own token (no reliable word-boundary whitespace).
    CHARACTER = "character"


@dataclass(frozen=True)
class LanguageProfile:
    code: Language
    name: str
    alphabet: Alphabet
    segmentation: Segmentation = Segmentation.WHITESPACE


_PUSHTO_LETTERS = frozenset(
    chr(cp)
    for cp in (
        0x0627, 0x0622, 0x0628, 0x067E, 0x062A, 0x067C, 0x062B, 0x062C,
        0x0686, 0x062D, 0x062E, 0x0685, 0x0681, 0x062F, 0x0689, 0x0630,
        0x0631, 0x0693, 0x0632, 0x0698, 0x0696, 0x0633, 0x0634, 0x069A,
        0x0635, 0x0636, 0x0637, 0x0638, 0x0639, 0x063A, 0x0641, 0x0642,
        0x06A9, 0x06AB, 0x0644, 0x0645, 0x0646, 0x06BC, 0x06BA, 0x0648,
        0x0647, 0x06C0, 0x064A, 0x06D0, 0x06CC, 0x06D2, 0x06CD, 0x0626,
    )
)


def _letters(extra: str = "") -> LetterSetAlphabet:
    return LetterSetAlphabet(letter_set(ASCII_LOWER, extra))


_LANGUAGE_PROFILES: dict[Language, LanguageProfile] = {
    Language.THAI: LanguageProfile(
        code=Language.THAI,
        name="Thai",
        alphabet=LetterSetAlphabet(char_range(0x0E00, 0x0E4E)),
        segmentation=Segmentation.CHARACTER,
    ),
    Language.INDONESIAN: LanguageProfile(
        code=Language.INDONESIAN,
        name="Indonesian",
        alphabet=BlockAlphabet("Basic_Latin"),
    ),
    Language.SPANISH: LanguageProfile(
        code=Language.SPANISH,
        name="Spanish",
        alphabet=_letters("ñáéíóúü"),
    ),
    Language.ESTONIAN: LanguageProfile(
        code=Language.ESTONIAN,
        name="Estonian",
        alphabet=LetterSetAlphabet(frozenset("abdeghijklmnoprstuvõäöü")),
    ),
    Language.RUSSIAN: LanguageProfile(
        code=Language.RUSSIAN,
        name="Russian",
        alphabet=ScriptAlphabet("Cyrillic"),
    ),
    Language.ARABIC: LanguageProfile(
        code=Language.ARABIC,
        name="Arabic",
        alphabet=ScriptAlphabet("Arabic"),
    ),
    Language.LATIN: LanguageProfile(
        code=Language.LATIN,
        name="Latin",
        alphabet=BlockAlphabet("Basic_Latin"),
    ),
    Language.PERSIAN: LanguageProfile(
        code=Language.PERSIAN,
        name="Persian",
        alphabet=ScriptAlphabet("Arabic"),
    ),
    Language.CHINESE: LanguageProfile(
        code=Language.CHINESE,
        name="Chinese",
        alphabet=ScriptAlphabet("Han"),
        segmentation=Segmentation.CHARACTER,
    ),
    Language.JAPANESE: LanguageProfile(
        code=Language.JAPANESE,
        name="Japanese",
        alphabet=ScriptAlphabet("Hiragana", "Katakana", "Han"),
        segmentation=Segmentation.CHARACTER,
    ),
    Language.KOREAN: LanguageProfile(
        code=Language.KOREAN,
        name="Korean",
        alphabet=ScriptAlphabet("Hangul", "Han"),
        segmentation=Segmentation.CHARACTER,
    ),
    Language.HINDI: LanguageProfile(
        code=Language.HINDI,
        name="Hindi",
        alphabet=LetterSetAlphabet(
            char_range(0x0900, 0x097F) | char_range(0xA8E0, 0xA8FF) | char_range(0x1CD0, 0x1CFF)
        ),
    ),
    Language.FRENCH: LanguageProfile(
        code=Language.FRENCH,
        name="French",
        alphabet=_letters("çéâêîôûàèìòùëïüœ"),
    ),
    Language.TURKISH: LanguageProfile(
        code=Language.TURKISH,
        name="Turkish",
        alphabet=_letters("çğıöşü"),
    ),
    Language.ENGLISH: LanguageProfile(
        code=Language.ENGLISH,
        name="English",
        alphabet=_letters(),
    ),
    Language.TAMIL: LanguageProfile(
        code=Language.TAMIL,
        name="Tamil",
        alphabet=LetterSetAlphabet(char_range(0x0B80, 0x0BFF) | char_range(0x11FC0, 0x11FFF)),
    ),
    Language.ROMANIAN: LanguageProfile(
        code=Language.ROMANIAN,
        name="Romanian",
        # Comma-below and legacy cedilla forms both occur in real text.
        alphabet=_letters("ăâîșțşţ"),
    ),
    Language.DUTCH: LanguageProfile(
        code=Language.DUTCH,
        name="Dutch",
        alphabet=_letters("áéíóúàèëïöüĳ"),
    ),
    Language.PORTUGUESE: LanguageProfile(
        code=Language.PORTUGUESE,
        name="Portuguese",
        alphabet=_letters("áéíóúçâêôãõàèìòù"),
    ),
    Language.PUSHTO: LanguageProfile(
        code=Language.PUSHTO,
        name="Pushto",
        alphabet=LetterSetAlphabet(_PUSHTO_LETTERS),
    ),
    Language.SWEDISH: LanguageProfile(
        code=Language.SWEDISH,
        name="Swedish",
        alphabet=_letters("åäöé"),
    ),
    Language.URDU: LanguageProfile(
        code=Language.URDU,
        name="Urdu",
        alphabet=LetterSetAlphabet(char_range(0x0627, 0x06D2)),
    ),
}

_LANGUAGE_ALIASES: dict[str, Language] = {
    "th": Language.THAI,
    "id": Language.INDONESIAN,
    "es": Language.SPANISH,
    "et": Language.ESTONIAN,
    "ru": Language.RUSSIAN,
    "ar": Language.ARABIC,
    "la": Language.LATIN,
    "fa": Language.PERSIAN,
    "farsi": Language.PERSIAN,
    "zh": Language.CHINESE,
    "ja": Language.JAPANESE,
    "ko": Language.KOREAN,
    "hi": Language.HINDI,
    "fr": Language.FRENCH,
    "tr": Language.TURKISH,
    "en": Language.ENGLISH,
    "ta": Language.TAMIL,
    "ro": Language.ROMANIAN,
    "nl": Language.DUTCH,
    "pt": Language.PORTUGUESE,
    # Spelling used by the widely shared Kaggle language-detection dataset.
    "portugese": Language.PORTUGUESE,
    "ps": Language.PUSHTO,
    "pashto": Language.PUSHTO,
    "sv": Language.SWEDISH,
    "ur": Language.URDU,
}


def language_for_name(name: Optional[str]) -> Optional[Language]:
    """Resolve a dataset label to a Language. Unknown labels resolve to None."""
    raw = str(name or "").strip().lower()
    if not raw:
        return None
    try:
        return Language(raw)
    except ValueError:
        return _LANGUAGE_ALIASES.get(raw)


def is_supported_language(name: Optional[str]) -> bool:
    return language_for_name(name) is not None


def supported_languages() -> tuple[Language, ...]:
    return tuple(Language)


def get_language_profile(language: Language) -> LanguageProfile:
    return _LANGUAGE_PROFILES[Language(language)]
