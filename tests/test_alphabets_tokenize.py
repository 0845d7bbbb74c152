from __future__ import annotations

import pytest

from vocabulary_lid.alphabets import (
    Alphabet,
    BlockAlphabet,
    LetterSetAlphabet,
    ScriptAlphabet,
    char_range,
)
from vocabulary_lid.languages import (
    Language,
    Segmentation,
    get_language_profile,
    language_for_name,
    supported_languages,
)
from vocabulary_lid.tokenize import normalize_sample, normalize_word, split_words


def test_letter_set_alphabet() -> None:
    a = LetterSetAlphabet(char_range(ord("a"), ord("z")))
    assert a.may_contain("a")
    assert a.may_contain("z")
    assert not a.may_contain("é")
    assert a.may_contain_word("don't")
    assert not a.may_contain_word("naïve")
    assert not a.may_contain_word("'")


def test_script_alphabet() -> None:
    cyr = ScriptAlphabet("Cyrillic")
    assert cyr.may_contain_word("привет")
    assert not cyr.may_contain_word("hello")

    ja = ScriptAlphabet("Hiragana", "Katakana", "Han")
    assert ja.may_contain("ひ")
    assert ja.may_contain("カ")
    assert ja.may_contain("漢")
    assert not ja.may_contain("a")

    with pytest.raises(ValueError):
        ScriptAlphabet()


def test_block_alphabet() -> None:
    basic = BlockAlphabet("Basic_Latin")
    assert basic.may_contain("a")
    assert not basic.may_contain("é")
    assert not basic.may_contain("ж")


def test_language_registry() -> None:
    assert len(supported_languages()) == 22
    assert language_for_name("English") == Language.ENGLISH
    assert language_for_name(" en ") == Language.ENGLISH
    assert language_for_name("Portugese") == Language.PORTUGUESE
    assert language_for_name("klingon") is None
    assert language_for_name("") is None
    for lang in (Language.CHINESE, Language.JAPANESE, Language.KOREAN, Language.THAI):
        assert get_language_profile(lang).segmentation == Segmentation.CHARACTER
    assert get_language_profile(Language.ENGLISH).segmentation == Segmentation.WHITESPACE


def test_split_words_whitespace_policy() -> None:
    assert split_words("Hello,  World!", Language.ENGLISH) == ["hello", "world"]
    assert split_words("well-known fact", Language.ENGLISH) == ["well", "known", "fact"]
    assert split_words("'quoted' don't", Language.ENGLISH) == ["quoted", "don't"]
    assert split_words("", Language.ENGLISH) == []
    assert split_words("   ", Language.ENGLISH) == []


def test_split_words_filters_through_alphabet() -> None:
    assert split_words("café au lait", Language.ENGLISH) == ["au", "lait"]
    assert split_words("café au lait", Language.FRENCH) == ["café", "au", "lait"]
    assert split_words("Привет, мир", Language.RUSSIAN) == ["привет", "мир"]
    assert split_words("Привет, мир", Language.ENGLISH) == []
    assert split_words("İstanbul", Language.TURKISH) == ["istanbul"]


def test_split_words_min_word_length() -> None:
    assert split_words("a cat", Language.ENGLISH) == ["a", "cat"]
    assert split_words("a cat", Language.ENGLISH, min_word_length=2) == ["cat"]


def test_split_words_character_policy() -> None:
    assert split_words("你好 world", Language.CHINESE) == ["你", "好"]
    assert split_words("ひらがなと漢字", Language.JAPANESE) == ["ひ", "ら", "が", "な", "と", "漢", "字"]
    # Thai vowel marks are not letters; consonants become single-character tokens.
    toks = split_words("สวัสดี", Language.THAI)
    assert toks == ["ส", "ว", "ส", "ด"]
    assert split_words("สวัสดี", Language.ENGLISH) == []


def test_han_glyphs_are_shared_between_languages() -> None:
    assert split_words("漢字", Language.CHINESE) == split_words("漢字", Language.JAPANESE)


def test_normalize_sample() -> None:
    assert normalize_sample("cafe\u0301") == "caf\u00e9"
    assert normalize_sample("a\u200bb") == "ab"
    assert normalize_sample("") == ""
    assert split_words("cafe\u0301", Language.FRENCH) == ["caf\u00e9"]


def test_alphabet_contract_is_abstract() -> None:
    with pytest.raises(TypeError):
        Alphabet()  # type: ignore[abstract]


def test_normalize_word() -> None:
    assert normalize_word("  Hello ") == "hello"
    assert normalize_word("'Quoted'") == "quoted"
    assert normalize_word("İzmir") == "izmir"
    assert normalize_word("   ") == ""
