"""Tests for text normalization."""

from automod.moderation.normalizer import normalize_text


def test_lowercases():
    assert normalize_text("HeLLo") == "hello"


def test_strips_vietnamese_diacritics():
    assert normalize_text("Xin CHÀO bạn") == "xin chao ban"


def test_stacked_diacritics_removed():
    # "giết" carries two combining marks once decomposed
    assert normalize_text("giết") == "giet"


def test_punctuation_becomes_space():
    assert normalize_text("d.i.t") == "d i t"
    assert normalize_text("a,b;c") == "a b c"


def test_whitespace_collapsed_not_trimmed():
    assert normalize_text("hello   world\n\tagain") == "hello world again"
    assert normalize_text("  padded  ") == " padded "


def test_plus_sign_is_kept():
    assert normalize_text("18+ only") == "18+ only"


def test_empty_and_none():
    assert normalize_text("") == ""
    assert normalize_text(None) == ""
