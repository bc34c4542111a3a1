"""Tests for content sanitization."""

from automod.moderation.config import DEFAULT_BANNED_TERMS
from automod.moderation.sanitizer import sanitize


def _clean(content):
    return sanitize(content, DEFAULT_BANNED_TERMS)


def test_links_removed():
    assert _clean("visit http://spam.example now") == "visit [LINK_REMOVED] now"


def test_phone_numbers_removed():
    assert _clean("call 0912345678 today") == "call [PHONE_REMOVED] today"


def test_emails_removed():
    assert _clean("mail john@mail.com please") == "mail [EMAIL_REMOVED] please"


def test_banned_terms_masked_case_insensitively():
    assert _clean("Stop this LON now") == "Stop this *** now"


def test_long_masks_collapse_to_three_stars():
    # masking runs before special-character collapsing
    assert _clean("buoi") == "***"


def test_banned_terms_match_literally():
    assert _clean("rated 18+ movie") == "rated *** movie"
    assert _clean("rated 188 times") == "rated 188 times"


def test_special_character_runs_collapsed():
    assert _clean("wow!!!!!") == "wow***"


def test_repeated_characters_collapsed():
    assert _clean("soooooo good") == "sooo good"


def test_whitespace_trimmed_and_none_handled():
    assert _clean("  padded  ") == "padded"
    assert _clean(None) == ""


def test_custom_terms():
    assert sanitize("no Spoilers here", ["spoiler"]) == "no ***s here"


def test_phone_removed_before_email():
    assert _clean("0912345678@mail.com") == "[PHONE_REMOVED]@mail.com"
