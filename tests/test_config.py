"""Tests for moderation configuration loading."""

import dataclasses
import re

import pytest
import yaml

from automod.moderation.config import (
    DEFAULT_BANNED_TERMS,
    DEFAULT_CONFIG,
    DEFAULT_SPAM_INDICATORS,
    ConfigurationError,
    config_to_dict,
    load_config,
    validate_config,
)
from automod.moderation.engine import ContentModerator
from automod.moderation.models import SpamLevel
from automod.moderation.spam import check_spam


def _write_yaml(tmp_path, data) -> str:
    path = tmp_path / "moderation.yaml"
    path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")
    return str(path)


def test_defaults_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_CONFIG.banned_terms = ()
    assert isinstance(DEFAULT_CONFIG.banned_terms, tuple)


def test_banned_terms_override(tmp_path):
    config = load_config(_write_yaml(tmp_path, {"banned_terms": ["Spoiler", " leak "]}))
    assert config.banned_terms == ("spoiler", "leak")
    assert config.spam_indicators == DEFAULT_SPAM_INDICATORS


def test_banned_terms_stored_normalized(tmp_path):
    config = load_config(_write_yaml(tmp_path, {"banned_terms": ["giết", "D.I.T"]}))
    assert config.banned_terms == ("giet", "d i t")

    moderator = ContentModerator(config)
    assert moderator.analyze("tôi sẽ giết nó").profanity.violated_terms == ["giet"]
    assert moderator.analyze("d.i.t").profanity.violated_terms == ["d i t"]


def test_term_without_letters_rejected():
    issues = validate_config({"banned_terms": ["...", "ok"]})
    assert any("Banned term 1" in issue for issue in issues)


def test_custom_spam_indicators(tmp_path):
    data = {
        "spam_indicators": [
            {
                "pattern": r"\bpromo\b",
                "weight": 25,
                "description": "promo code",
                "ignore_case": True,
            }
        ]
    }
    config = load_config(_write_yaml(tmp_path, data))
    assert config.banned_terms == DEFAULT_BANNED_TERMS
    assert config.spam_indicators[0].pattern.flags & re.IGNORECASE

    result = check_spam("PROMO promo code today", config.spam_indicators)
    assert result.risk_score == 50
    assert result.spam_level == SpamLevel.MEDIUM


def test_max_content_length(tmp_path):
    config = load_config(_write_yaml(tmp_path, {"max_content_length": 500}))
    assert config.max_content_length == 500


def test_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == DEFAULT_CONFIG


def test_invalid_weight(tmp_path):
    data = {"spam_indicators": [{"pattern": "x", "weight": "lots", "description": "x"}]}
    with pytest.raises(ConfigurationError) as exc:
        load_config(_write_yaml(tmp_path, data))
    assert any("weight" in issue for issue in exc.value.issues)


def test_invalid_pattern():
    issues = validate_config(
        {"spam_indicators": [{"pattern": "([", "weight": 1, "description": "broken"}]}
    )
    assert any("invalid pattern" in issue for issue in issues)


def test_invalid_terms_and_length():
    issues = validate_config({"banned_terms": ["ok", ""], "max_content_length": 0})
    assert any("Banned term 2" in issue for issue in issues)
    assert any("max_content_length" in issue for issue in issues)


def test_top_level_must_be_mapping():
    assert validate_config(["not", "a", "mapping"]) != []


def test_file_not_found():
    with pytest.raises(ConfigurationError) as exc:
        load_config("/nonexistent/moderation.yaml")
    assert "not found" in str(exc.value).lower()


def test_invalid_yaml(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("{{invalid yaml::: [")
    with pytest.raises(ConfigurationError) as exc:
        load_config(path)
    assert "yaml" in str(exc.value).lower()


def test_config_to_dict():
    data = config_to_dict(DEFAULT_CONFIG)
    assert "du" in data["banned_terms"]
    apps = next(i for i in data["spam_indicators"] if i["description"] == "messaging app")
    assert apps["weight"] == 12
    assert apps["ignore_case"] is True
    assert validate_config(data) == []
