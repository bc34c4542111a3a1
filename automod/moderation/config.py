"""Moderation configuration: banned terms and weighted spam indicators.

A ``ModerationConfiguration`` is built once at startup, either from the
defaults below or from a YAML file, and then shared read-only by every
moderator instance.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from automod.moderation.normalizer import normalize_text

DEFAULT_MAX_CONTENT_LENGTH = 10_000


class ConfigurationError(ValueError):
    """Raised when a moderation config file cannot be used."""

    def __init__(self, issues: list[str]) -> None:
        self.issues = issues
        super().__init__("; ".join(issues))


@dataclass(frozen=True)
class SpamIndicator:
    """A weighted structural pattern; each match adds ``weight`` to the spam score."""

    pattern: re.Pattern[str]
    weight: int
    description: str

    @classmethod
    def compile(
        cls, pattern: str, weight: int, description: str, ignore_case: bool = False
    ) -> SpamIndicator:
        flags = re.IGNORECASE if ignore_case else 0
        return cls(pattern=re.compile(pattern, flags), weight=weight, description=description)


@dataclass(frozen=True)
class ModerationConfiguration:
    """Immutable, process-wide moderation settings."""

    banned_terms: tuple[str, ...] = field(default_factory=tuple)
    spam_indicators: tuple[SpamIndicator, ...] = field(default_factory=tuple)
    max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

# Stored already normalized (lower-case, no diacritics).
DEFAULT_BANNED_TERMS: tuple[str, ...] = (
    # Vulgarities
    "du",
    "dit",
    "lon",
    "cac",
    "buoi",
    "di",
    "cave",
    "gai goi",
    # Incitement to violence
    "giet",
    "chet di",
    "tu tu",
    "dot",
    "pha hoai",
    "bom",
    "khung bo",
    # Ethnic slurs
    "tau khua",
    "khi den",
    "moi ro",
    "dan toc thieu so",
    # Commercial spam
    "ban hang",
    "kiem tien",
    "lam giau",
    "dau tu",
    "forex",
    "crypto",
    "mlm",
    "ban thuoc",
    "ban duoc",
    "quang cao",
    # Adult content
    "sex",
    "porn",
    "xxx",
    "18+",
    "phim nguoi lon",
)

PHONE_PATTERN = r"\b\d{10,11}\b"
EMAIL_PATTERN = r"\b\w+@\w+\.\w+\b"
LINK_PATTERN = r"\bhttps?://\S+"
SPECIAL_CHARS_PATTERN = r"[!@#$%^&*]{3,}"
REPEATED_CHARS_PATTERN = r"(.)\1{4,}"

DEFAULT_SPAM_INDICATORS: tuple[SpamIndicator, ...] = (
    SpamIndicator.compile(PHONE_PATTERN, 15, "phone number"),
    SpamIndicator.compile(EMAIL_PATTERN, 10, "email address"),
    SpamIndicator.compile(LINK_PATTERN, 20, "link"),
    SpamIndicator.compile(
        r"\b(zalo|telegram|facebook|fb|viber|skype|whatsapp)\b",
        12,
        "messaging app",
        ignore_case=True,
    ),
    SpamIndicator.compile(SPECIAL_CHARS_PATTERN, 8, "special characters"),
    SpamIndicator.compile(REPEATED_CHARS_PATTERN, 5, "repeated characters"),
    SpamIndicator.compile(
        r"\b(mua|bán|giá|tiền|vnđ|usd|buy|sell|price|money)\b",
        7,
        "commercial keyword",
        ignore_case=True,
    ),
)

DEFAULT_CONFIG = ModerationConfiguration(
    banned_terms=DEFAULT_BANNED_TERMS,
    spam_indicators=DEFAULT_SPAM_INDICATORS,
)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def validate_config(data: Any) -> list[str]:
    """Check a parsed config mapping. Returns a list of issues; empty means valid."""
    if data is None:
        return []
    if not isinstance(data, dict):
        return ["Config must be a mapping at the top level"]

    issues: list[str] = []

    terms = data.get("banned_terms")
    if terms is not None:
        if not isinstance(terms, list):
            issues.append("'banned_terms' must be a list of strings")
        else:
            for i, term in enumerate(terms):
                if not isinstance(term, str) or not term.strip():
                    issues.append(f"Banned term {i + 1} must be a non-empty string")
                elif not normalize_text(term).strip():
                    issues.append(f"Banned term {i + 1} has no letters left after normalization")

    indicators = data.get("spam_indicators")
    if indicators is not None:
        if not isinstance(indicators, list):
            issues.append("'spam_indicators' must be a list")
        else:
            for i, entry in enumerate(indicators):
                issues.extend(_validate_indicator(i + 1, entry))

    max_length = data.get("max_content_length")
    if max_length is not None and (
        isinstance(max_length, bool) or not isinstance(max_length, int) or max_length <= 0
    ):
        issues.append("'max_content_length' must be a positive integer")

    return issues


def _validate_indicator(number: int, entry: Any) -> list[str]:
    if not isinstance(entry, dict):
        return [f"Spam indicator {number} must be a mapping"]

    issues: list[str] = []
    pattern = entry.get("pattern")
    if not isinstance(pattern, str) or not pattern:
        issues.append(f"Spam indicator {number} missing 'pattern'")
    else:
        try:
            re.compile(pattern)
        except re.error as e:
            issues.append(f"Spam indicator {number} has an invalid pattern: {e}")

    weight = entry.get("weight")
    if isinstance(weight, bool) or not isinstance(weight, int) or weight < 0:
        issues.append(f"Spam indicator {number} 'weight' must be a non-negative integer")

    if not entry.get("description"):
        issues.append(f"Spam indicator {number} missing 'description'")
    return issues


def config_from_dict(data: dict[str, Any] | None) -> ModerationConfiguration:
    """Build a configuration from a parsed mapping, falling back to defaults per key."""
    issues = validate_config(data)
    if issues:
        raise ConfigurationError(issues)
    data = data or {}

    if "banned_terms" in data:
        # stored in the same form the scanner searches
        banned_terms = tuple(normalize_text(term).strip() for term in data["banned_terms"])
    else:
        banned_terms = DEFAULT_BANNED_TERMS

    if "spam_indicators" in data:
        spam_indicators = tuple(
            SpamIndicator.compile(
                entry["pattern"],
                entry["weight"],
                entry["description"],
                ignore_case=bool(entry.get("ignore_case", False)),
            )
            for entry in data["spam_indicators"]
        )
    else:
        spam_indicators = DEFAULT_SPAM_INDICATORS

    return ModerationConfiguration(
        banned_terms=banned_terms,
        spam_indicators=spam_indicators,
        max_content_length=data.get("max_content_length", DEFAULT_MAX_CONTENT_LENGTH),
    )


def load_config(path: str | Path) -> ModerationConfiguration:
    """Load a moderation configuration from a YAML file."""
    path = Path(path)
    if not path.exists():
        raise ConfigurationError([f"Config file not found: {path}"])

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError([f"Invalid YAML: {e}"]) from e

    return config_from_dict(data)


def config_to_dict(config: ModerationConfiguration) -> dict[str, Any]:
    """Inverse of ``config_from_dict``, for dumping the active settings."""
    return {
        "banned_terms": list(config.banned_terms),
        "spam_indicators": [
            {
                "pattern": indicator.pattern.pattern,
                "weight": indicator.weight,
                "description": indicator.description,
                "ignore_case": bool(indicator.pattern.flags & re.IGNORECASE),
            }
            for indicator in config.spam_indicators
        ],
        "max_content_length": config.max_content_length,
    }
