"""Redaction of banned terms and contact details before storage or display."""

from __future__ import annotations

import re
from typing import Iterable, Optional

from automod.moderation.config import (
    EMAIL_PATTERN,
    LINK_PATTERN,
    PHONE_PATTERN,
    REPEATED_CHARS_PATTERN,
    SPECIAL_CHARS_PATTERN,
)

LINK_TOKEN = "[LINK_REMOVED]"
PHONE_TOKEN = "[PHONE_REMOVED]"
EMAIL_TOKEN = "[EMAIL_REMOVED]"

_LINK = re.compile(LINK_PATTERN)
_PHONE = re.compile(PHONE_PATTERN)
_EMAIL = re.compile(EMAIL_PATTERN)
_SPECIAL_CHARS = re.compile(SPECIAL_CHARS_PATTERN)
_REPEATED_CHARS = re.compile(REPEATED_CHARS_PATTERN)


def sanitize(content: Optional[str], banned_terms: Iterable[str]) -> str:
    """Return *content* with violations masked.

    The order matters and is fixed: banned terms, links, phone numbers,
    emails, special-character runs, then repeated characters. Masks from
    the first step are themselves collapsed by the special-character step.
    """
    cleaned = content or ""

    for term in banned_terms:
        if not term:
            continue
        cleaned = re.sub(re.escape(term), "*" * len(term), cleaned, flags=re.IGNORECASE)

    cleaned = _LINK.sub(LINK_TOKEN, cleaned)
    cleaned = _PHONE.sub(PHONE_TOKEN, cleaned)
    cleaned = _EMAIL.sub(EMAIL_TOKEN, cleaned)
    cleaned = _SPECIAL_CHARS.sub("***", cleaned)
    cleaned = _REPEATED_CHARS.sub(r"\1\1\1", cleaned)

    return cleaned.strip()
