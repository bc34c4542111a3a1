"""Text normalization applied before banned-term matching."""

from __future__ import annotations

import re
import unicodedata
from typing import Optional

_COMBINING_MARKS = re.compile(r"[\u0300-\u036f]")
_PUNCTUATION = re.compile(r"[.,/#!$%\^&*;:{}=\-_`~()]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: Optional[str]) -> str:
    """Case-fold, strip diacritics, blank out punctuation and collapse whitespace.

    Leading and trailing whitespace is kept (collapsed to a single space) so
    that offsets stay close to the raw text.
    """
    if not text:
        return ""
    folded = unicodedata.normalize("NFD", text.lower())
    folded = _COMBINING_MARKS.sub("", folded)
    folded = _PUNCTUATION.sub(" ", folded)
    return _WHITESPACE.sub(" ", folded)
