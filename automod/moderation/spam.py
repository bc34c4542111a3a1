"""Spam pattern detector: weighted regex indicators plus structural heuristics."""

from __future__ import annotations

import logging
import re
from collections import Counter
from typing import Iterable, Optional

from automod.moderation.config import SpamIndicator
from automod.moderation.models import ModerationAction, SpamDetail, SpamLevel, SpamResult

logger = logging.getLogger(__name__)

MEDIUM_SPAM_THRESHOLD = 30  # score strictly above -> medium / review
HIGH_SPAM_THRESHOLD = 50  # score strictly above -> high / reject

MIN_CONTENT_LENGTH = 10
SHORT_CONTENT_SCORE = 15

CAPS_RATIO_THRESHOLD = 0.7
EXCESSIVE_CAPS_SCORE = 20

REPEATED_WORD_MIN_LENGTH = 4
REPEATED_WORD_MIN_COUNT = 4
REPEATED_WORD_SCORE = 10

MAX_EXAMPLES = 3

_UPPERCASE = re.compile(r"[A-Z]")


def check_spam(content: Optional[str], indicators: Iterable[SpamIndicator]) -> SpamResult:
    """Score raw *content* for spam.

    Every configured indicator contributes ``matches * weight``; the length,
    caps and keyword-repetition heuristics are added on top.
    """
    content = content or ""
    result = SpamResult()

    for indicator in indicators:
        matches = [m.group(0) for m in indicator.pattern.finditer(content)]
        if not matches:
            continue
        score = len(matches) * indicator.weight
        _add(
            result,
            indicator.description,
            SpamDetail(
                type=indicator.description,
                score=score,
                match_count=len(matches),
                examples=matches[:MAX_EXAMPLES],
            ),
        )

    length = len(content)
    if length < MIN_CONTENT_LENGTH:
        _add(
            result,
            "too short",
            SpamDetail(
                type="short_content",
                score=SHORT_CONTENT_SCORE,
                details=f"Length: {length} characters",
            ),
        )

    if length > MIN_CONTENT_LENGTH:
        caps_ratio = len(_UPPERCASE.findall(content)) / length
        if caps_ratio > CAPS_RATIO_THRESHOLD:
            _add(
                result,
                "excessive caps",
                SpamDetail(
                    type="excessive_caps",
                    score=EXCESSIVE_CAPS_SCORE,
                    details=f"Uppercase ratio: {caps_ratio * 100:.1f}%",
                ),
            )

    word_counts = Counter(
        word for word in content.lower().split() if len(word) >= REPEATED_WORD_MIN_LENGTH
    )
    repeated = [(w, c) for w, c in word_counts.items() if c >= REPEATED_WORD_MIN_COUNT]
    if repeated:
        _add(
            result,
            "repeated keyword",
            SpamDetail(
                type="repeated_words",
                score=len(repeated) * REPEATED_WORD_SCORE,
                match_count=len(repeated),
                details=[f'"{w}": {c} times' for w, c in repeated],
            ),
        )

    result.spam_level, result.recommendation = classify_spam(result.risk_score)
    logger.debug(
        "Spam check: score=%d level=%s indicators=%s",
        result.risk_score,
        result.spam_level.value,
        result.indicators,
    )
    return result


def classify_spam(risk_score: int) -> tuple[SpamLevel, ModerationAction]:
    """Map a spam score to ``(level, recommendation)``."""
    if risk_score > HIGH_SPAM_THRESHOLD:
        return SpamLevel.HIGH, ModerationAction.REJECT
    if risk_score > MEDIUM_SPAM_THRESHOLD:
        return SpamLevel.MEDIUM, ModerationAction.REVIEW
    return SpamLevel.LOW, ModerationAction.APPROVE


def _add(result: SpamResult, indicator: str, detail: SpamDetail) -> None:
    result.indicators.append(indicator)
    result.analysis_details.append(detail)
    result.risk_score += detail.score
