"""Profanity scanner: substring search of normalized text for banned terms."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from automod.moderation.models import ProfanityResult, RiskLevel, ViolationPosition
from automod.moderation.normalizer import normalize_text

logger = logging.getLogger(__name__)

# Severity is driven purely by how many distinct terms were found.
MEDIUM_RISK_SCORE = 50
HIGH_RISK_SCORE = 80
CRITICAL_RISK_SCORE = 100
HIGH_SEVERITY_MIN_TERMS = 2
CRITICAL_SEVERITY_MIN_TERMS = 4


def severity_for(total_violations: int) -> tuple[RiskLevel, int]:
    """Map a violation count to ``(severity, risk_score)``."""
    if total_violations >= CRITICAL_SEVERITY_MIN_TERMS:
        return RiskLevel.CRITICAL, CRITICAL_RISK_SCORE
    if total_violations >= HIGH_SEVERITY_MIN_TERMS:
        return RiskLevel.HIGH, HIGH_RISK_SCORE
    if total_violations > 0:
        return RiskLevel.MEDIUM, MEDIUM_RISK_SCORE
    return RiskLevel.LOW, 0


def check_profanity(content: Optional[str], banned_terms: Iterable[str]) -> ProfanityResult:
    """Scan *content* for banned terms.

    Matching is a plain substring search on the normalized text, with no
    word-boundary check, so short terms also match inside longer words.
    Each term counts once, at its first occurrence.
    """
    content = content or ""
    normalized = normalize_text(content)

    violated_terms: list[str] = []
    positions: list[ViolationPosition] = []
    for term in banned_terms:
        needle = term.lower()
        if not needle:
            continue
        offset = normalized.find(needle)
        if offset == -1:
            continue
        violated_terms.append(term)
        positions.append(
            ViolationPosition(
                term=term,
                offset=offset,
                original_text=content[offset : offset + len(term)],
            )
        )

    severity, risk_score = severity_for(len(violated_terms))
    if violated_terms:
        logger.debug("Profanity found: %s (severity=%s)", violated_terms, severity.value)

    return ProfanityResult(
        violated_terms=violated_terms,
        violation_positions=positions,
        severity=severity,
        risk_score=risk_score,
    )
