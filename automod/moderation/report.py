"""Flat audit summary of a content analysis."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from automod.moderation.models import ContentAnalysis


def build_report(
    analysis: ContentAnalysis, analyzed_at: Optional[datetime] = None
) -> dict[str, Any]:
    """Package *analysis* into a JSON-serializable record for audit logging."""
    analyzed_at = analyzed_at or datetime.now(timezone.utc)
    recommendations = analysis.recommendations

    return {
        "summary": {
            "overall_risk": analysis.overall_risk.value,
            "action": recommendations.action.value,
            "confidence": recommendations.confidence.value,
            "total_score": analysis.combined_score,
        },
        "profanity_details": {
            "violations_found": analysis.profanity.total_violations,
            "severity": analysis.profanity.severity.value,
            "violated_terms": list(analysis.profanity.violated_terms),
        },
        "spam_details": {
            "is_spam": analysis.spam.is_spam,
            "spam_level": analysis.spam.spam_level.value,
            "indicators": list(analysis.spam.indicators),
            "risk_score": analysis.spam.risk_score,
        },
        "recommendations": {
            "action": recommendations.action.value,
            "reason": recommendations.reason,
            "confidence": recommendations.confidence.value,
            "suggested_actions": list(recommendations.suggested_actions),
        },
        "metadata": {
            "analyzed_at": analyzed_at.isoformat(),
            "content_length": analysis.content_length,
            "content_kind": analysis.kind.value,
        },
    }
