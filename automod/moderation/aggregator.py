"""Risk aggregator: folds profanity and spam results into one verdict."""

from __future__ import annotations

from automod.moderation.models import (
    Confidence,
    ContentAnalysis,
    ContentKind,
    ModerationAction,
    ProfanityResult,
    Recommendation,
    RiskLevel,
    SpamResult,
)

CRITICAL_SCORE_THRESHOLD = 80
HIGH_SCORE_THRESHOLD = 60
MEDIUM_SCORE_THRESHOLD = 30

_REASONS = {
    ModerationAction.REJECT: "Content contains seriously inappropriate language or spam",
    ModerationAction.REVIEW: "Content shows signs of a policy violation and needs review",
    ModerationAction.APPROVE: "Content is acceptable",
}

_SUGGESTED_ACTIONS = {
    ModerationAction.REJECT: ["Reject the post", "Notify the author", "Log the violation"],
    ModerationAction.REVIEW: ["Queue for moderation", "Notify moderators"],
    ModerationAction.APPROVE: ["Approve automatically", "Publish immediately"],
}


def overall_risk_for(profanity: ProfanityResult, combined_score: int) -> RiskLevel:
    """Pick the risk tier; the first matching rule wins."""
    if profanity.severity == RiskLevel.CRITICAL or combined_score > CRITICAL_SCORE_THRESHOLD:
        return RiskLevel.CRITICAL
    if profanity.severity == RiskLevel.HIGH or combined_score > HIGH_SCORE_THRESHOLD:
        return RiskLevel.HIGH
    if profanity.severity == RiskLevel.MEDIUM or combined_score > MEDIUM_SCORE_THRESHOLD:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def confidence_for(combined_score: int) -> Confidence:
    if combined_score > HIGH_SCORE_THRESHOLD:
        return Confidence.HIGH
    if combined_score > MEDIUM_SCORE_THRESHOLD:
        return Confidence.MEDIUM
    return Confidence.LOW


def aggregate(
    profanity: ProfanityResult,
    spam: SpamResult,
    *,
    kind: ContentKind = ContentKind.THREAD,
    content_length: int = 0,
) -> ContentAnalysis:
    """Combine detector outputs into a ``ContentAnalysis``."""
    combined_score = profanity.risk_score + spam.risk_score
    overall_risk = overall_risk_for(profanity, combined_score)

    should_reject = overall_risk == RiskLevel.CRITICAL
    should_flag = overall_risk in (RiskLevel.HIGH, RiskLevel.MEDIUM)

    if should_reject:
        action = ModerationAction.REJECT
    elif should_flag:
        action = ModerationAction.REVIEW
    else:
        action = ModerationAction.APPROVE

    return ContentAnalysis(
        profanity=profanity,
        spam=spam,
        overall_risk=overall_risk,
        recommendations=Recommendation(
            action=action,
            reason=_REASONS[action],
            confidence=confidence_for(combined_score),
            suggested_actions=list(_SUGGESTED_ACTIONS[action]),
        ),
        should_reject=should_reject,
        should_flag=should_flag,
        kind=kind,
        content_length=content_length,
    )
