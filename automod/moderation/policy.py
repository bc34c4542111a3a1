"""Policy engine: turns a content analysis and a user snapshot into an action.

The decision is an ordered rule list: rules shared by every submission run
first, then the list for the submission's ``ContentKind``. Thread and reply
policies are separate functions so each can be exercised on its own.

Replies never end in ``review``: they are approved unless the violation is
clear, in which case they are rejected.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Union

from automod.moderation.models import (
    ContentAnalysis,
    ContentKind,
    ModerationAction,
    RiskLevel,
    TrustLevel,
    UserReputationSnapshot,
    UserRole,
)

logger = logging.getLogger(__name__)

REJECT_SCORE_THRESHOLD = 80

MAX_REPORTS = 3
REPORT_RATIO_MIN_POSTS = 5
MAX_REPORT_RATIO = 0.3

NEW_USER_MAX_POSTS = 5  # below this a user is treated as new
BASIC_USER_MAX_POSTS = 15  # below this (and >= NEW_USER_MAX_POSTS) a user is basic

TRUSTED_THREAD_MAX_SCORE = 20
BASIC_THREAD_MAX_SCORE = 10
REGULAR_THREAD_MAX_SCORE = 15
REPLY_REJECT_SCORE_THRESHOLD = 50

_PRIVILEGED_ROLES = (UserRole.ADMIN, UserRole.MODERATOR)


def has_bad_reputation(user: UserReputationSnapshot) -> bool:
    """True when the user has been reported too often, absolutely or per post."""
    if user.reports_received > MAX_REPORTS:
        return True
    return (
        user.posts_count > REPORT_RATIO_MIN_POSTS
        and user.reports_received > user.posts_count * MAX_REPORT_RATIO
    )


def thread_action(user: UserReputationSnapshot, analysis: ContentAnalysis) -> ModerationAction:
    """Trust tiers for top-level threads. New users never auto-approve."""
    risk = analysis.overall_risk
    score = analysis.combined_score

    if user.trust_level == TrustLevel.TRUSTED or user.auto_approval_enabled:
        if risk == RiskLevel.LOW or score < TRUSTED_THREAD_MAX_SCORE:
            return ModerationAction.APPROVE
        return ModerationAction.REVIEW

    if user.trust_level == TrustLevel.NEW or user.posts_count < NEW_USER_MAX_POSTS:
        return ModerationAction.REVIEW

    if user.trust_level == TrustLevel.BASIC or (
        NEW_USER_MAX_POSTS <= user.posts_count < BASIC_USER_MAX_POSTS
    ):
        if risk == RiskLevel.LOW and score < BASIC_THREAD_MAX_SCORE:
            return ModerationAction.APPROVE
        return ModerationAction.REVIEW

    if risk == RiskLevel.LOW and score < REGULAR_THREAD_MAX_SCORE:
        return ModerationAction.APPROVE
    return ModerationAction.REVIEW


def reply_action(user: UserReputationSnapshot, analysis: ContentAnalysis) -> ModerationAction:
    """Reply policy: approve by default, reject clear violations."""
    if analysis.profanity.is_violation:
        return ModerationAction.REJECT
    if (
        analysis.overall_risk == RiskLevel.HIGH
        or analysis.combined_score > REPLY_REJECT_SCORE_THRESHOLD
    ):
        return ModerationAction.REJECT
    return ModerationAction.APPROVE


_KIND_POLICIES: dict[
    ContentKind, Callable[[UserReputationSnapshot, ContentAnalysis], ModerationAction]
] = {
    ContentKind.THREAD: thread_action,
    ContentKind.REPLY: reply_action,
}


def coerce_kind(kind: Union[ContentKind, str, None]) -> Optional[ContentKind]:
    """Accept an enum or its string value; ``None`` for anything else."""
    if isinstance(kind, ContentKind):
        return kind
    try:
        return ContentKind(kind)
    except ValueError:
        return None


def suggest_action(
    user: UserReputationSnapshot,
    analysis: ContentAnalysis,
    kind: Union[ContentKind, str] = ContentKind.THREAD,
) -> ModerationAction:
    """Decide ``approve``, ``review`` or ``reject`` for a submission."""
    content_kind = coerce_kind(kind)
    label = content_kind.value if content_kind else kind

    if user.role in _PRIVILEGED_ROLES:
        logger.debug("%s approved: %s bypass", label, user.role.value)
        return ModerationAction.APPROVE

    if analysis.should_reject or analysis.combined_score > REJECT_SCORE_THRESHOLD:
        logger.debug("%s rejected: critical content (score=%d)", label, analysis.combined_score)
        return ModerationAction.REJECT

    if has_bad_reputation(user):
        logger.debug(
            "%s held: bad reputation (reports=%d, posts=%d)",
            label,
            user.reports_received,
            user.posts_count,
        )
        if content_kind == ContentKind.REPLY:
            return ModerationAction.REJECT
        return ModerationAction.REVIEW

    policy = _KIND_POLICIES.get(content_kind) if content_kind else None
    if policy is None:
        logger.warning("Unknown content kind %r, sending to review", kind)
        return ModerationAction.REVIEW

    action = policy(user, analysis)
    logger.debug(
        "%s %s: trust=%s risk=%s score=%d",
        label,
        action.value,
        user.trust_level.value,
        analysis.overall_risk.value,
        analysis.combined_score,
    )
    return action
