"""Stored moderation fields derived from a policy decision.

Callers persist ``status``, ``auto_approved``, ``auto_approval_reason`` and
``note`` next to the thread or reply so moderators can see why it landed
where it did.
"""

from __future__ import annotations

from automod.moderation.models import (
    ContentAnalysis,
    ContentKind,
    ModerationAction,
    ModerationOutcome,
    RiskLevel,
    TrustLevel,
    UserReputationSnapshot,
    UserRole,
)
from automod.moderation.policy import NEW_USER_MAX_POSTS, has_bad_reputation

_STATUSES = {
    ModerationAction.APPROVE: "approved",
    ModerationAction.REVIEW: "pending",
    ModerationAction.REJECT: "rejected",
}


def build_outcome(
    user: UserReputationSnapshot,
    analysis: ContentAnalysis,
    action: ModerationAction,
) -> ModerationOutcome:
    """Describe *action* the way the moderation queue shows it."""
    risk = analysis.overall_risk.value
    score = f"{analysis.combined_score}/100"

    if action == ModerationAction.REJECT:
        if analysis.should_reject:
            note = f"Auto-rejected: {analysis.recommendations.reason}"
        elif has_bad_reputation(user):
            note = f"Auto-rejected: author has {user.reports_received} reports"
        elif analysis.profanity.is_violation:
            note = f"Auto-rejected: contains {analysis.profanity.total_violations} banned term(s)"
        else:
            note = f"Auto-rejected: risk: {risk} ({score})"
        return ModerationOutcome(action=action, status=_STATUSES[action], note=note)

    if action == ModerationAction.APPROVE:
        if user.role in (UserRole.ADMIN, UserRole.MODERATOR):
            reason = user.role.value
            note = f"Auto-approved: {user.role.value} privileges"
        elif analysis.kind == ContentKind.THREAD and (
            user.trust_level == TrustLevel.TRUSTED or user.auto_approval_enabled
        ):
            reason = "trusted_user"
            note = "Auto-approved: trusted user with safe content"
        else:
            reason = "content_safe"
            note = f"Auto-approved: safe content - risk: {risk} ({score})"
        return ModerationOutcome(
            action=action,
            status=_STATUSES[action],
            auto_approved=True,
            auto_approval_reason=reason,
            note=note,
        )

    if has_bad_reputation(user):
        note = f"Needs review: author has {user.reports_received} reports - risk: {risk} ({score})"
    elif user.posts_count < NEW_USER_MAX_POSTS:
        note = f"Needs review: new user ({user.posts_count} posts) - risk: {risk} ({score})"
    elif analysis.overall_risk != RiskLevel.LOW:
        note = f"Needs review: {risk} risk content ({score}) - {analysis.recommendations.reason}"
    else:
        note = f"Needs review: user not yet trusted - risk: {risk} ({score})"
    return ModerationOutcome(action=action, status=_STATUSES[action], note=note)


def validate_outcome(outcome: ModerationOutcome) -> list[str]:
    """Check that the stored fields agree with each other. Empty list means consistent."""
    errors: list[str] = []

    expected = _STATUSES.get(outcome.action)
    if outcome.status != expected:
        errors.append(f"status '{outcome.status}' does not match action '{outcome.action.value}'")

    if outcome.auto_approved and not outcome.is_approved:
        errors.append("auto_approved can only be set when status is approved")

    if outcome.auto_approval_reason and not outcome.auto_approved:
        errors.append("auto_approval_reason requires auto_approved")

    if outcome.status == "rejected" and outcome.auto_approved:
        errors.append("rejected content cannot be auto-approved")

    return errors
