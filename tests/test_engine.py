"""Tests for the moderation engine facade, outcomes, and reports."""

from datetime import datetime, timezone

from automod.moderation import engine
from automod.moderation.config import ModerationConfiguration
from automod.moderation.engine import ContentModerator, combine_text
from automod.moderation.models import (
    ContentKind,
    ModerationAction,
    ModerationOutcome,
    RiskLevel,
    TrustLevel,
    UserReputationSnapshot,
    UserRole,
)
from automod.moderation.outcome import validate_outcome

CLEAN = "Great movie, really enjoyed the acting!"


def _make_moderator() -> ContentModerator:
    return ContentModerator()


# --- Analysis ---


def test_combine_text():
    assert combine_text("Title", "body") == "Title body"
    assert combine_text(None, "body") == "body"
    assert combine_text("  reply  ") == "reply"
    assert combine_text(None) == ""


def test_thread_analysis_joins_title_and_body():
    analysis = _make_moderator().analyze("Hello", "world")
    assert analysis.kind == ContentKind.THREAD
    assert analysis.content_length == len("Hello world")


def test_reply_analysis():
    analysis = _make_moderator().analyze("  some reply text  ")
    assert analysis.kind == ContentKind.REPLY
    assert analysis.content_length == len("some reply text")


def test_kind_hint_overrides_inference():
    analysis = _make_moderator().analyze(CLEAN, kind="thread")
    assert analysis.kind == ContentKind.THREAD


def test_missing_text_is_low_risk():
    analysis = _make_moderator().analyze(None)
    assert analysis.overall_risk == RiskLevel.LOW
    assert not analysis.profanity.is_violation
    assert not analysis.should_flag


def test_clean_content():
    analysis = _make_moderator().analyze(CLEAN)
    assert analysis.combined_score == 0
    assert analysis.recommendations.action == ModerationAction.APPROVE


def test_analysis_is_deterministic():
    moderator = _make_moderator()
    text = "call 0912345678 now, du ma may!!!"
    assert moderator.analyze(text) == moderator.analyze(text)


def test_single_banned_term_scenario():
    analysis = _make_moderator().analyze("du ma may")
    assert analysis.profanity.total_violations == 1
    assert analysis.profanity.severity == RiskLevel.MEDIUM
    assert analysis.profanity.risk_score == 50


def test_trusted_reply_with_banned_term_rejected():
    moderator = _make_moderator()
    user = UserReputationSnapshot(trust_level=TrustLevel.TRUSTED, posts_count=40)
    analysis = moderator.analyze("This film was du ma may terrible")
    assert analysis.profanity.total_violations == 1
    assert moderator.suggest_action(user, analysis, "reply") == ModerationAction.REJECT


def test_injected_configuration():
    config = ModerationConfiguration(banned_terms=("spoiler",), spam_indicators=())
    analysis = ContentModerator(config).analyze("huge spoiler ahead in this thread")
    assert analysis.profanity.violated_terms == ["spoiler"]
    assert analysis.spam.risk_score == 0


def test_module_level_helpers_use_defaults():
    analysis = engine.analyze(CLEAN)
    assert analysis.overall_risk == RiskLevel.LOW
    admin = UserReputationSnapshot(role=UserRole.ADMIN)
    assert engine.suggest_action(admin, engine.analyze("du ma may")) == ModerationAction.APPROVE
    assert engine.sanitize("call 0912345678 today") == "call [PHONE_REMOVED] today"


# --- Reports ---


def test_build_report():
    moderator = _make_moderator()
    analysis = moderator.analyze("du ma may")
    stamp = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    report = moderator.build_report(analysis, stamp)

    assert report["summary"] == {
        "overall_risk": "high",
        "action": "review",
        "confidence": "high",
        "total_score": 65,
    }
    assert report["profanity_details"]["violated_terms"] == ["du"]
    assert report["spam_details"]["indicators"] == ["too short"]
    assert report["recommendations"]["action"] == "review"
    assert report["metadata"] == {
        "analyzed_at": "2024-05-01T12:00:00+00:00",
        "content_length": 9,
        "content_kind": "reply",
    }


def test_report_timestamp_defaults_to_now():
    report = engine.build_report(engine.analyze(CLEAN))
    assert report["metadata"]["analyzed_at"].endswith("+00:00")


# --- Decisions ---


def test_new_user_thread_pending():
    user = UserReputationSnapshot()
    analysis, outcome = _make_moderator().decide(user, "My first thread", CLEAN)
    assert analysis.kind == ContentKind.THREAD
    assert outcome.status == "pending"
    assert not outcome.auto_approved
    assert outcome.note.startswith("Needs review: new user (0 posts)")
    assert validate_outcome(outcome) == []


def test_admin_thread_approved():
    user = UserReputationSnapshot(role=UserRole.ADMIN)
    _, outcome = _make_moderator().decide(user, "Announcement", CLEAN)
    assert outcome.is_approved
    assert outcome.auto_approval_reason == "admin"


def test_trusted_thread_approved():
    user = UserReputationSnapshot(trust_level=TrustLevel.TRUSTED, posts_count=30)
    _, outcome = _make_moderator().decide(user, "Review", CLEAN)
    assert outcome.status == "approved"
    assert outcome.auto_approval_reason == "trusted_user"
    assert validate_outcome(outcome) == []


def test_clean_reply_approved():
    user = UserReputationSnapshot(trust_level=TrustLevel.BASIC, posts_count=8)
    _, outcome = _make_moderator().decide(user, CLEAN)
    assert outcome.status == "approved"
    assert outcome.auto_approval_reason == "content_safe"


def test_reply_with_profanity_rejected():
    user = UserReputationSnapshot(trust_level=TrustLevel.BASIC, posts_count=8)
    _, outcome = _make_moderator().decide(user, "This film was du ma may terrible")
    assert outcome.status == "rejected"
    assert not outcome.auto_approved
    assert outcome.note == "Auto-rejected: contains 1 banned term(s)"
    assert validate_outcome(outcome) == []


def test_validate_outcome_flags_inconsistency():
    outcome = ModerationOutcome(
        action=ModerationAction.REJECT,
        status="approved",
        auto_approved=True,
    )
    errors = validate_outcome(outcome)
    assert any("does not match" in e for e in errors)


def test_snapshot_from_forum_user_document():
    user = UserReputationSnapshot.from_mapping(
        {
            "role": "user",
            "trustLevel": "trusted",
            "autoApprovalEnabled": False,
            "forumStats": {"postsCount": 12, "reportsReceived": 1, "likesReceived": 7},
        }
    )
    assert user.trust_level == TrustLevel.TRUSTED
    assert user.posts_count == 12
    assert user.reports_received == 1
    assert user.likes_received == 7


def test_snapshot_defaults_for_unknown_values():
    user = UserReputationSnapshot.from_mapping({"role": "owner", "trustLevel": "admin"})
    assert user.role == UserRole.USER
    assert user.trust_level == TrustLevel.NEW
    assert user.posts_count == 0
