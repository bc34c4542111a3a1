"""Data models for the content moderation engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Union


class RiskLevel(Enum):
    """Risk tier, shared by profanity severity and the aggregated verdict."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class SpamLevel(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Confidence(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ModerationAction(Enum):
    """Final verdict attached to a submission."""

    APPROVE = "approve"
    REVIEW = "review"
    REJECT = "reject"


class ContentKind(Enum):
    """Whether a submission is a top-level thread or a reply."""

    THREAD = "thread"
    REPLY = "reply"


class UserRole(Enum):
    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"


class TrustLevel(Enum):
    NEW = "new"
    BASIC = "basic"
    TRUSTED = "trusted"
    MODERATOR = "moderator"


# ---------------------------------------------------------------------------
# Detector results
# ---------------------------------------------------------------------------


@dataclass
class ViolationPosition:
    """Where a banned term was first found."""

    term: str
    offset: int  # offset in the normalized text
    original_text: str = ""  # raw-content slice at the same offset, for highlighting


@dataclass
class ProfanityResult:
    """Outcome of scanning normalized text against the banned-term list."""

    violated_terms: list[str] = field(default_factory=list)
    violation_positions: list[ViolationPosition] = field(default_factory=list)
    severity: RiskLevel = RiskLevel.LOW
    risk_score: int = 0  # 0 | 50 | 80 | 100

    @property
    def total_violations(self) -> int:
        return len(self.violated_terms)

    @property
    def is_violation(self) -> bool:
        return self.total_violations > 0


@dataclass
class SpamDetail:
    """One scored spam signal."""

    type: str
    score: int
    match_count: int = 0
    examples: list[str] = field(default_factory=list)
    details: Union[str, list[str]] = ""


@dataclass
class SpamResult:
    """Outcome of the spam pattern detector."""

    risk_score: int = 0
    spam_level: SpamLevel = SpamLevel.LOW
    indicators: list[str] = field(default_factory=list)
    analysis_details: list[SpamDetail] = field(default_factory=list)
    recommendation: ModerationAction = ModerationAction.APPROVE

    @property
    def is_spam(self) -> bool:
        return self.spam_level != SpamLevel.LOW


# ---------------------------------------------------------------------------
# Aggregated analysis
# ---------------------------------------------------------------------------


@dataclass
class Recommendation:
    action: ModerationAction
    reason: str
    confidence: Confidence
    suggested_actions: list[str] = field(default_factory=list)


@dataclass
class ContentAnalysis:
    """Combined profanity and spam verdict for one submission."""

    profanity: ProfanityResult
    spam: SpamResult
    overall_risk: RiskLevel
    recommendations: Recommendation
    should_reject: bool = False
    should_flag: bool = False
    kind: ContentKind = ContentKind.THREAD
    content_length: int = 0

    @property
    def combined_score(self) -> int:
        return self.profanity.risk_score + self.spam.risk_score


# ---------------------------------------------------------------------------
# Users and decisions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class UserReputationSnapshot:
    """What the policy engine needs to know about the submitting user."""

    role: UserRole = UserRole.USER
    trust_level: TrustLevel = TrustLevel.NEW
    auto_approval_enabled: bool = False
    posts_count: int = 0
    reports_received: int = 0
    likes_received: int = 0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> UserReputationSnapshot:
        """Build a snapshot from a stored user document.

        Accepts both flat keys and the forum's nested ``forumStats`` block
        (camelCase or snake_case). Missing stats count as zero and unknown
        trust levels fall back to ``new``.
        """
        stats = data.get("forumStats") or data.get("forum_stats") or {}

        def _count(*keys: str) -> int:
            for source in (data, stats):
                for key in keys:
                    value = source.get(key)
                    if value is not None:
                        return int(value)
            return 0

        role_value = data.get("role") or "user"
        trust_value = data.get("trustLevel") or data.get("trust_level") or "new"
        try:
            role = UserRole(role_value)
        except ValueError:
            role = UserRole.USER
        try:
            trust_level = TrustLevel(trust_value)
        except ValueError:
            trust_level = TrustLevel.NEW

        return cls(
            role=role,
            trust_level=trust_level,
            auto_approval_enabled=bool(
                data.get("autoApprovalEnabled", data.get("auto_approval_enabled", False))
            ),
            posts_count=_count("postsCount", "posts_count"),
            reports_received=_count("reportsReceived", "reports_received"),
            likes_received=_count("likesReceived", "likes_received"),
        )


@dataclass
class ModerationOutcome:
    """Moderation fields a caller stores alongside a thread or reply."""

    action: ModerationAction
    status: str  # "approved" | "pending" | "rejected"
    auto_approved: bool = False
    auto_approval_reason: Optional[str] = None
    note: str = ""

    @property
    def is_approved(self) -> bool:
        return self.status == "approved"
