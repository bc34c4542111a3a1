"""Rule-based moderation of forum threads and replies.

Pipeline: normalizer -> profanity scanner and spam detector -> risk
aggregator -> policy engine. The sanitizer and reporter consume the same
intermediate results for storage and auditing.
"""

from automod.moderation.config import (
    DEFAULT_CONFIG,
    ConfigurationError,
    ModerationConfiguration,
    SpamIndicator,
    load_config,
)
from automod.moderation.engine import (
    ContentModerator,
    analyze,
    build_report,
    sanitize,
    suggest_action,
)
from automod.moderation.models import (
    ContentAnalysis,
    ContentKind,
    ModerationAction,
    ModerationOutcome,
    ProfanityResult,
    RiskLevel,
    SpamLevel,
    SpamResult,
    TrustLevel,
    UserReputationSnapshot,
    UserRole,
)

__all__ = [
    "DEFAULT_CONFIG",
    "ConfigurationError",
    "ModerationConfiguration",
    "SpamIndicator",
    "load_config",
    "ContentModerator",
    "analyze",
    "build_report",
    "sanitize",
    "suggest_action",
    "ContentAnalysis",
    "ContentKind",
    "ModerationAction",
    "ModerationOutcome",
    "ProfanityResult",
    "RiskLevel",
    "SpamLevel",
    "SpamResult",
    "TrustLevel",
    "UserReputationSnapshot",
    "UserRole",
]
