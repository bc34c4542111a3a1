"""Content moderation engine.

``ContentModerator`` wires the normalizer, detectors, aggregator and policy
engine together behind the four calls a submission pipeline needs:
``analyze``, ``suggest_action``, ``sanitize`` and ``build_report``. It holds
nothing but an immutable configuration, so one instance can be shared across
threads and tasks.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional, Union

from automod.moderation.aggregator import aggregate
from automod.moderation.config import DEFAULT_CONFIG, ModerationConfiguration
from automod.moderation.models import (
    ContentAnalysis,
    ContentKind,
    ModerationAction,
    ModerationOutcome,
    UserReputationSnapshot,
)
from automod.moderation.outcome import build_outcome
from automod.moderation.policy import coerce_kind
from automod.moderation.policy import suggest_action as _suggest_action
from automod.moderation.profanity import check_profanity
from automod.moderation.report import build_report as _build_report
from automod.moderation.sanitizer import sanitize as _sanitize
from automod.moderation.spam import check_spam

logger = logging.getLogger(__name__)


def combine_text(title_or_content: Optional[str], content: Optional[str] = None) -> str:
    """Join a thread's title and body, or trim a reply's body."""
    if content is not None:
        return f"{title_or_content or ''} {content}".strip()
    return (title_or_content or "").strip()


class ContentModerator:
    """Stateless moderator bound to one ``ModerationConfiguration``."""

    def __init__(self, config: Optional[ModerationConfiguration] = None) -> None:
        self._config = config or DEFAULT_CONFIG

    @property
    def config(self) -> ModerationConfiguration:
        return self._config

    # -- analysis ------------------------------------------------------------

    def analyze(
        self,
        title_or_content: Optional[str],
        content: Optional[str] = None,
        kind: Union[ContentKind, str, None] = None,
    ) -> ContentAnalysis:
        """Analyze a submission.

        With *content* given, *title_or_content* is the thread title and both
        are scored together; otherwise it is the reply body. *kind* defaults
        to thread or reply accordingly.
        """
        content_kind = coerce_kind(kind) if kind is not None else None
        if content_kind is None:
            content_kind = ContentKind.THREAD if content is not None else ContentKind.REPLY

        text = combine_text(title_or_content, content)
        profanity = check_profanity(text, self._config.banned_terms)
        spam = check_spam(text, self._config.spam_indicators)
        analysis = aggregate(profanity, spam, kind=content_kind, content_length=len(text))

        logger.debug(
            "Analyzed %s (%d chars): risk=%s score=%d action=%s",
            content_kind.value,
            len(text),
            analysis.overall_risk.value,
            analysis.combined_score,
            analysis.recommendations.action.value,
        )
        return analysis

    def suggest_action(
        self,
        user: UserReputationSnapshot,
        analysis: ContentAnalysis,
        kind: Union[ContentKind, str, None] = None,
    ) -> ModerationAction:
        """Policy decision for *analysis*; *kind* defaults to the analyzed kind."""
        return _suggest_action(user, analysis, kind if kind is not None else analysis.kind)

    def sanitize(self, content: Optional[str]) -> str:
        return _sanitize(content, self._config.banned_terms)

    def build_report(
        self, analysis: ContentAnalysis, analyzed_at: Optional[datetime] = None
    ) -> dict[str, Any]:
        return _build_report(analysis, analyzed_at)

    # -- end to end ----------------------------------------------------------

    def decide(
        self,
        user: UserReputationSnapshot,
        title_or_content: Optional[str],
        content: Optional[str] = None,
        kind: Union[ContentKind, str, None] = None,
    ) -> tuple[ContentAnalysis, ModerationOutcome]:
        """Analyze a submission and return it with the fields to store."""
        analysis = self.analyze(title_or_content, content, kind)
        action = self.suggest_action(user, analysis)
        return analysis, build_outcome(user, analysis, action)


_default_moderator = ContentModerator()


def analyze(
    title_or_content: Optional[str],
    content: Optional[str] = None,
    kind: Union[ContentKind, str, None] = None,
) -> ContentAnalysis:
    """Analyze with the default configuration."""
    return _default_moderator.analyze(title_or_content, content, kind)


def suggest_action(
    user: UserReputationSnapshot,
    analysis: ContentAnalysis,
    kind: Union[ContentKind, str, None] = None,
) -> ModerationAction:
    return _default_moderator.suggest_action(user, analysis, kind)


def sanitize(content: Optional[str]) -> str:
    """Sanitize with the default banned-term list."""
    return _default_moderator.sanitize(content)


def build_report(
    analysis: ContentAnalysis, analyzed_at: Optional[datetime] = None
) -> dict[str, Any]:
    return _default_moderator.build_report(analysis, analyzed_at)
