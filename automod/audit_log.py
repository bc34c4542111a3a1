"""Audit log of moderation decisions.

File-based JSON audit logging for callers of the engine: each decision is
appended as one line to a daily ``YYYY-MM-DD.jsonl`` file. The engine itself
never writes here; the submission pipeline (or the CLI) does.
"""

from __future__ import annotations

import csv
import io
import json
import logging
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from automod.moderation.models import ModerationOutcome

logger = logging.getLogger(__name__)

_CSV_COLUMNS = (
    "id",
    "timestamp",
    "actor",
    "resource_type",
    "resource_id",
    "action",
    "status",
    "auto_approved",
)


@dataclass
class AuditEntry:
    """A single recorded moderation decision."""

    id: str
    timestamp: str
    actor: str
    resource_type: str  # "thread" | "reply"
    resource_id: str
    action: str  # "approve" | "review" | "reject"
    status: str  # "approved" | "pending" | "rejected"
    note: str = ""
    auto_approved: bool = False
    report: dict[str, Any] = field(default_factory=dict)


class ModerationAuditLog:
    """Append-only JSONL log of moderation decisions."""

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = Path(base_dir) if base_dir else Path.home() / ".automod" / "audit_logs"
        self._base_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _log_file_for_date(self, dt: datetime) -> Path:
        return self._base_dir / f"{dt.strftime('%Y-%m-%d')}.jsonl"

    def _read_all_entries(self) -> list[AuditEntry]:
        entries: list[AuditEntry] = []
        for path in sorted(self._base_dir.glob("*.jsonl")):
            text = path.read_text(encoding="utf-8")
            for number, line in enumerate(text.splitlines(), start=1):
                if not line.strip():
                    continue
                try:
                    entries.append(AuditEntry(**json.loads(line)))
                except (json.JSONDecodeError, TypeError):
                    logger.warning("Skipping malformed audit line %s:%d", path.name, number)
        return entries

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def record(
        self,
        report: dict[str, Any],
        outcome: ModerationOutcome,
        actor: str,
        resource_type: str,
        resource_id: str = "",
    ) -> AuditEntry:
        """Append a decision and return the stored entry."""
        now = datetime.now(timezone.utc)
        entry = AuditEntry(
            id=uuid.uuid4().hex[:16],
            timestamp=now.isoformat(),
            actor=actor,
            resource_type=resource_type,
            resource_id=resource_id,
            action=outcome.action.value,
            status=outcome.status,
            note=outcome.note,
            auto_approved=outcome.auto_approved,
            report=report,
        )
        with self._log_file_for_date(now).open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(asdict(entry), ensure_ascii=False) + "\n")
        return entry

    def get_entries(
        self,
        *,
        status: Optional[str] = None,
        actor: Optional[str] = None,
        resource_type: Optional[str] = None,
        limit: int = 200,
    ) -> list[AuditEntry]:
        """Return filtered entries, newest first."""
        entries = self._read_all_entries()

        if status:
            entries = [e for e in entries if e.status == status]
        if actor:
            entries = [e for e in entries if e.actor == actor]
        if resource_type:
            entries = [e for e in entries if e.resource_type == resource_type]

        entries.sort(key=lambda e: e.timestamp, reverse=True)
        return entries[:limit]

    def export(self, fmt: str = "json", *, status: Optional[str] = None, limit: int = 10000) -> str:
        """Export entries as ``json`` or ``csv`` (csv omits the nested report)."""
        entries = self.get_entries(status=status, limit=limit)

        if fmt == "csv":
            buf = io.StringIO()
            writer = csv.writer(buf, lineterminator="\n")
            writer.writerow(_CSV_COLUMNS)
            for e in entries:
                writer.writerow([getattr(e, column) for column in _CSV_COLUMNS])
            return buf.getvalue().rstrip("\n")

        return json.dumps([asdict(e) for e in entries], indent=2, ensure_ascii=False)
