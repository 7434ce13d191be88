"""
Audit dispatch - hands audit events to a background job queue.

The use case only enqueues; delivery to the event log happens out of band
in log_account_audit, which owns its session and never raises.
"""
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from sqlalchemy.orm import Session

from prm.infrastructure.db.session import session_scope
from prm.infrastructure.eventlog.repository import EventLogRepository

logger = logging.getLogger(__name__)


class AuditQueue(ABC):
    """Fire-and-forget queue for audit events"""

    @abstractmethod
    def enqueue(self, audit_log: Dict[str, Any]) -> None:
        pass


class SchedulerAuditQueue(AuditQueue):
    """Runs each audit event as a one-shot job on the APScheduler background scheduler."""

    def __init__(self, scheduler=None, session_factory: Optional[Callable[[], Session]] = None):
        if scheduler is None:
            from prm.application.scheduler import scheduler as default_scheduler
            scheduler = default_scheduler
        self.scheduler = scheduler
        self.session_factory = session_factory

    def enqueue(self, audit_log: Dict[str, Any]) -> None:
        # No trigger: the job runs as soon as a worker thread is free
        self.scheduler.add_job(
            log_account_audit,
            args=[audit_log],
            kwargs={"session_factory": self.session_factory},
            name=f"audit:{audit_log['action']}",
            misfire_grace_time=None,
        )


def log_account_audit(
    audit_log: Dict[str, Any],
    session_factory: Optional[Callable[[], Session]] = None,
) -> Optional[int]:
    """
    Job: persist one audit event into the event log

    Returns:
        event_id, or None if delivery failed (failure is logged, not raised)
    """
    try:
        with session_scope(session_factory) as db:
            occurred_at = None
            if audit_log.get("audited_at"):
                occurred_at = datetime.fromisoformat(audit_log["audited_at"])
            event_id = EventLogRepository(db).append_event(
                account_id=audit_log["account_id"],
                event_type=audit_log["action"],
                payload=audit_log,
                occurred_at=occurred_at,
                actor_user_id=audit_log.get("author_id"),
            )
        return event_id
    except Exception:
        logger.exception(
            "Audit log job failed: action=%s contact_id=%s",
            audit_log.get("action"), audit_log.get("about_contact_id"),
        )
        return None
