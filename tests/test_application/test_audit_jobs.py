"""Tests for audit dispatch - scheduler queue and the event log job"""
import logging
from unittest.mock import MagicMock

from prm.application import scheduler as scheduler_module
from prm.application.audit import SchedulerAuditQueue, log_account_audit
from prm.domain.audit_log import AuditLog
from prm.infrastructure.eventlog.repository import EventLogRepository


def _audit_log(account, author, contact):
    return AuditLog.contact_birthday_updated(account.id, author, contact)


class TestSchedulerAuditQueue:
    def test_enqueue_adds_one_shot_job(self, account, author, contact):
        fake_scheduler = MagicMock()
        queue = SchedulerAuditQueue(scheduler=fake_scheduler)
        audit_log = _audit_log(account, author, contact)

        queue.enqueue(audit_log)

        fake_scheduler.add_job.assert_called_once()
        args, kwargs = fake_scheduler.add_job.call_args
        assert args[0] is log_account_audit
        assert kwargs["args"] == [audit_log]
        assert kwargs["name"] == "audit:contact_birthday_updated"

    def test_defaults_to_background_scheduler(self):
        assert SchedulerAuditQueue().scheduler is scheduler_module.scheduler


class TestLogAccountAudit:
    def test_appends_to_event_log(self, db_session, session_factory, account, author, contact):
        audit_log = _audit_log(account, author, contact)

        event_id = log_account_audit(audit_log, session_factory=session_factory)

        assert event_id is not None
        events = EventLogRepository(db_session).list_events(
            account.id, event_types=["contact_birthday_updated"],
        )
        assert len(events) == 1
        assert events[0].id == event_id
        assert events[0].actor_user_id == author.id
        assert events[0].payload_json["about_contact_id"] == contact.id
        assert events[0].payload_json["objects"] == audit_log["objects"]

    def test_failure_is_logged_not_raised(self, session_factory, caplog):
        with caplog.at_level(logging.ERROR, logger="prm.application.audit"):
            result = log_account_audit(
                {"action": "contact_birthday_updated", "about_contact_id": 1},
                session_factory=session_factory,
            )
        assert result is None
        assert "Audit log job failed" in caplog.text


class TestScheduler:
    def test_start_registers_reminder_refresh(self, monkeypatch):
        fake_scheduler = MagicMock()
        monkeypatch.setattr(scheduler_module, "scheduler", fake_scheduler)

        scheduler_module.start_scheduler()

        _, kwargs = fake_scheduler.add_job.call_args
        assert kwargs["id"] == "reminder_refresh"
        fake_scheduler.start.assert_called_once()

    def test_shutdown_only_when_running(self, monkeypatch):
        fake_scheduler = MagicMock(running=False)
        monkeypatch.setattr(scheduler_module, "scheduler", fake_scheduler)

        scheduler_module.shutdown_scheduler()

        fake_scheduler.shutdown.assert_not_called()
