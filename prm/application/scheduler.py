"""
Background scheduler: runs audit jobs and periodic maintenance out of band.

Jobs:
  - Audit events (one-shot, enqueued by SchedulerAuditQueue)
  - Reminder refresh (daily 00:05 UTC): roll next_expected_date forward
"""
import logging

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

logger = logging.getLogger(__name__)

scheduler = BackgroundScheduler(daemon=True)


def _run_reminder_refresh():
    from prm.infrastructure.db.session import get_session_factory
    from prm.application.reminders import refresh_next_expected_dates
    from prm.utils.dates import local_today

    Session = get_session_factory()
    db = Session()
    try:
        refresh_next_expected_dates(db, local_today())
    except Exception:
        logger.exception("Reminder refresh job failed")
    finally:
        db.close()


def start_scheduler():
    """Start the background scheduler with periodic jobs."""
    scheduler.add_job(
        _run_reminder_refresh,
        CronTrigger(hour=0, minute=5),
        id="reminder_refresh",
        replace_existing=True,
    )

    scheduler.start()
    logger.info("Scheduler started: audit jobs (on demand), reminder_refresh (00:05 UTC)")


def shutdown_scheduler(wait: bool = True):
    """Stop the scheduler; by default waits for queued audit jobs to finish."""
    if scheduler.running:
        scheduler.shutdown(wait=wait)
        logger.info("Scheduler stopped")
