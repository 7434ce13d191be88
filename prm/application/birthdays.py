"""
Update birthday information use case.

Pipeline:
  validate request -> resolve birthday state
  -> [remove old reminder -> delete old special date -> create special date
      -> create reminder -> relink contact]  (one unit of work)
  -> commit -> enqueue audit event (fire-and-forget)
"""
import logging
from datetime import date

from sqlalchemy.orm import Session

from prm.application.audit import AuditQueue, SchedulerAuditQueue
from prm.application.birthday_request import (  # noqa: F401  re-exported
    BirthdayValidationError,
    OwnershipMismatch,
    UpdateBirthdayRequest,
    validate_birthday_request,
)
from prm.application.contacts import ContactUpdater
from prm.application.reminders import ReminderManager
from prm.application.special_dates import SpecialDateStore
from prm.domain.audit_log import AuditLog
from prm.domain.birthday import resolve_birthday
from prm.infrastructure.db.models import ContactModel, User
from prm.utils.dates import local_today

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Persistence failed during the mutation phase; nothing was committed."""


class UpdateBirthdayInformationUseCase:
    def __init__(self, db: Session, audit_queue: AuditQueue | None = None):
        self.db = db
        self.audit_queue = audit_queue if audit_queue is not None else SchedulerAuditQueue()
        self.special_dates = SpecialDateStore(db)
        self.reminders = ReminderManager(db)
        self.contacts = ContactUpdater(db)

    def execute(self, data: dict, today: date | None = None) -> ContactModel:
        """
        Replace the contact's birthday information

        Args:
            data: Raw request (account_id, contact_id, author_id, is_date_known,
                  day, month, year, is_age_based, age, add_reminder)
            today: Reference date (default: today in settings.TIMEZONE)

        Returns:
            Updated contact

        Raises:
            BirthdayValidationError: missing/inconsistent fields (no mutation)
            OwnershipMismatch: account/author/contact not linked (no mutation)
            StorageError: persistence fault; the transaction is rolled back
        """
        if today is None:
            today = local_today()

        request = validate_birthday_request(self.db, data, today)
        state = resolve_birthday(request, today)

        try:
            # Row lock serializes concurrent updates of the same contact (PostgreSQL)
            contact = self.db.query(ContactModel).filter(
                ContactModel.id == request.contact_id,
                ContactModel.account_id == request.account_id,
            ).with_for_update().one()

            self.reminders.remove_for_contact(contact)
            self.special_dates.delete_for_contact(contact)

            special_date = self.special_dates.create(request.account_id, contact.id, state)
            reminder = None
            if request.add_reminder and special_date is not None:
                reminder = self.reminders.create_birthday_reminder(contact, special_date, today)

            self.contacts.set_birthday(contact, special_date, reminder)
            self.db.commit()
        except Exception as e:
            # Flushed deletes must not leak into the caller's next commit
            self.db.rollback()
            logger.exception("Birthday update failed for contact_id=%s", request.contact_id)
            raise StorageError(f"Не удалось сохранить день рождения контакта #{request.contact_id}") from e

        logger.info(
            "Birthday updated: contact_id=%s state=%s reminder=%s",
            contact.id, state.kind, contact.birthday_reminder_id is not None,
        )

        self._dispatch_audit(request, contact)
        return contact

    def _dispatch_audit(self, request: UpdateBirthdayRequest, contact: ContactModel) -> None:
        # Audit delivery never fails the operation
        try:
            author = self.db.query(User).filter(User.id == request.author_id).one()
            audit_log = AuditLog.contact_birthday_updated(request.account_id, author, contact)
            self.audit_queue.enqueue(audit_log)
        except Exception:
            logger.exception("Failed to enqueue audit event for contact_id=%s", contact.id)
