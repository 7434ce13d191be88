"""
Contacts - birthday links on the contact row.
"""
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from prm.infrastructure.db.models import ContactModel, ReminderModel, SpecialDateModel


class ContactUpdater:
    """Only writer of the contact row during a birthday update."""

    def __init__(self, db: Session):
        self.db = db

    def set_birthday(
        self,
        contact: ContactModel,
        special_date: SpecialDateModel | None,
        reminder: ReminderModel | None,
    ) -> ContactModel:
        # Both links change together, never one without the other
        contact.birthday_special_date_id = special_date.id if special_date else None
        contact.birthday_reminder_id = reminder.id if reminder else None
        contact.updated_at = datetime.now(timezone.utc)
        self.db.flush()
        return contact
