"""
Birthday reminders - yearly reminder attached to a contact's special date.

The old reminder is always removed before the special date it points at is
deleted; a new one is only created for dates with a known month and day.
"""
import logging
from datetime import date

from sqlalchemy import or_
from sqlalchemy.orm import Session

from prm.config import get_settings
from prm.domain.recurrence import FREQUENCY_TYPES, next_occurrence, yearly_rule
from prm.infrastructure.db.models import ContactModel, ReminderModel, SpecialDateModel

logger = logging.getLogger(__name__)

BIRTHDAY_FREQUENCY_TYPE = "year"
BIRTHDAY_FREQUENCY_NUMBER = 1


def compute_next_expected_date(
    reminder: ReminderModel,
    today: date,
    month: int | None = None,
    day: int | None = None,
) -> date:
    """Next occurrence of the reminder on or after today.

    month/day default to the initial date; pass them to keep Feb 29 when the
    initial date had to be clipped.
    """
    rule = yearly_rule(
        month=month or reminder.initial_date.month,
        day=day or reminder.initial_date.day,
        start_date=reminder.initial_date,
        interval=reminder.frequency_number,
    )
    if FREQUENCY_TYPES.get(reminder.frequency_type) != rule.freq:
        raise ValueError(f"unsupported frequency_type: {reminder.frequency_type}")
    return next_occurrence(rule, today)


class ReminderManager:
    def __init__(self, db: Session):
        self.db = db

    def remove_for_contact(self, contact: ContactModel) -> int:
        """Drop the contact's birthday reminder and anything tied to its special date."""
        conditions = []
        if contact.birthday_reminder_id is not None:
            conditions.append(ReminderModel.id == contact.birthday_reminder_id)
        if contact.birthday_special_date_id is not None:
            conditions.append(ReminderModel.special_date_id == contact.birthday_special_date_id)
        if not conditions:
            return 0

        deleted = self.db.query(ReminderModel).filter(
            ReminderModel.account_id == contact.account_id,
            or_(*conditions),
        ).delete(synchronize_session=False)
        self.db.flush()
        return deleted

    def create_birthday_reminder(
        self,
        contact: ContactModel,
        special_date: SpecialDateModel,
        today: date,
    ) -> ReminderModel | None:
        if special_date.month is None or special_date.day is None:
            logger.info(
                "No birthday reminder for contact %s: special date %s has no month/day",
                contact.id, special_date.id,
            )
            return None

        # Birth date, or this year's month/day when the year is unknown
        initial_date = special_date.to_date(reference_year=today.year)

        reminder = ReminderModel(
            account_id=contact.account_id,
            contact_id=contact.id,
            special_date_id=special_date.id,
            title=get_settings().BIRTHDAY_REMINDER_TITLE.format(name=contact.name),
            frequency_type=BIRTHDAY_FREQUENCY_TYPE,
            frequency_number=BIRTHDAY_FREQUENCY_NUMBER,
            initial_date=initial_date,
        )
        reminder.next_expected_date = compute_next_expected_date(
            reminder, today, month=special_date.month, day=special_date.day,
        )
        self.db.add(reminder)
        self.db.flush()
        return reminder


def refresh_next_expected_dates(db: Session, today: date) -> int:
    """Roll next_expected_date forward for reminders whose date has passed.

    Returns the number of reminders updated.
    """
    stale = db.query(ReminderModel).filter(
        ReminderModel.next_expected_date < today,
    ).all()

    for reminder in stale:
        special_date = None
        if reminder.special_date_id is not None:
            special_date = db.query(SpecialDateModel).filter(
                SpecialDateModel.id == reminder.special_date_id,
            ).first()
        reminder.next_expected_date = compute_next_expected_date(
            reminder,
            today,
            month=special_date.month if special_date else None,
            day=special_date.day if special_date else None,
        )

    db.commit()
    if stale:
        logger.info("Reminder refresh: rolled %d reminder(s) forward", len(stale))
    return len(stale)
