"""Special date storage - replace semantics for a contact's birthday date"""
from sqlalchemy.orm import Session

from prm.domain.birthday import BirthdayState, UnknownBirthday
from prm.infrastructure.db.models import ContactModel, SpecialDateModel


class SpecialDateStore:
    """
    Delete-then-create: the previous birthday special date is never mutated.

    Callers must remove reminders attached to the old date first
    (ReminderManager.remove_for_contact).
    """

    def __init__(self, db: Session):
        self.db = db

    def delete_for_contact(self, contact: ContactModel) -> None:
        if contact.birthday_special_date_id is None:
            return
        self.db.query(SpecialDateModel).filter(
            SpecialDateModel.id == contact.birthday_special_date_id,
            SpecialDateModel.account_id == contact.account_id,
        ).delete(synchronize_session=False)
        self.db.flush()

    def create(self, account_id: int, contact_id: int, state: BirthdayState) -> SpecialDateModel | None:
        if isinstance(state, UnknownBirthday):
            return None

        special_date = SpecialDateModel(
            account_id=account_id,
            contact_id=contact_id,
            **state.special_date_fields(),
        )
        self.db.add(special_date)
        self.db.flush()
        return special_date
