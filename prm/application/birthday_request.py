"""
Birthday update request - parsing, ownership checks and mode rules.

Modes (when is_date_known is true):
  is_age_based  - age required, 0..MAX_AGE
  date          - day + month required, year optional
When is_date_known is false every date/age/reminder field is ignored.
"""
import logging
from datetime import date

from pydantic import BaseModel, ValidationError, field_validator
from sqlalchemy.orm import Session

from prm.domain.recurrence import last_day_of_month
from prm.infrastructure.db.models import AccountModel, ContactModel, User

logger = logging.getLogger(__name__)

MAX_AGE = 150
LEAP_YEAR = 2000  # used to validate month/day when the year is unknown


class BirthdayValidationError(ValueError):
    pass


class OwnershipMismatch(BirthdayValidationError):
    """Account, author and contact are not linked to each other."""


class UpdateBirthdayRequest(BaseModel):
    account_id: int
    contact_id: int
    author_id: int
    is_date_known: bool
    is_age_based: bool = False
    age: int | None = None
    day: int | None = None
    month: int | None = None
    year: int | None = None
    add_reminder: bool = False

    @field_validator("is_age_based", "add_reminder", mode="before")
    @classmethod
    def none_as_false(cls, v):
        return False if v is None else v


def parse_birthday_request(data: dict) -> UpdateBirthdayRequest:
    """Coerce raw input into a typed request. Raises BirthdayValidationError."""
    try:
        return UpdateBirthdayRequest.model_validate(data)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise BirthdayValidationError(f"Некорректный запрос: {details}") from e


def check_ownership(db: Session, request: UpdateBirthdayRequest) -> None:
    """Account must exist; author and contact must both belong to it."""
    account = db.query(AccountModel).filter(AccountModel.id == request.account_id).first()
    if not account:
        logger.warning("Birthday update rejected: account %s not found", request.account_id)
        raise OwnershipMismatch(f"Аккаунт #{request.account_id} не найден")

    author = db.query(User).filter(User.id == request.author_id).first()
    if not author or author.account_id != request.account_id:
        logger.warning(
            "Birthday update rejected: author %s not in account %s",
            request.author_id, request.account_id,
        )
        raise OwnershipMismatch("Автор не принадлежит аккаунту")

    contact = db.query(ContactModel).filter(ContactModel.id == request.contact_id).first()
    if not contact or contact.account_id != request.account_id:
        logger.warning(
            "Birthday update rejected: contact %s not in account %s",
            request.contact_id, request.account_id,
        )
        raise OwnershipMismatch("Контакт не принадлежит аккаунту")


def validate_birthday_fields(request: UpdateBirthdayRequest, today: date) -> None:
    """Mode-dependent required fields and ranges. Raises BirthdayValidationError."""
    if not request.is_date_known:
        return

    if request.is_age_based:
        if request.age is None:
            raise BirthdayValidationError("Для дня рождения по возрасту обязателен возраст")
        if request.age < 0 or request.age > MAX_AGE:
            raise BirthdayValidationError(f"Возраст должен быть от 0 до {MAX_AGE}")
        return

    if request.day is None or request.month is None:
        raise BirthdayValidationError("Укажите возраст или день и месяц рождения")
    if request.month < 1 or request.month > 12:
        raise BirthdayValidationError("Месяц должен быть от 1 до 12")
    if request.day < 1 or request.day > 31:
        raise BirthdayValidationError("День должен быть от 1 до 31")

    if request.year is None:
        if request.day > last_day_of_month(LEAP_YEAR, request.month):
            raise BirthdayValidationError(f"В месяце {request.month} нет дня {request.day}")
        return

    if request.year < 1:
        raise BirthdayValidationError("Год должен быть положительным")
    if request.year > today.year:
        raise BirthdayValidationError("Дата рождения не может быть в будущем")
    if request.day > last_day_of_month(request.year, request.month):
        raise BirthdayValidationError(
            f"Некорректная дата: {request.year}-{request.month:02d}-{request.day:02d}"
        )
    if date(request.year, request.month, request.day) > today:
        raise BirthdayValidationError("Дата рождения не может быть в будущем")


def validate_birthday_request(db: Session, data: dict, today: date) -> UpdateBirthdayRequest:
    """
    Full validation pipeline for a birthday update

    Args:
        db: SQLAlchemy session (ownership lookups only, no writes)
        data: Raw request mapping
        today: Reference date for future-date checks

    Returns:
        Typed, normalized UpdateBirthdayRequest

    Raises:
        BirthdayValidationError: missing or inconsistent fields
        OwnershipMismatch: account/author/contact are not linked
    """
    request = parse_birthday_request(data)
    check_ownership(db, request)
    validate_birthday_fields(request, today)
    return request
