"""
SQLAlchemy ORM models (accounts, contacts, special dates, reminders, event log)
"""
from datetime import date as date_type
from sqlalchemy import String, DateTime, Integer, SmallInteger, Text, TIMESTAMP, Date, func, Boolean, Index
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import JSONB

from prm.domain.recurrence import clipped_date
from prm.infrastructure.db.session import Base


class AccountModel(Base):
    """Tenant boundary - owns users and contacts"""
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    created_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )


class User(Base):
    """
    User model - автор изменений внутри аккаунта
    """
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)  # -> accounts
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[DateTime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    @property
    def name(self) -> str:
        full = " ".join(p for p in (self.first_name, self.last_name) if p)
        return full or self.email


class ContactModel(Base):
    """Contact - the person whose birthday is tracked"""
    __tablename__ = "contacts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)  # -> accounts

    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # At most one active birthday special date per contact
    birthday_special_date_id: Mapped[int | None] = mapped_column(Integer, nullable=True)  # -> special_dates
    birthday_reminder_id: Mapped[int | None] = mapped_column(Integer, nullable=True)  # -> reminders

    created_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )

    @property
    def name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)


class SpecialDateModel(Base):
    """
    Calendar occurrence tied to a contact (birthday).

    Modes:
      age-based     - only year is set (derived from age), is_year_unknown=True
      partial       - month+day, is_year_unknown=True
      complete      - day+month+year
    """
    __tablename__ = "special_dates"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)  # -> accounts
    contact_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)  # -> contacts

    is_age_based: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    is_year_unknown: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    day: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)  # 1..31
    month: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)  # 1..12
    year: Mapped[int | None] = mapped_column(Integer, nullable=True)

    created_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )

    # Deleted ids are never handed out again (SQLite reuses the max rowid otherwise)
    __table_args__ = {"sqlite_autoincrement": True}

    def to_date(self, reference_year: int | None = None) -> date_type | None:
        """Calendar date for this special date; Feb 29 is clipped in non-leap years."""
        if self.month is None or self.day is None:
            return None
        year = self.year if self.year is not None and not self.is_year_unknown else reference_year
        if year is None:
            return None
        return clipped_date(year, self.month, self.day)

    def get_age(self, today: date_type) -> int | None:
        """Age in full years, None when the year is not known."""
        if self.year is None:
            return None
        if self.is_age_based or self.month is None or self.day is None:
            return today.year - self.year
        age = today.year - self.year
        if (today.month, today.day) < (self.month, self.day):
            age -= 1
        return age


class ReminderModel(Base):
    """Recurring reminder attached to a special date"""
    __tablename__ = "reminders"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)  # -> accounts
    contact_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)  # -> contacts
    special_date_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)  # -> special_dates

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    frequency_type: Mapped[str] = mapped_column(String(16), nullable=False, server_default="year")  # year
    frequency_number: Mapped[int] = mapped_column(Integer, nullable=False, server_default="1")
    initial_date: Mapped[date_type] = mapped_column(Date, nullable=False)
    next_expected_date: Mapped[date_type | None] = mapped_column(Date, nullable=True)

    created_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        Index('ix_reminders_next_expected', 'account_id', 'next_expected_date'),
        {"sqlite_autoincrement": True},
    )


class EventLog(Base):
    """
    Event log - append-only журнал событий (audit trail)

    Audit jobs deliver their events here; rows are never updated.
    """
    __tablename__ = "event_log"

    id: Mapped[int] = mapped_column(primary_key=True)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    actor_user_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    event_type: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    payload_json: Mapped[dict] = mapped_column(JSONB, nullable=False)  # PostgreSQL JSONB

    occurred_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        index=True
    )
    idempotency_key: Mapped[str | None] = mapped_column(
        String(255),
        unique=True,
        nullable=True
    )
    created_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        nullable=False
    )
