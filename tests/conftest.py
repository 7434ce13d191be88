"""
Pytest fixtures for testing
"""
from datetime import date

import pytest
from sqlalchemy import create_engine, JSON
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.dialects.postgresql import JSONB

from prm.application.audit import AuditQueue
from prm.infrastructure.db.session import Base
from prm.infrastructure.db.models import AccountModel, ContactModel, User


class RecordingAuditQueue(AuditQueue):
    """Test double: keeps enqueued audit events instead of scheduling them."""

    def __init__(self):
        self.pushed = []

    def enqueue(self, audit_log):
        self.pushed.append(audit_log)


@pytest.fixture
def db_engine():
    """Create in-memory SQLite engine for tests, with JSONB→JSON mapping."""
    engine = create_engine("sqlite:///:memory:")

    # SQLite doesn't support JSONB: remap to JSON for tests
    for table in Base.metadata.tables.values():
        for col in table.columns:
            if isinstance(col.type, JSONB):
                col.type = JSON()
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(bind=db_engine)


@pytest.fixture
def db_session(session_factory) -> Session:
    """Create database session for tests"""
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def today():
    return date(2026, 10, 18)


@pytest.fixture
def account(db_session):
    acc = AccountModel()
    db_session.add(acc)
    db_session.commit()
    return acc


@pytest.fixture
def other_account(db_session):
    acc = AccountModel()
    db_session.add(acc)
    db_session.commit()
    return acc


@pytest.fixture
def author(db_session, account):
    user = User(
        account_id=account.id,
        email="anna@example.com",
        first_name="Анна",
        last_name="Смирнова",
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def contact(db_session, account):
    c = ContactModel(account_id=account.id, first_name="Иван", last_name="Петров")
    db_session.add(c)
    db_session.commit()
    return c


@pytest.fixture
def audit_queue():
    return RecordingAuditQueue()
