"""
Database session management (SQLAlchemy)

One session per unit of work: use cases receive a Session from the caller,
background jobs open their own via session_scope().
"""
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session

from prm.config import get_settings


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for all ORM models
    """
    pass


_engine: Optional[Engine] = None
_SessionLocal = None


def get_engine() -> Engine:
    """Lazily build the engine from DATABASE_URL (singleton)"""
    global _engine
    if _engine is None:
        settings = get_settings()
        # DEBUG echoes emitted SQL to the sqlalchemy.engine logger
        _engine = create_engine(settings.get_sqlalchemy_url(), pool_pre_ping=True, echo=settings.DEBUG)
    return _engine


def get_session_factory():
    """Lazily build the sessionmaker bound to get_engine() (singleton)"""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(bind=get_engine(), autoflush=False, autocommit=False)
    return _SessionLocal


@contextmanager
def session_scope(session_factory: Optional[Callable[[], Session]] = None) -> Iterator[Session]:
    """
    Transactional scope for code running outside a caller-owned session

    Commits on success, rolls back and re-raises on error, always closes.
    """
    factory = session_factory or get_session_factory()
    db = factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
