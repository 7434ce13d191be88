"""
Event Log Repository - append-only audit trail storage

Rows are immutable: the repository only appends and reads.
"""
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List
from sqlalchemy.orm import Session

from prm.infrastructure.db.models import EventLog


class EventLogRepository:
    """
    Repository для работы с event log
    """

    def __init__(self, db: Session):
        self.db = db

    def append_event(
        self,
        account_id: int,
        event_type: str,
        payload: Dict[str, Any],
        occurred_at: Optional[datetime] = None,
        actor_user_id: Optional[int] = None,
        idempotency_key: Optional[str] = None,
    ) -> int:
        """
        Добавить событие в event log

        Args:
            account_id: ID аккаунта
            event_type: Тип события (например, "contact_birthday_updated")
            payload: Данные события (будут сохранены как JSONB)
            occurred_at: Когда произошло событие (default: now, UTC)
            actor_user_id: Кто совершил действие (опционально)
            idempotency_key: Ключ для идемпотентности (опционально)

        Returns:
            event_id: ID созданного события

        Raises:
            IntegrityError: если idempotency_key уже существует
        """
        if occurred_at is None:
            occurred_at = datetime.now(timezone.utc)

        event = EventLog(
            account_id=account_id,
            actor_user_id=actor_user_id,
            event_type=event_type,
            payload_json=payload,
            occurred_at=occurred_at,
            idempotency_key=idempotency_key,
        )

        self.db.add(event)
        self.db.flush()  # Получить ID без commit

        return event.id

    def list_events(
        self,
        account_id: int,
        event_types: Optional[List[str]] = None,
        limit: int = 200,
    ) -> List[EventLog]:
        """Events of an account in insertion order, optionally filtered by type."""
        query = self.db.query(EventLog).filter(EventLog.account_id == account_id)

        if event_types:
            query = query.filter(EventLog.event_type.in_(event_types))

        return query.order_by(EventLog.id.asc()).limit(limit).all()
