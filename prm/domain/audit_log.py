"""AuditLog domain entity - builds audit events for contact changes"""
import json
from datetime import datetime, timezone
from typing import Dict, Any

CONTACT_BIRTHDAY_UPDATED = "contact_birthday_updated"


def serialize_objects(**objects: Any) -> str:
    """Compact JSON, keys kept in the given order."""
    return json.dumps(objects, ensure_ascii=False, separators=(",", ":"))


class AuditLog:
    @staticmethod
    def contact_birthday_updated(account_id: int, author, contact) -> Dict[str, Any]:
        return {
            "account_id": account_id,
            "action": CONTACT_BIRTHDAY_UPDATED,
            "author_id": author.id,
            "author_name": author.name,
            "about_contact_id": contact.id,
            "should_appear_on_dashboard": True,
            "objects": serialize_objects(
                contact_name=contact.name,
                contact_id=contact.id,
            ),
            "audited_at": datetime.now(timezone.utc).isoformat(),
        }
