"""
Audit logging service
"""
from typing import Optional, Dict, Any, Union

from sqlalchemy.orm import Session

from hr_attendance.models.audit_log import AuditLog
from hr_attendance.utils.datetime_utils import now_utc
from hr_attendance.utils.json_serializer import sanitize_for_json


def log_audit(
    db: Session,
    actor_id: Optional[str],
    action: str,
    entity_type: str,
    entity_id: Optional[Union[int, str]] = None,
    meta: Optional[Dict[str, Any]] = None
) -> AuditLog:
    """
    Add an audit log entry to the current transaction

    The entry is committed (or rolled back) together with the change it
    describes; callers own the commit.

    Args:
        db: Database session
        actor_id: Business user id of the actor (None for kiosk actions)
        action: Action type (e.g., "CHECK_IN", "ATTENDANCE_DELETE")
        entity_type: Table of the affected entity (e.g., "check_ins", "attendances")
        entity_id: ID of the affected entity (optional)
        meta: Additional metadata as dictionary (optional)

    Returns:
        Pending AuditLog instance
    """
    audit_log = AuditLog(
        actor_id=actor_id,
        action=action,
        entity_type=entity_type,
        entity_id=str(entity_id) if entity_id is not None else None,
        meta_json=sanitize_for_json(meta) if meta is not None else None,
        created_at=now_utc(),
    )
    db.add(audit_log)
    return audit_log
