"""
Audit service — records admin changes and queries the audit trail.

Every approve / reject / feature / promote that actually runs passes
through ``log_change`` before the surrounding service commits, so the
audit row and the entity update land in the same transaction.
"""

import json
import logging
from typing import Any

from flask import request
from sqlalchemy import desc

from servicehub.extensions import db
from servicehub.models.audit import AuditLog

logger = logging.getLogger(__name__)

# Hard ceiling for a single audit-log listing.
MAX_AUDIT_PAGE = 500


# -- Write audit entries ---------------------------------------------------


def log_change(
    user_id: int | None,
    action_type: str,
    entity_type: str,
    entity_id: int | None,
    previous_value: dict[str, Any] | None = None,
    new_value: dict[str, Any] | None = None,
) -> AuditLog:
    """
    Record a data change in the audit log (no commit).

    Args:
        user_id:        ID of the admin who made the change, or None for
                        CLI and system actions.
        action_type:    One of APPROVE, REJECT, FEATURE, PROMOTE.
        entity_type:    ``service`` or ``user``.
        entity_id:      Primary key of the affected record.
        previous_value: Changed fields before the change.
        new_value:      Changed fields after the change.

    Returns:
        The newly created AuditLog record.
    """
    # Capture request metadata when available (inside a request context).
    ip_address = None
    user_agent = None
    try:
        ip_address = request.remote_addr
        user_agent = str(request.user_agent)[:500]
    except RuntimeError:
        # Outside of a request context (e.g., CLI command).
        pass

    entry = AuditLog(
        user_id=user_id,
        action_type=action_type,
        entity_type=entity_type,
        entity_id=entity_id,
        previous_value=json.dumps(previous_value) if previous_value else None,
        new_value=json.dumps(new_value) if new_value else None,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    db.session.add(entry)
    db.session.flush()

    logger.info(
        "Audit: %s %s:%s by user %s",
        action_type,
        entity_type,
        entity_id,
        user_id,
    )
    return entry


# -- Query audit logs ------------------------------------------------------


def get_audit_logs(
    entity_type: str | None = None,
    entity_id: int | None = None,
    user_id: int | None = None,
    limit: int = 100,
) -> list[AuditLog]:
    """
    Return audit entries, newest first, with optional filters.

    ``limit`` is clamped to ``1..MAX_AUDIT_PAGE``.
    """
    limit = max(1, min(limit, MAX_AUDIT_PAGE))
    query = AuditLog.query.order_by(desc(AuditLog.created_at), desc(AuditLog.id))

    if entity_type:
        query = query.filter(AuditLog.entity_type == entity_type)
    if entity_id is not None:
        query = query.filter(AuditLog.entity_id == entity_id)
    if user_id is not None:
        query = query.filter(AuditLog.user_id == user_id)

    return query.limit(limit).all()
