"""
Catalog service — admin triage of marketplace service listings.

Approval decisions are overwrites: ``approve`` and ``reject`` set the
status whatever it was before, so staff can correct an earlier call in
one step.  The featured flag is toggled independently of the approval
status; featuring a pending or rejected listing is allowed.

Each command touches exactly one row and commits on its own.  There is
no version column, so two admins acting on the same service resolve
last-write-wins at the database.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import joinedload

from servicehub.errors import NotFound, ValidationError
from servicehub.extensions import db
from servicehub.models.service import ApprovalStatus, Service
from servicehub.services import audit_service

logger = logging.getLogger(__name__)


# -- Lookup ----------------------------------------------------------------


def get_service_by_id(service_id: int) -> Service | None:
    """Return a service by primary key, or None if not found."""
    return db.session.get(Service, service_id)


def get_service(service_id: int) -> Service:
    """
    Return a service by primary key.

    Raises:
        NotFound: If no service has this ID.
    """
    service = get_service_by_id(service_id)
    if service is None:
        raise NotFound(f"Service ID {service_id} not found.")
    return service


def parse_approval_status(value) -> ApprovalStatus:
    """
    Coerce a status name (case-insensitive) to ``ApprovalStatus``.

    Raises:
        ValidationError: If the value is not a known status.
    """
    if isinstance(value, ApprovalStatus):
        return value
    try:
        return ApprovalStatus(str(value).strip().upper())
    except ValueError:
        allowed = ", ".join(s.value for s in ApprovalStatus)
        raise ValidationError(
            f"Unknown approval status '{value}'. Expected one of: {allowed}."
        ) from None


def list_services(approval_status=None) -> list[Service]:
    """
    Return every service regardless of status, newest first.

    Args:
        approval_status: Optional status (enum or name) to narrow the
                         list for triage, e.g. ``"PENDING"``.
    """
    query = Service.query.options(joinedload(Service.provider)).order_by(
        Service.created_at.desc(), Service.id.desc()
    )
    if approval_status is not None:
        status = parse_approval_status(approval_status)
        query = query.filter(Service.approval_status == status)
    return query.all()


# -- Approval transitions ----------------------------------------------------


def approve_service(service_id: int, changed_by: int | None = None) -> Service:
    """Mark a service APPROVED regardless of its current status."""
    return _set_approval_status(
        service_id, ApprovalStatus.APPROVED, "APPROVE", changed_by
    )


def reject_service(service_id: int, changed_by: int | None = None) -> Service:
    """Mark a service REJECTED regardless of its current status."""
    return _set_approval_status(
        service_id, ApprovalStatus.REJECTED, "REJECT", changed_by
    )


def _set_approval_status(
    service_id: int,
    new_status: ApprovalStatus,
    action_type: str,
    changed_by: int | None,
) -> Service:
    service = get_service(service_id)

    old_status = service.approval_status
    service.approval_status = new_status
    service.updated_at = datetime.now(timezone.utc)

    audit_service.log_change(
        user_id=changed_by,
        action_type=action_type,
        entity_type="service",
        entity_id=service.id,
        previous_value={"approval_status": old_status.value},
        new_value={"approval_status": new_status.value},
    )
    db.session.commit()

    logger.info(
        "Service %s (%s): %s -> %s",
        service.id,
        service.name,
        old_status.value,
        new_status.value,
    )
    return service


# -- Featured flag ---------------------------------------------------------


def set_featured_status(
    service_id: int,
    featured: bool,
    changed_by: int | None = None,
) -> Service:
    """
    Set or clear the featured flag on a service.

    Args:
        service_id: The service to update.
        featured:   New flag value; must be a real ``bool``.
        changed_by: ID of the admin making the change.

    Returns:
        The updated Service record.

    Raises:
        ValidationError: If ``featured`` is not a boolean.
        NotFound:        If the service does not exist.
    """
    if not isinstance(featured, bool):
        raise ValidationError("'featured' must be a boolean.")

    service = get_service(service_id)

    was_featured = service.featured
    service.featured = featured
    service.updated_at = datetime.now(timezone.utc)

    audit_service.log_change(
        user_id=changed_by,
        action_type="FEATURE",
        entity_type="service",
        entity_id=service.id,
        previous_value={"featured": was_featured},
        new_value={"featured": featured},
    )
    db.session.commit()

    logger.info(
        "Service %s (%s) featured: %s -> %s",
        service.id,
        service.name,
        was_featured,
        featured,
    )
    return service
