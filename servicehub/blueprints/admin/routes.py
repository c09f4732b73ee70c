"""
Routes for the admin blueprint — service triage, user management and
the audit trail.

Every route requires an authenticated user with the ``ADMIN`` role.
Responses are JSON; errors are rendered by the handlers registered in
the application factory.
"""

from flask import jsonify, request
from flask_login import current_user, login_required

from servicehub.blueprints.admin import bp
from servicehub.decorators import role_required
from servicehub.errors import ValidationError
from servicehub.models.user import UserRole
from servicehub.schemas import (
    AuditLogOut,
    FeatureToggleIn,
    ServiceDetailOut,
    ServiceOut,
    UserOut,
    dump_many,
    load_body,
)
from servicehub.services import audit_service, catalog_service, user_service


# =========================================================================
# Service triage
# =========================================================================


@bp.route("/services", methods=["GET"])
@login_required
@role_required(UserRole.ADMIN)
def list_services():
    """
    List all services irrespective of approval status.

    Query Parameters:
        status (str): Optional approval status to filter on
                      (PENDING, APPROVED, REJECTED).
    """
    status = request.args.get("status") or None
    services = catalog_service.list_services(approval_status=status)
    return jsonify(dump_many(ServiceOut, services))


@bp.route("/services/<int:service_id>", methods=["GET"])
@login_required
@role_required(UserRole.ADMIN)
def get_service(service_id):
    """Return a single service with its full detail."""
    service = catalog_service.get_service(service_id)
    return jsonify(ServiceDetailOut.model_validate(service).dump())


@bp.route("/services/<int:service_id>/approve", methods=["PATCH"])
@login_required
@role_required(UserRole.ADMIN)
def approve_service(service_id):
    """Approve a service (also overrides an earlier rejection)."""
    service = catalog_service.approve_service(
        service_id=service_id,
        changed_by=current_user.id,
    )
    return jsonify(ServiceOut.model_validate(service).dump())


@bp.route("/services/<int:service_id>/reject", methods=["PATCH"])
@login_required
@role_required(UserRole.ADMIN)
def reject_service(service_id):
    """Reject a service (also overrides an earlier approval)."""
    service = catalog_service.reject_service(
        service_id=service_id,
        changed_by=current_user.id,
    )
    return jsonify(ServiceOut.model_validate(service).dump())


@bp.route("/services/<int:service_id>/feature", methods=["PATCH"])
@login_required
@role_required(UserRole.ADMIN)
def set_featured_status(service_id):
    """
    Set or clear the featured flag.

    Request Body:
        {"featured": true | false}
    """
    body = load_body(FeatureToggleIn, request.get_json(silent=True))
    service = catalog_service.set_featured_status(
        service_id=service_id,
        featured=body.featured,
        changed_by=current_user.id,
    )
    return jsonify(ServiceOut.model_validate(service).dump())


# =========================================================================
# User management
# =========================================================================


@bp.route("/users", methods=["GET"])
@login_required
@role_required(UserRole.ADMIN)
def list_users():
    """List all users with their roles."""
    users = user_service.list_users()
    return jsonify(dump_many(UserOut, users))


@bp.route("/users/<int:user_id>/promote", methods=["PATCH"])
@login_required
@role_required(UserRole.ADMIN)
def promote_user(user_id):
    """Promote a user to admin.  Already-admin users are left unchanged."""
    user = user_service.promote_user(
        user_id=user_id,
        changed_by=current_user.id,
    )
    return jsonify(UserOut.model_validate(user).dump())


# =========================================================================
# Audit trail
# =========================================================================


@bp.route("/audit-logs", methods=["GET"])
@login_required
@role_required(UserRole.ADMIN)
def audit_logs():
    """
    List audit entries, newest first.

    Query Parameters:
        entity_type (str): ``service`` or ``user``.
        entity_id (int):   Restrict to one entity.
        limit (int):       Maximum entries to return (default 100).
    """
    logs = audit_service.get_audit_logs(
        entity_type=request.args.get("entity_type") or None,
        entity_id=_int_arg("entity_id"),
        limit=_int_arg("limit", 100),
    )
    return jsonify(dump_many(AuditLogOut, logs))


def _int_arg(name: str, default: int | None = None) -> int | None:
    """Read an integer query parameter; malformed values are a 400."""
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(
            f"Query parameter '{name}' must be an integer, got '{raw}'."
        ) from None
