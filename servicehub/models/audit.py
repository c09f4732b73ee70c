"""
Audit log model.

``AuditLog`` records every admin mutation applied to a service or user.
"""

from servicehub.extensions import db


class AuditLog(db.Model):
    """
    Records every admin change in the application.

    ``action_type`` values: APPROVE, REJECT, FEATURE, PROMOTE.
    ``entity_type`` values: service, user.

    ``previous_value`` / ``new_value`` hold JSON with only the changed
    fields, e.g. ``{"approval_status": "PENDING"}``.
    """

    __tablename__ = "audit_log"
    __table_args__ = (
        db.CheckConstraint(
            "action_type IN ('APPROVE', 'REJECT', 'FEATURE', 'PROMOTE')",
            name="CK_audit_log_action_type",
        ),
    )

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=True)
    action_type = db.Column(db.String(50), nullable=False)
    entity_type = db.Column(db.String(100), nullable=False)
    entity_id = db.Column(db.Integer, nullable=True)
    previous_value = db.Column(db.Text, nullable=True)
    new_value = db.Column(db.Text, nullable=True)
    ip_address = db.Column(db.String(45), nullable=True)
    user_agent = db.Column(db.String(500), nullable=True)
    created_at = db.Column(
        db.DateTime, nullable=False, server_default=db.func.current_timestamp()
    )

    # -- Relationships -----------------------------------------------------
    user = db.relationship("User")

    def __repr__(self) -> str:
        return f"<AuditLog {self.action_type} {self.entity_type}" f":{self.entity_id}>"
