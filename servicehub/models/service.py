"""
Marketplace service listings and their approval lifecycle.

A service starts ``PENDING`` when a provider submits it and is moved to
``APPROVED`` or ``REJECTED`` by an admin.  Admin decisions are plain
overwrites: staff can re-approve a rejected service (or the reverse)
without an intermediate step.  ``featured`` is independent of the
approval status.
"""

import enum

from servicehub.extensions import db


class ApprovalStatus(str, enum.Enum):
    """Approval lifecycle of a service listing."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Service(db.Model):
    """A service offered by a provider in the marketplace."""

    __tablename__ = "service"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    provider_id = db.Column(
        db.Integer, db.ForeignKey("user.id"), nullable=False, index=True
    )
    approval_status = db.Column(
        db.Enum(
            ApprovalStatus,
            name="approval_status",
            native_enum=False,
            create_constraint=True,
            length=20,
        ),
        nullable=False,
        default=ApprovalStatus.PENDING,
        index=True,
    )
    featured = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(
        db.DateTime, nullable=False, server_default=db.func.current_timestamp()
    )
    updated_at = db.Column(
        db.DateTime, nullable=False, server_default=db.func.current_timestamp()
    )

    # -- Relationships -----------------------------------------------------
    provider = db.relationship("User", back_populates="services")

    @property
    def provider_name(self) -> str:
        """Display name of the owning provider."""
        return self.provider.name if self.provider else "unknown"

    def __repr__(self) -> str:
        return (
            f"<Service {self.id} {self.name!r} "
            f"status={self.approval_status.value if self.approval_status else None} "
            f"featured={self.featured}>"
        )
