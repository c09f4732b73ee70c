"""
Marketplace user accounts.

Registration happens in the customer-facing application; this admin
service only reads users and promotes them.  Authentication is by
bearer token (see ``services/token_service.py``), so no passwords are
stored here.
"""

import enum

from flask_login import UserMixin

from servicehub.extensions import db


class UserRole(str, enum.Enum):
    """
    Role attribute of a user.

    ``PROVIDER`` accounts own services in the marketplace.  Only
    ``ADMIN`` is admitted to the admin API.
    """

    STANDARD = "STANDARD"
    PROVIDER = "PROVIDER"
    ADMIN = "ADMIN"


class User(UserMixin, db.Model):
    """
    Marketplace user record.

    Inherits from ``UserMixin`` to satisfy Flask-Login requirements
    (``is_authenticated``, ``get_id``); ``is_active`` is a real column
    and inactive users cannot authenticate.
    """

    __tablename__ = "user"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(200), unique=True, nullable=False)
    role = db.Column(
        db.Enum(
            UserRole,
            name="user_role",
            native_enum=False,
            create_constraint=True,
            length=20,
        ),
        nullable=False,
        default=UserRole.STANDARD,
    )
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(
        db.DateTime, nullable=False, server_default=db.func.current_timestamp()
    )
    updated_at = db.Column(
        db.DateTime, nullable=False, server_default=db.func.current_timestamp()
    )

    # -- Relationships -----------------------------------------------------
    services = db.relationship("Service", back_populates="provider", lazy="dynamic")

    # ---- Role checks -----------------------------------------------------

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def has_role(self, *roles: UserRole) -> bool:
        """Check if the user has any of the given roles."""
        return self.role in roles

    def __repr__(self) -> str:
        role = self.role.value if self.role else "unknown"
        return f"<User {self.email} role={role}>"
