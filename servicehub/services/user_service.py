"""
User service — user lookup, listing, and promotion to admin.

Users are registered by the customer-facing application; this service
reads them and performs the one role change the admin panel exposes:
promotion to ``ADMIN``.  There is no demote operation.
"""

import logging
from datetime import datetime, timezone

from servicehub.errors import NotFound, ValidationError
from servicehub.extensions import db
from servicehub.models.user import User, UserRole
from servicehub.services import audit_service

logger = logging.getLogger(__name__)


# -- User lookup -----------------------------------------------------------


def get_user_by_id(user_id: int) -> User | None:
    """Return a user by primary key, or None if not found."""
    return db.session.get(User, user_id)


def get_user(user_id: int) -> User:
    """
    Return a user by primary key.

    Raises:
        NotFound: If no user has this ID.
    """
    user = get_user_by_id(user_id)
    if user is None:
        raise NotFound(f"User ID {user_id} not found.")
    return user


def get_user_by_email(email: str) -> User | None:
    """Return a user by exact email address, ignoring case."""
    return User.query.filter(db.func.lower(User.email) == email.lower()).first()


def list_users() -> list[User]:
    """Return all users ordered by name, then email."""
    return User.query.order_by(User.name, User.email).all()


# -- Creation (seed commands) ----------------------------------------------


def create_user(
    name: str,
    email: str,
    role: UserRole = UserRole.STANDARD,
) -> User:
    """
    Create a user record.

    Used by the seed commands; production accounts come from the
    registration flow of the marketplace itself.

    Raises:
        ValidationError: If the name or email is blank, or the email is
                         already taken.
    """
    name = (name or "").strip()
    email = (email or "").strip()
    if not name or not email:
        raise ValidationError("Name and email are required.")
    if get_user_by_email(email) is not None:
        raise ValidationError(f"A user with email '{email}' already exists.")

    user = User(name=name, email=email, role=role)
    db.session.add(user)
    db.session.commit()

    logger.info("Created user %s with role %s", email, role.value)
    return user


# -- Promotion -------------------------------------------------------------


def promote_user(user_id: int, changed_by: int | None = None) -> User:
    """
    Promote a user to ``ADMIN``.

    Promoting a user who is already an admin is a no-op: the user is
    returned unchanged and no audit entry is written.

    Args:
        user_id:    The user to promote.
        changed_by: ID of the admin making the change.

    Returns:
        The (possibly unchanged) User record.

    Raises:
        NotFound: If the user does not exist.
    """
    user = get_user(user_id)

    if user.role == UserRole.ADMIN:
        logger.info("User %s is already an admin; promotion skipped", user.email)
        return user

    old_role = user.role
    user.role = UserRole.ADMIN
    user.updated_at = datetime.now(timezone.utc)

    audit_service.log_change(
        user_id=changed_by,
        action_type="PROMOTE",
        entity_type="user",
        entity_id=user.id,
        previous_value={"role": old_role.value},
        new_value={"role": UserRole.ADMIN.value},
    )
    db.session.commit()

    logger.info(
        "Promoted user %s: %s -> %s",
        user.email,
        old_role.value,
        UserRole.ADMIN.value,
    )
    return user
