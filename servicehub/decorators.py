"""
Authorization decorators for route-level access control.

These decorators enforce role checks on blueprint routes.  They are
used in combination with Flask-Login's ``@login_required`` to provide
layered security:

    @bp.route('/services')
    @login_required
    @role_required(UserRole.ADMIN)
    def list_services():
        ...

``login_required`` rejects anonymous requests with 401 (via the
unauthorized handler registered in the factory); ``role_required``
rejects authenticated users with the wrong role with 403.
"""

import logging
from functools import wraps

from flask import request
from flask_login import current_user

from servicehub.errors import Forbidden, Unauthenticated
from servicehub.models.user import UserRole

logger = logging.getLogger(__name__)


def role_required(*roles: UserRole):
    """
    Decorator that restricts access to users with one of the given roles.

    The role is read from the freshly loaded user record, never from
    the token.

    Args:
        roles: One or more ``UserRole`` members.

    Usage::

        @role_required(UserRole.ADMIN)
        def protected_view():
            ...
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            # current_user is normally guaranteed by @login_required.
            if not current_user.is_authenticated:
                raise Unauthenticated()
            if not current_user.has_role(*roles):
                logger.warning(
                    "Access denied: user %d (%s) with role '%s' "
                    "attempted %s %s (requires one of: %s)",
                    current_user.id,
                    current_user.email,
                    current_user.role.value,
                    request.method,
                    request.path,
                    ", ".join(role.value for role in roles),
                )
                raise Forbidden()
            return func(*args, **kwargs)

        return wrapper

    return decorator
