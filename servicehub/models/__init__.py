"""
Model package — imports all models so Alembic and SQLAlchemy can
discover them automatically when ``flask db`` commands are run.

  - user.py    -> user accounts and roles
  - service.py -> service listings and approval status
  - audit.py   -> audit trail of admin actions
"""

from servicehub.models.audit import AuditLog  # noqa: F401
from servicehub.models.service import ApprovalStatus, Service  # noqa: F401
from servicehub.models.user import User, UserRole  # noqa: F401
