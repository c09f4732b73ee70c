"""
Admin blueprint — service triage, user management, audit trail.
"""

from flask import Blueprint

bp = Blueprint("admin", __name__)

from servicehub.blueprints.admin import routes  # noqa: E402, F401
