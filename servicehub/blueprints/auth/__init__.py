"""
Auth blueprint — current identity and development token issuance.
"""

from flask import Blueprint

bp = Blueprint("auth", __name__)

from servicehub.blueprints.auth import routes  # noqa: E402, F401
