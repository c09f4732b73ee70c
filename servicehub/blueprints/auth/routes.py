"""
Routes for the auth blueprint.

``/auth/me`` reports the identity behind the presented bearer token.

``/auth/dev-token`` is a development-only shortcut that issues a token
for any active user by email, so the admin API can be exercised without
the marketplace's own login flow.  It answers 404 unless
``DEV_TOKEN_ENABLED`` is set.
"""

import logging

from flask import current_app, jsonify, request
from flask_login import current_user, login_required

from servicehub.blueprints.auth import bp
from servicehub.errors import NotFound
from servicehub.schemas import DevTokenIn, UserOut, load_body
from servicehub.services import token_service, user_service

logger = logging.getLogger(__name__)


@bp.route("/me", methods=["GET"])
@login_required
def me():
    """Return the authenticated user."""
    user = current_user._get_current_object()  # pylint: disable=protected-access
    return jsonify(UserOut.model_validate(user).dump())


@bp.route("/dev-token", methods=["POST"])
def dev_token():
    """
    Development-only token issuance.

    Request Body:
        {"email": "dev.admin@localhost"}
    """
    if not current_app.config.get("DEV_TOKEN_ENABLED"):
        raise NotFound()

    body = load_body(DevTokenIn, request.get_json(silent=True))
    user = user_service.get_user_by_email(body.email)
    if user is None or not user.is_active:
        raise NotFound(f"No active user with email '{body.email}'.")

    logger.warning("Dev token issued for %s", user.email)
    return jsonify(
        token=token_service.issue_token(user),
        user=UserOut.model_validate(user).dump(),
    )
