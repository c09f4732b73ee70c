"""
Token service — bearer-token issuance and identity resolution.

Tokens are signed, timestamped payloads produced by itsdangerous with
the app ``SECRET_KEY`` and ``TOKEN_SALT``.  They carry only the user id.
The role is looked up in the database on every request, so a promotion
(or deactivation) applies to tokens that were already issued.

Flask-Login calls ``load_user_from_request`` for each request that
touches ``current_user``; returning None leaves the request anonymous
and ``login_required`` turns that into a 401.
"""

import logging

from flask import current_app
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from servicehub.models.user import User
from servicehub.services import user_service

logger = logging.getLogger(__name__)


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(
        current_app.config["SECRET_KEY"],
        salt=current_app.config["TOKEN_SALT"],
    )


def issue_token(user: User) -> str:
    """Return a signed bearer token for ``user``."""
    token = _serializer().dumps({"uid": user.id})
    logger.info("Issued bearer token for user %s", user.id)
    return token


def resolve_token(token: str) -> User | None:
    """
    Verify ``token`` and return the active user it names.

    Returns None when the signature is invalid, the token is older than
    ``TOKEN_MAX_AGE`` seconds, or the user no longer exists or has been
    deactivated.
    """
    try:
        payload = _serializer().loads(
            token, max_age=current_app.config["TOKEN_MAX_AGE"]
        )
    except SignatureExpired:
        logger.info("Rejected expired bearer token")
        return None
    except BadSignature:
        logger.info("Rejected bearer token with invalid signature")
        return None

    user_id = payload.get("uid") if isinstance(payload, dict) else None
    if not isinstance(user_id, int):
        return None

    user = user_service.get_user_by_id(user_id)
    if user is None or not user.is_active:
        logger.info("Bearer token names unknown or inactive user %s", user_id)
        return None
    return user


def parse_authorization_header(header: str | None) -> str | None:
    """Extract the token from ``Bearer <token>``; None for anything else."""
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        return None
    return token


def load_user_from_request(req) -> User | None:
    """Flask-Login request loader: resolve the Authorization header."""
    token = parse_authorization_header(req.headers.get("Authorization"))
    if token is None:
        return None
    return resolve_token(token)
