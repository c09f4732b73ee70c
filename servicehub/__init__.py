"""
Application factory for the ServiceHub admin API.

Usage::

    from servicehub import create_app
    app = create_app()           # Uses FLASK_ENV to pick config.
    app = create_app("testing")  # Explicit config for tests.
"""

import logging
import os

from flask import Flask, jsonify
from sqlalchemy.exc import DisconnectionError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from werkzeug.exceptions import HTTPException

from .config import config_by_name
from .errors import ServiceHubError, TransientStoreError, Unauthenticated
from .extensions import db, login_manager, migrate

logger = logging.getLogger(__name__)


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        config_name: One of 'development', 'testing', or 'production'.
                     Defaults to the FLASK_ENV environment variable,
                     falling back to 'development'.

    Returns:
        A fully configured Flask application instance.
    """
    # Resolve the configuration class.
    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "development")
    config_class = config_by_name.get(config_name)
    if config_class is None:
        raise ValueError(
            f"Unknown config '{config_name}'. "
            f"Valid options: {list(config_by_name.keys())}"
        )

    app = Flask(__name__)
    app.config.from_object(config_class)

    # Refuse to run production with the default secret key.
    if config_name == "production":
        config_class.validate_production_secrets(app.config)

    # -- Configure logging -------------------------------------------------
    _configure_logging(app)

    # -- Initialize extensions ---------------------------------------------
    _register_extensions(app)

    # -- Register blueprints -----------------------------------------------
    _register_blueprints(app)

    # -- Register error handlers -------------------------------------------
    _register_error_handlers(app)

    # -- Register custom CLI commands --------------------------------------
    _register_cli_commands(app)

    return app


def _register_extensions(app: Flask) -> None:
    """Bind all Flask extensions to the application instance."""
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    # Imported here to avoid circular imports with models.
    from .services import token_service  # pylint: disable=import-outside-toplevel

    # Bearer tokens are the only credential; there is no session user_loader.
    @login_manager.request_loader
    def load_user_from_request(req):
        """Resolve ``Authorization: Bearer <token>`` to a user."""
        return token_service.load_user_from_request(req)

    @login_manager.unauthorized_handler
    def unauthorized():
        """Anonymous request to a ``login_required`` route."""
        raise Unauthenticated()


def _register_blueprints(app: Flask) -> None:
    """
    Import and register each blueprint with its URL prefix.

    Blueprints are imported inside this function to avoid circular
    imports; models and services can safely import ``db`` from
    extensions at module level.
    """
    # pylint: disable=import-outside-toplevel

    # Main blueprint: health check at the root.
    from .blueprints.main import bp as main_bp

    app.register_blueprint(main_bp)

    # Auth: current identity and dev token issuance.
    from .blueprints.auth import bp as auth_bp

    app.register_blueprint(auth_bp, url_prefix="/auth")

    # Admin: service triage, user promotion and the audit trail.
    from .blueprints.admin import bp as admin_bp

    app.register_blueprint(admin_bp, url_prefix="/admin")


def _register_error_handlers(app: Flask) -> None:
    """Render every error as ``{"error": ..., "message": ...}`` JSON."""

    @app.errorhandler(ServiceHubError)
    def handle_servicehub_error(error):
        return error.to_response()

    @app.errorhandler(OperationalError)
    @app.errorhandler(DisconnectionError)
    @app.errorhandler(PoolTimeoutError)
    def handle_store_unavailable(error):
        """Database unreachable: roll back and report a retryable 503."""
        db.session.rollback()
        logger.warning("Data store unavailable: %s", error)
        return TransientStoreError().to_response()

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        """Routing and method errors (404, 405, ...) in the same shape."""
        kind = (error.name or "error").lower().replace(" ", "_")
        response = jsonify(error=kind, message=error.description)
        response.status_code = error.code or 500
        return response

    @app.errorhandler(500)
    def internal_error(error):  # pylint: disable=unused-argument
        """Handle 500 Internal Server Error."""
        db.session.rollback()
        return ServiceHubError().to_response()


def _register_cli_commands(app: Flask) -> None:
    """Register custom Flask CLI commands (e.g., flask db-check)."""
    from .cli import register_commands  # pylint: disable=import-outside-toplevel
    from .seed import register_seed_commands  # pylint: disable=import-outside-toplevel

    register_commands(app)
    register_seed_commands(app)


def _configure_logging(app: Flask) -> None:
    """
    Set up application logging.

    The root level comes from ``LOG_LEVEL``.  SQLAlchemy's engine logger
    is kept at WARNING in debug so ``SQLALCHEMY_ECHO`` output stays
    readable.
    """
    log_level = app.config.get("LOG_LEVEL", "INFO")
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    # Quiet down noisy libraries in development.
    if app.debug:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
