"""
Application configuration classes.

Each class represents a deployment environment.  The factory function
``create_app`` in ``servicehub/__init__.py`` selects the appropriate
config based on the FLASK_ENV environment variable.

The default store is a SQLite file in the Flask instance folder.  Point
``DATABASE_URL`` at any SQLAlchemy URL (PostgreSQL, SQL Server, ...) to
use a shared database server instead.
"""

import logging
import os

# Module-level logger for startup warnings emitted by config classes.
_logger = logging.getLogger(__name__)

# =========================================================================
# Sentinel for detecting unset SECRET_KEY in production.
# =========================================================================
_DEFAULT_SECRET_KEY = "dev-secret-change-me"


class BaseConfig:
    """
    Shared configuration values inherited by all environments.

    Secrets and connection strings are loaded from environment variables
    so they never appear in source control.
    """

    # -- Flask core --------------------------------------------------------
    SECRET_KEY: str = os.environ.get("SECRET_KEY", _DEFAULT_SECRET_KEY)

    # -- SQLAlchemy --------------------------------------------------------
    SQLALCHEMY_DATABASE_URI: str = os.environ.get(
        "DATABASE_URL", "sqlite:///servicehub.db"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False

    # Echo SQL statements to the log for debugging (override per env).
    SQLALCHEMY_ECHO: bool = False

    # -- Bearer tokens -----------------------------------------------------
    # Tokens carry only the user id; the role is re-read from the store on
    # every request so promotions take effect immediately.
    TOKEN_MAX_AGE: int = int(os.environ.get("TOKEN_MAX_AGE", "3600"))
    TOKEN_SALT: str = os.environ.get("TOKEN_SALT", "servicehub-admin-token")

    # -- Dev token endpoint ------------------------------------------------
    # POST /auth/dev-token hands out a token for any active user by email.
    # Disabled unless explicitly switched on.
    DEV_TOKEN_ENABLED: bool = (
        os.environ.get("DEV_TOKEN_ENABLED", "false").lower() == "true"
    )

    # -- Logging -----------------------------------------------------------
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    # =====================================================================
    # Production validation helpers
    # =====================================================================

    @classmethod
    def validate_production_secrets(cls, app_config: dict) -> None:
        """
        Verify that all required secrets are set for production.

        Called by ``create_app()`` when ``config_name == 'production'``.
        Raises ``RuntimeError`` for hard requirements and logs warnings
        for soft requirements.

        Args:
            app_config: The ``app.config`` dict after loading the
                        config class.

        Raises:
            RuntimeError: If any critical secret is missing or still
                          set to its insecure default value.
        """
        errors: list[str] = []

        # -- SECRET_KEY (hard fail) ----------------------------------------
        # The key signs every bearer token; the default would let anyone
        # mint admin tokens.
        if app_config.get("SECRET_KEY") == _DEFAULT_SECRET_KEY:
            errors.append(
                "SECRET_KEY is still the insecure default. "
                "Generate one with: python -c "
                '"import secrets; print(secrets.token_hex(32))"'
            )

        if app_config.get("DEV_TOKEN_ENABLED"):
            errors.append(
                "DEV_TOKEN_ENABLED must be false in production; it issues "
                "tokens without credentials."
            )

        if errors:
            combined = "\n  - ".join(errors)
            raise RuntimeError(f"Production configuration errors:\n  - {combined}")

        # -- LOG_LEVEL sanity check (soft warning) -------------------------
        if app_config.get("LOG_LEVEL", "").upper() == "DEBUG":
            _logger.warning(
                "LOG_LEVEL=DEBUG is not recommended in production — "
                "SQL statements and request details may appear in logs. "
                "Consider INFO or WARNING."
            )


class DevelopmentConfig(BaseConfig):
    """
    Development environment: verbose logging, SQL echo enabled.

    The dev token endpoint is enabled by default in this config.
    """

    DEBUG: bool = True
    SQLALCHEMY_ECHO: bool = True
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "DEBUG")

    DEV_TOKEN_ENABLED: bool = (
        os.environ.get("DEV_TOKEN_ENABLED", "true").lower() == "true"
    )


class TestingConfig(BaseConfig):
    """
    Testing environment: in-memory SQLite, one fresh database per app.
    """

    TESTING: bool = True
    SECRET_KEY: str = "testing-secret"

    SQLALCHEMY_DATABASE_URI: str = os.environ.get("TEST_DATABASE_URL", "sqlite://")
    LOG_LEVEL: str = "DEBUG"

    DEV_TOKEN_ENABLED: bool = True


class ProductionConfig(BaseConfig):
    """
    Production environment: strict settings, no debug output.

    All secrets must be set via environment variables.  The application
    factory calls ``validate_production_secrets()`` at startup and will
    refuse to launch if critical values are missing.
    """

    DEBUG: bool = False
    SQLALCHEMY_ECHO: bool = False
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "WARNING")

    # -- Dev tokens: always disabled in production -------------------------
    DEV_TOKEN_ENABLED: bool = False


# Lookup dict used by the application factory.
config_by_name: dict[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}
