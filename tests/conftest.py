"""
Pytest configuration and shared fixtures.

Provides a test application, database session, test client and small
factories that all test modules can use.  The ``testing`` config points
at an in-memory SQLite database, so every ``app`` fixture starts from an
empty schema.

Two styles of test are supported:

  - Service tests take ``db_session``, which keeps an app context open
    for the whole test, and add their own rows to it.
  - Route tests use ``client`` together with the ``make_user`` /
    ``make_service`` / ``auth_header`` factories.  Each factory commits
    in its own short app context and returns plain IDs, so no ORM state
    leaks between the test and the requests it makes.
"""

import itertools

import pytest

from servicehub import create_app
from servicehub.extensions import db as _db
from servicehub.models import ApprovalStatus, Service, User, UserRole
from servicehub.services import token_service


@pytest.fixture()
def app():
    """
    Create a Flask application configured for testing.

    Tables are created from the models before the test and dropped
    afterwards.
    """
    app = create_app("testing")

    with app.app_context():
        _db.create_all()

    yield app

    with app.app_context():
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def db_session(app):  # pylint: disable=redefined-outer-name
    """
    Provide the database session inside an application context that
    stays open for the duration of the test.
    """
    with app.app_context():
        yield _db.session


@pytest.fixture()
def client(app):  # pylint: disable=redefined-outer-name
    """
    Provide a Flask test client for making HTTP requests.

    Usage in tests::

        def test_health(client):
            response = client.get("/health")
            assert response.status_code == 200
    """
    return app.test_client()


@pytest.fixture()
def make_user(app):  # pylint: disable=redefined-outer-name
    """Factory: create a user and return its ID."""
    counter = itertools.count(1)

    def _make(
        name: str = "Test User",
        role: UserRole = UserRole.STANDARD,
        email: str | None = None,
        is_active: bool = True,
    ) -> int:
        with app.app_context():
            user = User(
                name=name,
                email=email or f"user{next(counter)}@example.test",
                role=role,
                is_active=is_active,
            )
            _db.session.add(user)
            _db.session.commit()
            return user.id

    return _make


@pytest.fixture()
def make_service(app, make_user):  # pylint: disable=redefined-outer-name
    """Factory: create a service (and a provider if needed); return its ID."""

    def _make(
        name: str = "Test Service",
        approval_status: ApprovalStatus = ApprovalStatus.PENDING,
        featured: bool = False,
        provider_id: int | None = None,
        description: str | None = None,
    ) -> int:
        if provider_id is None:
            provider_id = make_user(name="Pat Provider", role=UserRole.PROVIDER)
        with app.app_context():
            service = Service(
                name=name,
                description=description,
                provider_id=provider_id,
                approval_status=approval_status,
                featured=featured,
            )
            _db.session.add(service)
            _db.session.commit()
            return service.id

    return _make


@pytest.fixture()
def auth_header(app):  # pylint: disable=redefined-outer-name
    """Factory: build an ``Authorization`` header for a user ID."""

    def _make(user_id: int) -> dict[str, str]:
        with app.app_context():
            user = _db.session.get(User, user_id)
            token = token_service.issue_token(user)
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture()
def admin_id(make_user):  # pylint: disable=redefined-outer-name
    """ID of an active admin user."""
    return make_user(name="Ada Admin", role=UserRole.ADMIN, email="ada@example.test")


@pytest.fixture()
def admin_headers(admin_id, auth_header):  # pylint: disable=redefined-outer-name
    """Authorization header for the admin user."""
    return auth_header(admin_id)
