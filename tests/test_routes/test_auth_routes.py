"""
Tests for the auth blueprint routes: ``/auth/me`` and the dev-only
``/auth/dev-token`` shortcut.
"""

import pytest

from servicehub.models.user import UserRole


class TestMe:
    """GET /auth/me"""

    def test_returns_current_user(self, client, admin_id, admin_headers):
        response = client.get("/auth/me", headers=admin_headers)
        assert response.status_code == 200
        assert response.get_json() == {
            "id": admin_id,
            "name": "Ada Admin",
            "email": "ada@example.test",
            "role": "ADMIN",
            "roleVariant": "destructive",
        }

    def test_any_role_may_call(self, client, make_user, auth_header):
        headers = auth_header(make_user(role=UserRole.PROVIDER))
        response = client.get("/auth/me", headers=headers)
        assert response.status_code == 200
        assert response.get_json()["role"] == "PROVIDER"

    def test_anonymous_returns_401(self, client):
        response = client.get("/auth/me")
        assert response.status_code == 401
        assert response.get_json()["error"] == "unauthenticated"


class TestDevToken:
    """POST /auth/dev-token"""

    def test_issues_usable_token(self, client, admin_id):
        response = client.post("/auth/dev-token", json={"email": "ADA@example.test"})
        assert response.status_code == 200
        data = response.get_json()
        assert data["user"]["id"] == admin_id

        me = client.get("/auth/me", headers={"Authorization": f"Bearer {data['token']}"})
        assert me.status_code == 200
        assert me.get_json()["email"] == "ada@example.test"

    def test_unknown_email_returns_404(self, client):
        response = client.post("/auth/dev-token", json={"email": "nobody@example.test"})
        assert response.status_code == 404

    @pytest.mark.parametrize("email", ["%", "%@example.test", "ada@example.tes_"])
    def test_wildcard_email_returns_404(self, client, admin_id, email):
        response = client.post("/auth/dev-token", json={"email": email})
        assert response.status_code == 404
        assert "token" not in response.get_json()

    def test_inactive_user_returns_404(self, client, make_user):
        make_user(email="gone@example.test", is_active=False)
        response = client.post("/auth/dev-token", json={"email": "gone@example.test"})
        assert response.status_code == 404

    @pytest.mark.parametrize("body", [None, {}, {"email": 5}])
    def test_invalid_body_returns_400(self, client, body):
        response = client.post("/auth/dev-token", json=body)
        assert response.status_code == 400
        assert response.get_json()["error"] == "validation_error"

    def test_disabled_returns_404(self, app, client, admin_id):
        app.config["DEV_TOKEN_ENABLED"] = False
        response = client.post("/auth/dev-token", json={"email": "ada@example.test"})
        assert response.status_code == 404
        assert "token" not in response.get_json()
