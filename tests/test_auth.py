"""
Tests for authentication endpoints.
"""
from mailhq.auth import create_access_token, create_refresh_token, verify_token


class TestAuthEndpoints:
    """Test auth endpoints."""

    def test_register_user(self, client):
        """Test operator registration."""
        response = client.post(
            "/api/auth/register",
            json={
                "email": "newuser@example.com",
                "password": "securepassword123",
                "display_name": "New User",
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "newuser@example.com"
        assert data["display_name"] == "New User"
        assert "id" in data

    def test_register_duplicate_email(self, client, test_user):
        """Test registration with existing email fails."""
        response = client.post(
            "/api/auth/register",
            json={"email": "test@example.com", "password": "anotherpassword"},
        )
        assert response.status_code == 400
        assert "already registered" in response.json()["message"]

    def test_login_success(self, client, test_user):
        """Test successful login."""
        response = client.post(
            "/api/auth/login/json",
            json={"email": "test@example.com", "password": "testpassword123"},
        )
        assert response.status_code == 200
        data = response.json()
        assert "access_token" in data
        assert "refresh_token" in data
        assert data["token_type"] == "bearer"

    def test_login_form(self, client, test_user):
        """Test OAuth2 form login."""
        response = client.post(
            "/api/auth/login",
            data={"username": "test@example.com", "password": "testpassword123"},
        )
        assert response.status_code == 200
        assert "access_token" in response.json()

    def test_login_wrong_password(self, client, test_user):
        """Test login with wrong password fails."""
        response = client.post(
            "/api/auth/login/json",
            json={"email": "test@example.com", "password": "wrongpassword"},
        )
        assert response.status_code == 401
        assert response.json() == {"message": "Invalid email or password"}

    def test_get_current_user(self, client, test_user):
        """Test a login token resolves to the operator."""
        login_response = client.post(
            "/api/auth/login/json",
            json={"email": "test@example.com", "password": "testpassword123"},
        )
        token = login_response.json()["access_token"]

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        data = response.json()
        assert data["email"] == test_user.email
        assert data["id"] == test_user.id

    def test_get_current_user_unauthenticated(self, client):
        """Test getting current user without auth fails."""
        response = client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json() == {"message": "Not authenticated"}

    def test_garbage_token_rejected(self, client, test_user):
        """Test a malformed bearer token is rejected."""
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_refresh_token_is_not_an_access_token(self, client, test_user):
        """Test a refresh token cannot authenticate requests."""
        token = create_refresh_token({"sub": str(test_user.id)})
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_refresh_token(self, client, test_user):
        """Test token refresh."""
        login_response = client.post(
            "/api/auth/login/json",
            json={"email": "test@example.com", "password": "testpassword123"},
        )
        refresh_token = login_response.json()["refresh_token"]

        response = client.post("/api/auth/refresh", json={"refresh_token": refresh_token})
        assert response.status_code == 200
        data = response.json()
        assert "access_token" in data
        assert "refresh_token" in data

    def test_refresh_with_access_token_fails(self, client, test_user):
        """Test refreshing with an access token fails."""
        token = create_access_token({"sub": str(test_user.id)})
        response = client.post("/api/auth/refresh", json={"refresh_token": token})
        assert response.status_code == 401

    def test_resource_routes_require_auth(self, client):
        """Test every resource router rejects anonymous requests."""
        for path in ("/api/subscribers", "/api/templates", "/api/campaigns", "/api/dashboard", "/api/settings"):
            assert client.get(path).status_code == 401, path


class TestVerifyToken:
    """Test token verification."""

    def test_round_trip(self):
        """Test a fresh access token yields its claims."""
        token = create_access_token({"sub": "42"})
        assert verify_token(token)["sub"] == "42"

    def test_wrong_type(self):
        """Test an access token is not accepted as a refresh token."""
        token = create_access_token({"sub": "42"})
        assert verify_token(token, "refresh") is None
