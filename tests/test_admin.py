"""
Tests for admin routes
"""
import jwt
from datetime import datetime, timedelta

from config import JWT_SECRET_KEY
from models.admin_user import AdminUser


class TestAdminLogin:
    """Test admin login endpoint"""

    def create_admin(self, db_session):
        admin = AdminUser(username="admin", password_hash=AdminUser.hash_password("admin123"))
        db_session.add(admin)
        db_session.commit()
        return admin

    def test_successful_login(self, client, db_session):
        """Test successful admin login"""
        self.create_admin(db_session)

        response = client.post("/admin/login", json={
            "username": "admin",
            "password": "admin123"
        })
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["role"] == "admin"

        payload = jwt.decode(data["token"], JWT_SECRET_KEY, algorithms=["HS256"])
        assert payload["type"] == "admin"
        assert payload["sub"] == str(data["admin_id"])

    def test_token_grants_admin_access(self, client, db_session):
        """Test the login token opens admin-only endpoints"""
        self.create_admin(db_session)
        token = client.post("/admin/login", json={"username": "admin", "password": "admin123"}).json()["token"]

        response = client.post("/qr-code/list-create", headers={"Authorization": f"Bearer {token}"}, json={
            "qr_list": ["abc123"]
        })
        assert response.status_code == 200

    def test_invalid_username(self, client, db_session):
        """Test login with invalid username"""
        self.create_admin(db_session)
        response = client.post("/admin/login", json={
            "username": "wrong",
            "password": "admin123"
        })
        assert response.status_code == 401
        assert "Invalid credentials" in response.json()["detail"]

    def test_invalid_password(self, client, db_session):
        """Test login with invalid password"""
        self.create_admin(db_session)
        response = client.post("/admin/login", json={
            "username": "admin",
            "password": "wrong"
        })
        assert response.status_code == 401

    def test_missing_credentials(self, client):
        """Test login with missing credentials"""
        response = client.post("/admin/login", json={})
        assert response.status_code == 422  # Validation error


class TestAdminToken:
    """Test admin token validation on protected routes"""

    def test_missing_header(self, client):
        response = client.post("/qr-code/list-create", json={"qr_list": ["abc123"]})
        assert response.status_code == 401
        assert response.json()["detail"] == "Authorization header missing"

    def test_expired_token(self, client, db_session):
        payload = {
            "sub": "1",
            "type": "admin",
            "exp": datetime.utcnow() - timedelta(hours=1),
            "iat": datetime.utcnow() - timedelta(hours=9)
        }
        token = jwt.encode(payload, JWT_SECRET_KEY, algorithm="HS256")

        response = client.post("/qr-code/list-create", headers={"Authorization": f"Bearer {token}"}, json={
            "qr_list": ["abc123"]
        })
        assert response.status_code == 401
        assert "expired" in response.json()["detail"]

    def test_wrong_token_type(self, client):
        token = jwt.encode({"sub": "1", "type": "host"}, JWT_SECRET_KEY, algorithm="HS256")

        response = client.post("/qr-code/list-create", headers={"Authorization": f"Bearer {token}"}, json={
            "qr_list": ["abc123"]
        })
        assert response.status_code == 401

    def test_unknown_admin(self, client, db_session):
        token = jwt.encode({"sub": "42", "type": "admin"}, JWT_SECRET_KEY, algorithm="HS256")

        response = client.post("/qr-code/list-create", headers={"Authorization": f"Bearer {token}"}, json={
            "qr_list": ["abc123"]
        })
        assert response.status_code == 401
        assert response.json()["detail"] == "Admin user not found"


class TestHealth:

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}
