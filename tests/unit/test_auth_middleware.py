"""Unit tests for salesops.middleware.auth_middleware."""
from flask import Flask

from salesops.middleware.auth_middleware import require_auth
from salesops.utils.session_helpers import get_owner_id_from_request


def _app():
    app = Flask(__name__)

    @app.route('/test')
    @require_auth
    def test_route():
        return {"owner_id": get_owner_id_from_request()}

    return app


class TestRequireAuth:
    """Tests for require_auth decorator."""

    def test_require_auth_missing_header(self):
        """Test require_auth returns 401 when the user header is missing."""
        with _app().test_client() as client:
            response = client.get('/test')

            assert response.status_code == 401
            data = response.get_json()
            assert data["error"]["code"] == "MISSING_USER"

    def test_require_auth_blank_header(self):
        with _app().test_client() as client:
            response = client.get('/test', headers={"X-User-ID": "   "})
            assert response.status_code == 401

    def test_require_auth_sets_owner(self):
        """Test require_auth exposes the caller as request.owner_id."""
        with _app().test_client() as client:
            response = client.get('/test', headers={"X-User-ID": " user-alice "})

            assert response.status_code == 200
            assert response.get_json() == {"owner_id": "user-alice"}


class TestGetOwnerIdFromRequest:
    """Tests for get_owner_id_from_request."""

    def test_unauthenticated_request(self):
        app = Flask(__name__)
        with app.test_request_context('/'):
            assert get_owner_id_from_request() is None
