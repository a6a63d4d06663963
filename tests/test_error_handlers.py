"""Tests for translating errors into ``{"error": message}`` responses."""

from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from bloghub.core.errors import (
    AppError,
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
    describe_validation_error,
)


class TestErrorTaxonomy:
    @pytest.mark.parametrize(
        "error_cls, status_code",
        [
            (ValidationError, 400),
            (AuthenticationError, 401),
            (AuthorizationError, 403),
            (NotFoundError, 404),
            (ConflictError, 409),
            (ConfigurationError, 500),
            (StoreError, 500),
        ],
    )
    def test_status_codes(self, error_cls, status_code):
        error = error_cls("boom")
        assert isinstance(error, AppError)
        assert error.status_code == status_code
        assert error.message == "boom"

    def test_status_override(self):
        assert ConflictError("dup", status_code=400).status_code == 400
        assert ConflictError("dup").status_code == 409


class TestDescribeValidationError:
    def test_body_field(self):
        exc = MagicMock()
        exc.errors.return_value = [{"loc": ("body", "title"), "msg": "Field required"}]
        assert describe_validation_error(exc) == "title: Field required"

    def test_no_location(self):
        exc = MagicMock()
        exc.errors.return_value = [{"loc": ("body",), "msg": "Field required"}]
        assert describe_validation_error(exc) == "Field required"

    def test_no_errors(self):
        exc = MagicMock()
        exc.errors.return_value = []
        assert describe_validation_error(exc) == "Invalid request"


class TestHandlers:
    def test_unknown_route(self, client):
        response = client.get("/nope")
        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}

    def test_wrong_method(self, client):
        response = client.put("/auth/login", json={})
        assert response.status_code == 405
        assert "error" in response.json()

    def test_malformed_json(self, client):
        response = client.post(
            "/auth/login", content="{not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400
        assert "error" in response.json()

    def test_store_error_hides_details(self, client):
        failure = OperationalError("SELECT secret_column FROM posts", {}, Exception("connection lost"))
        with patch("bloghub.crud.post.list_posts", side_effect=failure):
            response = client.get("/posts")
        assert response.status_code == 500
        assert response.json() == {"error": "Database error"}
        assert "secret_column" not in response.text

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
