"""
ETTU Backend — Exception Handler Tests
========================================

What:  Each application exception maps to its status code and error body.
How:   Temporary routes raising each exception are added to a test app.

What we test:
    ✅ 400 / 403 / 404 / 429 / 503 / 500 mapping and error codes
    ✅ DatabaseError detail never reaches the client
    ✅ Unexpected exceptions answer a generic 500
"""

import pytest
from fastapi import Depends

from ettu.database import get_db_session
from ettu.exceptions import (
    DatabaseError,
    EttuError,
    FeatureDisabledError,
    NotFoundError,
    RateLimitExceededError,
    ValidationError,
)


def _raiser(exc: Exception):
    async def endpoint():
        raise exc

    return endpoint


@pytest.fixture
def failing_app(make_app):
    app = make_app()
    app.add_api_route("/boom/validation", _raiser(ValidationError("Bad title", field="title")))
    app.add_api_route("/boom/feature", _raiser(FeatureDisabledError("public_snippets")))
    app.add_api_route("/boom/not-found", _raiser(NotFoundError("project", "42")))
    app.add_api_route("/boom/rate", _raiser(RateLimitExceededError(retry_after=17)))
    app.add_api_route(
        "/boom/database",
        _raiser(DatabaseError(message="duplicate key value violates unique constraint users_email_key")),
    )
    app.add_api_route("/boom/app", _raiser(EttuError("Something specific broke")))
    app.add_api_route("/boom/unexpected", _raiser(KeyError("secret_internal_key")))

    async def needs_session(session=Depends(get_db_session)):
        return {"ok": True}

    app.add_api_route("/boom/session", needs_session)
    return app


class TestExceptionHandlers:

    @pytest.mark.asyncio
    async def test_validation_error_is_400(self, failing_app, make_client):
        async with make_client(failing_app) as client:
            response = await client.get("/boom/validation")

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["message"] == "Bad title"
        assert body["details"] == {"field": "title"}
        assert body["request_id"] == response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_feature_disabled_is_403(self, failing_app, make_client):
        async with make_client(failing_app) as client:
            response = await client.get("/boom/feature")

        assert response.status_code == 403
        assert response.json()["error"] == "feature_disabled"

    @pytest.mark.asyncio
    async def test_not_found_is_404(self, failing_app, make_client):
        async with make_client(failing_app) as client:
            response = await client.get("/boom/not-found")

        assert response.status_code == 404
        assert response.json()["message"] == "project with ID '42' was not found"

    @pytest.mark.asyncio
    async def test_rate_limit_is_429_with_retry_after(self, failing_app, make_client):
        async with make_client(failing_app) as client:
            response = await client.get("/boom/rate")

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "17"
        assert response.json()["error"] == "rate_limit_exceeded"

    @pytest.mark.asyncio
    async def test_missing_database_is_503(self, failing_app, make_client):
        async with make_client(failing_app) as client:
            response = await client.get("/boom/session")

        assert response.status_code == 503
        assert response.json()["error"] == "database_unavailable"

    @pytest.mark.asyncio
    async def test_database_error_hides_details(self, failing_app, make_client):
        async with make_client(failing_app) as client:
            response = await client.get("/boom/database")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert "users_email_key" not in response.text

    @pytest.mark.asyncio
    async def test_base_app_error_is_500(self, failing_app, make_client):
        async with make_client(failing_app) as client:
            response = await client.get("/boom/app")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "internal_error"
        assert body["message"] == "Something specific broke"

    @pytest.mark.asyncio
    async def test_unexpected_error_is_generic_500(self, failing_app, make_client):
        async with make_client(failing_app, raise_app_exceptions=False) as client:
            response = await client.get("/boom/unexpected")

        assert response.status_code == 500
        assert response.json()["error"] == "internal_server_error"
        assert "secret_internal_key" not in response.text


class TestExceptionTypes:

    def test_validation_error_records_field(self):
        exc = ValidationError("Bad", field="email", context={"value": "x"})

        assert exc.field == "email"
        assert exc.context == {"value": "x", "field": "email"}

    def test_rate_limit_message_names_wait(self):
        exc = RateLimitExceededError(retry_after=30)

        assert "30 seconds" in exc.message
        assert exc.context["retry_after"] == 30

    def test_not_found_without_id(self):
        assert NotFoundError("note").message == "The requested note was not found"
