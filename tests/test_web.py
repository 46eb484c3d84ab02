"""Tests for errkit.web module."""

import io
from typing import Literal, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from pydantic import BaseModel, EmailStr, Field

from errkit.config import Settings, WebSettings
from errkit.errors import ChainError, invalid_number_param, new
from errkit.logger import DefaultLogger
from errkit.tracking import get_tracking_id
from errkit.web import (
    Page,
    PageFilter,
    Paging,
    RequestLoggingMiddleware,
    TrackingIDMiddleware,
    bad_request,
    create_app,
    created,
    error_body,
    error_response,
    forbidden,
    found,
    internal_server_error,
    no_content,
    not_found,
    ok,
    page_expired,
    page_filter,
    request_entity_too_large,
    status_for,
    too_early,
    unauthorized,
    validate_payload,
)

ERR_NOT_FOUND = new("Document not found", "document_not_found")


class TestErrorBody:
    """Tests for rendering errors."""

    def test_renders_head_only(self):
        """Test that only the outermost node reaches the body."""
        err = new("Could Not Load", "load_failed").wrap(new("secret db detail", "db"))

        assert error_body(err) == {"description": "could not load", "code": "load_failed"}

    def test_foreign_error_renders_empty(self):
        """Test that non-chain errors render empty fields."""
        assert error_body(ValueError("internal")) == {"description": "", "code": ""}

    def test_none_renders_empty(self):
        """Test that None renders empty fields."""
        assert error_body(None) == {"description": "", "code": ""}

    def test_error_response(self):
        """Test that the caller chooses the status."""
        response = error_response(409, new("Conflict", "conflict"))

        assert response.status_code == 409
        assert response.body == b'{"description":"conflict","code":"conflict"}'


class TestResponseHelpers:
    """Tests for status helpers."""

    @pytest.mark.parametrize(
        "factory,status",
        [
            (bad_request, 400),
            (not_found, 404),
            (unauthorized, 403),
            (too_early, 425),
        ],
    )
    def test_error_helpers_with_error(self, factory, status):
        """Test helpers taking an error."""
        response = factory(ERR_NOT_FOUND)

        assert response.status_code == status
        assert b"document_not_found" in response.body

    @pytest.mark.parametrize(
        "factory,status",
        [
            (forbidden, 403),
            (request_entity_too_large, 413),
            (page_expired, 419),
            (internal_server_error, 500),
        ],
    )
    def test_error_helpers_without_error(self, factory, status):
        """Test helpers rendering an empty body."""
        response = factory()

        assert response.status_code == status
        assert response.body == b'{"description":"","code":""}'

    def test_success_helpers(self):
        """Test success helpers."""
        assert ok({"a": 1}).status_code == 200
        assert created({"id": "x"}).status_code == 201
        assert no_content().status_code == 204

    def test_found_sets_location(self):
        """Test redirect helper."""
        response = found("https://example.com/next")

        assert response.status_code == 302
        assert response.headers["location"] == "https://example.com/next"


class TestStatusFor:
    """Tests for status resolution."""

    def test_default_map(self):
        """Test codes produced by errkit."""
        assert status_for(invalid_number_param("limit")) == 400
        assert status_for(new("x", "errors_unknown")) == 500

    def test_override(self):
        """Test that explicit mappings win."""
        assert status_for(ERR_NOT_FOUND, {"document_not_found": 404}) == 404

    def test_fallback(self):
        """Test unmapped codes."""
        assert status_for(ERR_NOT_FOUND) == 500
        assert status_for(ERR_NOT_FOUND, default_status=422) == 422


class TestTrackingIDMiddleware:
    """Tests for TrackingIDMiddleware."""

    @pytest.mark.asyncio
    async def test_uses_incoming_header(self):
        """Test that the request header becomes the tracking id."""
        captured = None

        async def mock_app(scope, receive, send):
            nonlocal captured
            captured = get_tracking_id()

        middleware = TrackingIDMiddleware(mock_app)
        scope = {"type": "http", "headers": [(b"x-tracking-id", b"abc-123")]}

        await middleware(scope, None, AsyncMock())

        assert captured == "abc-123"
        assert get_tracking_id() == ""

    @pytest.mark.asyncio
    async def test_generates_id_and_echoes_header(self):
        """Test that a generated id is echoed in the response."""
        captured = None
        sent = []

        async def mock_app(scope, receive, send):
            nonlocal captured
            captured = get_tracking_id()
            await send({"type": "http.response.start", "status": 200, "headers": []})

        async def send(message):
            sent.append(message)

        middleware = TrackingIDMiddleware(mock_app, header_name="Caller-ID")
        await middleware({"type": "http", "headers": []}, None, send)

        assert captured
        assert (b"caller-id", captured.encode()) in sent[0]["headers"]

    @pytest.mark.asyncio
    async def test_passthrough_non_http(self):
        """Test that non-HTTP requests pass through."""
        app_called = False

        async def mock_app(scope, receive, send):
            nonlocal app_called
            app_called = True

        middleware = TrackingIDMiddleware(mock_app)
        await middleware({"type": "lifespan"}, None, None)

        assert app_called


class TestRequestLoggingMiddleware:
    """Tests for RequestLoggingMiddleware."""

    @pytest.mark.asyncio
    async def test_logs_request(self):
        """Test that requests are logged with status."""
        logger = MagicMock()

        async def mock_app(scope, receive, send):
            await send({"type": "http.response.start", "status": 201})
            await send({"type": "http.response.body", "body": b""})

        middleware = RequestLoggingMiddleware(mock_app, logger)
        scope = {"type": "http", "method": "POST", "path": "/items"}

        await middleware(scope, None, AsyncMock())

        logger.info.assert_called_once()
        args, kwargs = logger.info.call_args
        assert args[0] == "POST /items"
        assert kwargs["status"] == 201

    @pytest.mark.asyncio
    async def test_no_logger_passthrough(self):
        """Test passthrough when no logger provided."""
        app_called = False

        async def mock_app(scope, receive, send):
            nonlocal app_called
            app_called = True

        middleware = RequestLoggingMiddleware(mock_app, logger=None)
        await middleware({"type": "http", "method": "GET", "path": "/"}, None, None)

        assert app_called


class TestPageFilter:
    """Tests for paged request filters."""

    def test_defaults(self):
        """Test that absent parameters keep defaults."""
        assert PageFilter.from_query({}) == PageFilter()

    def test_parses_all_parameters(self):
        """Test parsing every recognized parameter."""
        page_filter_ = PageFilter.from_query({
            "limit": "10",
            "offset": "20",
            "fromId": "a",
            "toId": "z",
            "fromDate": "1700000000",
            "toDate": "1800000000",
        })

        assert page_filter_ == PageFilter(
            limit=10,
            offset=20,
            from_id="a",
            to_id="z",
            from_date=1700000000,
            to_date=1800000000,
        )

    @pytest.mark.parametrize("name", ["limit", "offset", "fromDate", "toDate"])
    def test_invalid_number(self, name):
        """Test that non-numeric values raise a classified error."""
        with pytest.raises(ChainError) as exc_info:
            PageFilter.from_query({name: "ten"})

        assert exc_info.value == invalid_number_param(name)

    @pytest.mark.parametrize("raw", [" 12 ", "1_000", "12.0", "0x10", "+", "\u0661"])
    def test_rejects_non_decimal_integers(self, raw):
        """Test that only plain signed decimal integers are accepted."""
        with pytest.raises(ChainError) as exc_info:
            PageFilter.from_query({"limit": raw})

        assert exc_info.value.code == "invalid_param_type"

    def test_accepts_signed_integers(self):
        """Test that an explicit sign is accepted."""
        assert PageFilter.from_query({"offset": "+5", "fromDate": "-1"}) == PageFilter(offset=5, from_date=-1)

    def test_page_serializes_with_aliases(self):
        """Test the page envelope uses camelCase keys."""
        page = Page[str](paging=Paging(limit=2, total=5, first_id="a", last_id="b"), result=["a", "b"])

        assert page.to_dict() == {
            "paging": {"limit": 2, "offset": 0, "total": 5, "firstId": "a", "lastId": "b"},
            "result": ["a", "b"],
        }


class Document(BaseModel):
    title: str = Field(min_length=3, max_length=10)
    kind: Literal["memo", "report"] = "memo"
    pages: int = 1
    author: Optional[EmailStr] = None


class TestValidatePayload:
    """Tests for payload validation."""

    def test_valid(self):
        """Test that valid data returns the model."""
        doc = validate_payload(Document, {"title": "hello", "pages": 3})

        assert doc.title == "hello"
        assert doc.pages == 3

    def test_missing(self):
        """Test required fields."""
        with pytest.raises(ChainError) as exc_info:
            validate_payload(Document, {})

        assert exc_info.value.code == "param_is_required"
        assert str(exc_info.value) == "'title' is required"

    def test_too_short(self):
        """Test minimum length."""
        with pytest.raises(ChainError) as exc_info:
            validate_payload(Document, {"title": "ab"})

        assert exc_info.value.code == "param_length_below_minimum"
        assert str(exc_info.value) == "'title' has a minimum length of 3"

    def test_too_long(self):
        """Test maximum length."""
        with pytest.raises(ChainError) as exc_info:
            validate_payload(Document, {"title": "x" * 11})

        assert exc_info.value.code == "param_length_over_maximum"

    def test_not_in_enum(self):
        """Test literal choices."""
        with pytest.raises(ChainError) as exc_info:
            validate_payload(Document, {"title": "hello", "kind": "poem"})

        assert exc_info.value.code == "param_is_not_present_in_enum"
        assert str(exc_info.value).startswith("'kind' must be one of:")

    def test_not_an_email(self):
        """Test email fields."""
        with pytest.raises(ChainError) as exc_info:
            validate_payload(Document, {"title": "hello", "author": "not-an-address"})

        assert exc_info.value.code == "param_is_not_an_email"
        assert str(exc_info.value) == "'author' must be a valid email address"

    def test_other_errors(self):
        """Test the generic fallback."""
        with pytest.raises(ChainError) as exc_info:
            validate_payload(Document, {"title": "hello", "pages": "many"})

        assert exc_info.value.code == "param_is_invalid"
        assert str(exc_info.value).startswith("'pages' is invalid")


def _build_app(logger=None):
    settings = Settings(web=WebSettings(tracking_header="X-Tracking-Id"))
    app = create_app(
        status_map={"document_not_found": 404},
        logger=logger,
        settings=settings,
    )

    @app.get("/documents/{doc_id}")
    async def get_document(doc_id: str):
        if doc_id == "missing":
            raise ERR_NOT_FOUND.wrap(KeyError("documents.missing"))
        if doc_id == "unmapped":
            raise new("Storage offline", "storage_offline")
        if doc_id == "crash":
            raise RuntimeError("unexpected")
        return {"id": doc_id, "tracking_id": get_tracking_id()}

    @app.get("/documents")
    async def list_documents(filters: PageFilter = Depends(page_filter)):
        return {"limit": filters.limit, "offset": filters.offset}

    @app.get("/search")
    async def search(q: str):
        return {"q": q}

    return app


class TestCreateApp:
    """Tests for the application factory and error handlers."""

    def test_success_echoes_tracking_id(self):
        """Test that the tracking header is propagated and echoed."""
        client = TestClient(_build_app())

        response = client.get("/documents/abc", headers={"X-Tracking-Id": "t-1"})

        assert response.status_code == 200
        assert response.json() == {"id": "abc", "tracking_id": "t-1"}
        assert response.headers["x-tracking-id"] == "t-1"

    def test_chain_error_mapped_status(self):
        """Test that a raised chain renders its head with the mapped status."""
        client = TestClient(_build_app())

        response = client.get("/documents/missing")

        assert response.status_code == 404
        assert response.json() == {"description": "document not found", "code": "document_not_found"}

    def test_interior_causes_are_logged_not_returned(self):
        """Test that causes go to the log only."""
        output = io.StringIO()
        client = TestClient(_build_app(logger=DefaultLogger(output=output)))

        response = client.get("/documents/missing", headers={"X-Tracking-Id": "t-2"})

        assert "documents.missing" not in response.text
        logged = output.getvalue()
        assert "documents.missing" in logged
        assert "[tracking:t-2]" in logged

    def test_unmapped_code_uses_default_status(self):
        """Test the fallback status."""
        client = TestClient(_build_app())

        response = client.get("/documents/unmapped")

        assert response.status_code == 500
        assert response.json()["code"] == "storage_offline"

    def test_unexpected_exception(self):
        """Test that foreign exceptions render an empty 500."""
        client = TestClient(_build_app(), raise_server_exceptions=False)

        response = client.get("/documents/crash")

        assert response.status_code == 500
        assert response.json() == {"description": "", "code": ""}

    def test_page_filter_dependency(self):
        """Test the paging dependency."""
        client = TestClient(_build_app())

        response = client.get("/documents", params={"limit": "5", "offset": "10"})

        assert response.json() == {"limit": 5, "offset": 10}

    def test_page_filter_dependency_error(self):
        """Test that a bad paging parameter becomes a 400."""
        client = TestClient(_build_app())

        response = client.get("/documents", params={"limit": "five"})

        assert response.status_code == 400
        assert response.json() == {
            "description": "'limit' must be a valid number",
            "code": "invalid_param_type",
        }

    def test_request_validation_error(self):
        """Test that FastAPI validation failures use errkit codes."""
        client = TestClient(_build_app())

        response = client.get("/search")

        assert response.status_code == 400
        assert response.json() == {"description": "'q' is required", "code": "param_is_required"}
