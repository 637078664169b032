"""Shared fixtures: the in-memory API and transports for the async client."""

import httpx
import pytest
from fastapi.testclient import TestClient

from catalog_api.database import db
from catalog_api.main import app

BASE_URL = "http://test/api"


@pytest.fixture(autouse=True)
def reset_db():
    db.clear()
    yield
    db.clear()


@pytest.fixture
def api():
    """Synchronous client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def asgi_transport():
    """Routes RecordStoreClient requests straight into the FastAPI app."""
    return httpx.ASGITransport(app=app)


def failing_transport(exc_type=httpx.ConnectError):
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc_type("connection refused", request=request)

    return httpx.MockTransport(handler)


def json_transport(payload, status_code=200, calls=None):
    """Answers every request with ``payload``; records request URLs into ``calls``."""

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(str(request.url))
        return httpx.Response(status_code, json=payload)

    return httpx.MockTransport(handler)
