"""Pytest configuration and fixtures."""

import json
import os
from collections import defaultdict
from collections.abc import Callable, Generator
from contextlib import ExitStack
from datetime import datetime, timedelta, timezone
from itertools import count
from typing import Any
from unittest.mock import MagicMock, patch
from uuid import uuid4

import httpx
import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing application modules
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SECRET_KEY", "test-secret-key")
os.environ.setdefault("PUBLIC_BASE_URL", "https://pay.example.com")
os.environ.setdefault("TRIBOPAY_API_KEY", "tp_test_key")
os.environ.setdefault("SYNCPAY_CLIENT_ID", "sync-client")
os.environ.setdefault("SYNCPAY_CLIENT_SECRET", "sync-secret")

# Every module that resolves the Supabase client at import time
SUPABASE_CLIENT_TARGETS = (
    "src.core.supabase.get_supabase_client",
    "src.services.charge_service.get_supabase_client",
    "src.services.webhook_service.get_supabase_client",
    "src.services.order_service.get_supabase_client",
    "src.services.gateway_config_service.get_supabase_client",
)


class FakeResponse:
    """Mimics the postgrest APIResponse attributes the services read."""

    def __init__(self, data: list[dict[str, Any]]) -> None:
        self.data = data


class FakeQuery:
    """Tiny subset of the postgrest query builder backed by a list of rows."""

    _clock = count()

    def __init__(self, table: "FakeTable", op: str, payload: dict[str, Any] | None = None) -> None:
        self.table = table
        self.op = op
        self.payload = payload
        self.filters: list[tuple[str, Any]] = []
        self._order: tuple[str, bool] | None = None
        self._limit: int | None = None

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self._order = (column, desc)
        return self

    def limit(self, size: int) -> "FakeQuery":
        self._limit = size
        return self

    def _matches(self, row: dict[str, Any]) -> bool:
        return all(str(row.get(column)) == str(value) for column, value in self.filters)

    def execute(self) -> FakeResponse:
        if self.op == "insert":
            created_at = datetime(2025, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=next(self._clock))
            row = {"id": str(uuid4()), "created_at": created_at.isoformat(), **self.payload}
            self.table.rows.append(row)
            return FakeResponse([dict(row)])

        if self.op == "update":
            updated = []
            for row in self.table.rows:
                if self._matches(row):
                    row.update(self.payload)
                    updated.append(dict(row))
            return FakeResponse(updated)

        rows = [dict(row) for row in self.table.rows if self._matches(row)]
        if self._order:
            column, desc = self._order
            rows.sort(key=lambda r: r[column], reverse=desc)
        if self._limit is not None:
            rows = rows[: self._limit]
        return FakeResponse(rows)


class FakeTable:
    def __init__(self) -> None:
        self.rows: list[dict[str, Any]] = []

    def select(self, columns: str = "*") -> FakeQuery:
        return FakeQuery(self, "select")

    def insert(self, payload: dict[str, Any]) -> FakeQuery:
        return FakeQuery(self, "insert", payload)

    def update(self, payload: dict[str, Any]) -> FakeQuery:
        return FakeQuery(self, "update", payload)


class InMemorySupabase:
    """Stand-in for the Supabase client with real insert/update semantics."""

    def __init__(self) -> None:
        self.tables: dict[str, FakeTable] = defaultdict(FakeTable)

    def table(self, name: str) -> FakeTable:
        return self.tables[name]

    def rows(self, name: str) -> list[dict[str, Any]]:
        return [dict(row) for row in self.tables[name].rows]


def _patch_supabase(client: Any) -> ExitStack:
    stack = ExitStack()
    for target in SUPABASE_CLIENT_TARGETS:
        stack.enter_context(patch(target, return_value=client))
    return stack


@pytest.fixture(scope="session")
def test_settings() -> Generator[Any, None, None]:
    """Provide test settings with cleared cache.

    Yields:
        Settings: Test configuration settings.
    """
    from src.core.config import get_settings

    get_settings.cache_clear()

    settings = get_settings()
    yield settings

    get_settings.cache_clear()


@pytest.fixture
def mock_supabase_client() -> Generator[MagicMock, None, None]:
    """Provide a mocked Supabase client.

    Yields:
        MagicMock: Mocked Supabase client for testing.
    """
    mock_client = MagicMock()

    mock_response = MagicMock()
    mock_response.data = []
    mock_client.table.return_value.select.return_value.limit.return_value.execute.return_value = (
        mock_response
    )

    with _patch_supabase(mock_client):
        yield mock_client


@pytest.fixture
def memory_db() -> Generator[InMemorySupabase, None, None]:
    """Provide an in-memory Supabase stand-in wired into every service."""
    db = InMemorySupabase()
    with _patch_supabase(db):
        yield db


@pytest.fixture
def client(mock_supabase_client: MagicMock) -> Generator[TestClient, None, None]:
    """Provide a test client for the FastAPI application.

    Args:
        mock_supabase_client: Mocked Supabase client fixture.

    Yields:
        TestClient: FastAPI test client.
    """
    from src.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def memory_client(memory_db: InMemorySupabase) -> Generator[TestClient, None, None]:
    """Provide a test client whose services share the in-memory store."""
    from src.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def gateway_settings() -> Any:
    """Settings for adapter tests, independent of the environment."""
    from src.core.config import Settings

    return Settings(
        _env_file=None,
        supabase_url="https://test-project.supabase.co",
        supabase_secret_key="test-secret-key",
        public_base_url="https://pay.example.com/",
        tribopay_api_key="tp_test_key",
        syncpay_client_id="sync-client",
        syncpay_client_secret="sync-secret",
        webhook_secret="",
    )


class RecordingTransport:
    """Routes requests to canned responses and records what was sent."""

    def __init__(self, routes: dict[str, Callable[[httpx.Request], httpx.Response]]) -> None:
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get(request.url.path)
        if handler is None:
            return httpx.Response(404, json={"message": "not found"})
        return handler(request)

    def json_body(self, index: int = -1) -> dict[str, Any]:
        return json.loads(self.requests[index].content)


@pytest.fixture
def http_routes() -> Callable[[dict[str, Callable[[httpx.Request], httpx.Response]]], tuple[httpx.AsyncClient, RecordingTransport]]:
    """Build an httpx client whose responses are served from a route table."""

    def factory(routes: dict[str, Callable[[httpx.Request], httpx.Response]]) -> tuple[httpx.AsyncClient, RecordingTransport]:
        recorder = RecordingTransport(routes)
        return httpx.AsyncClient(transport=httpx.MockTransport(recorder)), recorder

    return factory
