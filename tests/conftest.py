"""
Pytest configuration and shared fixtures.

This module provides:
- Environment variable setup for tests
- An in-memory stand-in for the Firestore AsyncClient
- An HTTP client wired to the app with the fake database
"""

import copy
import logging
import os
import uuid
from typing import Any, Dict, Optional, Tuple

import pytest


# Set test environment variables BEFORE any imports
# This must happen first to ensure settings load with test values
os.environ["FIREBASE_PROJECT_ID"] = "serviflex-test"
os.environ["SECRET_KEY"] = "test_secret_key_at_least_32_characters_long_for_jwt"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "60"
os.environ["BUSINESS_TIMEZONE"] = "America/Sao_Paulo"
os.environ["LOG_LEVEL"] = "INFO"
os.environ.pop("FIREBASE_CREDENTIALS_PATH", None)

from google.api_core.exceptions import NotFound  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402


Path = Tuple[str, ...]

_OPERATORS = {
    "==": lambda a, b: a == b,
    "!=": lambda a, b: a != b,
    "<": lambda a, b: a < b,
    "<=": lambda a, b: a <= b,
    ">": lambda a, b: a > b,
    ">=": lambda a, b: a >= b,
    "in": lambda a, b: a in b,
    "array_contains": lambda a, b: isinstance(a, list) and b in a,
}


class FakeSnapshot:
    def __init__(self, reference: "FakeDocument", data: Optional[Dict[str, Any]]):
        self.reference = reference
        self.id = reference.id
        self._data = copy.deepcopy(data)

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self._data)


class FakeDocument:
    def __init__(self, db: "FakeFirestore", path: Path):
        self._db = db
        self.path = path
        self.id = path[-1]

    def collection(self, name: str) -> "FakeCollection":
        return FakeCollection(self._db, self.path + (name,))

    async def get(self) -> FakeSnapshot:
        return FakeSnapshot(self, self._db.documents.get(self.path))

    async def set(self, data: Dict[str, Any]) -> None:
        self._db.documents[self.path] = copy.deepcopy(data)

    async def update(self, fields: Dict[str, Any]) -> None:
        if self.path not in self._db.documents:
            raise NotFound(f"No document to update: {'/'.join(self.path)}")
        self._db.documents[self.path].update(copy.deepcopy(fields))

    async def delete(self) -> None:
        self._db.documents.pop(self.path, None)


class FakeQuery:
    """Supports the subset of the query API the repositories use."""

    def __init__(self, db: "FakeFirestore", path: Path, filters=(), order=None, limit_to=None):
        self._db = db
        self._path = path
        self._filters = tuple(filters)
        self._order = order
        self._limit = limit_to

    def _copy(self, **changes) -> "FakeQuery":
        state = {"filters": self._filters, "order": self._order, "limit_to": self._limit}
        state.update(changes)
        return FakeQuery(self._db, self._path, **state)

    def where(self, *, filter) -> "FakeQuery":
        return self._copy(filters=self._filters + (filter,))

    def order_by(self, field_path: str) -> "FakeQuery":
        return self._copy(order=field_path)

    def limit(self, count: int) -> "FakeQuery":
        return self._copy(limit_to=count)

    def _matches(self, data: Dict[str, Any]) -> bool:
        for f in self._filters:
            if f.field_path not in data:
                return False
            if not _OPERATORS[f.op_string](data[f.field_path], f.value):
                return False
        return True

    async def get(self):
        depth = len(self._path) + 1
        results = [
            (path, data)
            for path, data in self._db.documents.items()
            if len(path) == depth and path[:-1] == self._path and self._matches(data)
        ]
        if self._order:
            results = [r for r in results if self._order in r[1]]
            results.sort(key=lambda r: r[1][self._order])
        if self._limit:
            results = results[:self._limit]
        return [FakeSnapshot(FakeDocument(self._db, path), data) for path, data in results]


class FakeCollection(FakeQuery):
    def __init__(self, db: "FakeFirestore", path: Path, **kwargs):
        super().__init__(db, path, **kwargs)

    def document(self, doc_id: Optional[str] = None) -> FakeDocument:
        return FakeDocument(self._db, self._path + (doc_id or uuid.uuid4().hex,))


class FakeFirestore:
    """
    In-memory replacement for google.cloud.firestore.AsyncClient.

    Documents are stored in a flat dict keyed by their path tuple, e.g.
    ("establishments", "e1", "professionals", "p1").
    """

    def __init__(self):
        self.documents: Dict[Path, Dict[str, Any]] = {}

    def collection(self, name: str) -> FakeCollection:
        return FakeCollection(self, (name,))

    def doc(self, *path: str) -> Optional[Dict[str, Any]]:
        """Test helper: raw stored data at a path."""
        return self.documents.get(tuple(path))

    def put(self, *path: str, **data: Any) -> None:
        """Test helper: write raw data at a path."""
        self.documents[tuple(path)] = data


@pytest.fixture
def anyio_backend():
    """
    Configure anyio backend for async tests.

    Returns:
        str: Backend name ("asyncio")
    """
    return "asyncio"


@pytest.fixture
def fake_db() -> FakeFirestore:
    return FakeFirestore()


@pytest.fixture
def app_logging():
    """
    Configure logging the way the lifespan does, then restore the root logger.

    Handlers log at INFO, so every `extra` passed by a route is turned
    into a LogRecord during the request.
    """
    from serviflex.core.logging_config import setup_logging

    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    setup_logging(level="INFO", json_format=True)
    yield
    root.handlers = saved_handlers
    root.setLevel(saved_level)


@pytest.fixture
async def client(fake_db: FakeFirestore, app_logging):
    """
    HTTP client for the app with Firestore replaced by the in-memory fake.

    The lifespan does not run under ASGITransport, so Firebase is never
    initialised; logging is set up by `app_logging` instead.
    """
    from serviflex.core.firebase import get_db
    from serviflex.main import app

    async def override_get_db():
        yield fake_db

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
