import os
import sys
import uuid
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

# Ensure project root is on sys.path so 'src' is importable during tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DB_DISABLED", "1")


class FakeProfileStore:
    """Stands in for PostgresClient, keeping rows in insertion order.

    Honors ``ORDER BY name ASC`` the way PostgreSQL would, so tests see the
    store sorting rather than the handler.
    """

    def __init__(self, rows: list[dict[str, Any]] | None = None) -> None:
        self.rows = list(rows or [])
        self.queries: list[tuple[Any, tuple]] = []
        self.error: Exception | None = None

    def _check(self, query: Any, params: tuple) -> None:
        self.queries.append((query, params))
        if self.error is not None:
            raise self.error

    def execute_many(self, query: Any, params: tuple = ()) -> list[dict[str, Any]]:
        self._check(query, params)
        rows = [dict(r) for r in self.rows]
        if isinstance(query, str) and "ORDER BY name ASC" in query:
            rows.sort(key=lambda r: r.get("name") or "")
        return rows

    def execute_one(self, query: Any, params: tuple = ()) -> dict[str, Any] | None:
        self._check(query, params)
        user_id = params[-1] if params else None
        for row in self.rows:
            if row.get("user_id") == user_id:
                return dict(row)
        return None

    def test_connection(self) -> bool:
        return self.error is None


@pytest.fixture()
def store() -> FakeProfileStore:
    return FakeProfileStore()


@pytest.fixture()
def app(store):
    # lazy import after env configured
    from src.infrastructure.api.dependencies import get_db_client
    from src.main import create_app

    application = create_app()
    application.dependency_overrides[get_db_client] = lambda: store
    return application


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)


def make_row(name: str, **overrides: Any) -> dict[str, Any]:
    slug = name.lower().replace(" ", "-")
    row = {
        "id": str(uuid.uuid5(uuid.NAMESPACE_URL, slug)),
        "user_id": f"user-{slug}",
        "email": f"{slug}@example.com",
        "name": name,
        "level": "intermediate",
        "bike_type": "road",
        "city": "Madrid",
        "latitude": "40.41677500",
        "longitude": "-3.70379000",
        "date_of_birth": None,
        "avatar": None,
        "bio": None,
        "is_admin": False,
        "last_login_at": None,
        "last_message_sent_at": None,
        "last_post_created_at": None,
        "last_friend_accepted_at": None,
        "interaction_score": "0.00",
        "created_at": "2025-11-12T10:00:00+00:00",
        "updated_at": "2025-11-12T10:00:00+00:00",
    }
    row.update(overrides)
    return row


@pytest.fixture()
def row_factory():
    return make_row
