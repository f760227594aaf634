from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from psycopg2 import sql

from src.domain.entities.profile import ProfileEntity
from src.infrastructure.database.postgres_client import PostgresClient

# Columns a client may change through PATCH /api/profile
UPDATABLE_COLUMNS = frozenset(
    {
        "name",
        "email",
        "level",
        "bike_type",
        "city",
        "latitude",
        "longitude",
        "date_of_birth",
        "avatar",
        "bio",
    }
)

_TRUE_STRINGS = frozenset({"true", "t", "1", "yes"})
_FALSE_STRINGS = frozenset({"false", "f", "0", "no", ""})


def list_profiles_query() -> str:
    """SQL for the full profile listing, ordered by display name."""
    return "SELECT * FROM profiles ORDER BY name ASC"


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return str(value)


def _as_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float, Decimal)):
            number = float(value)
        elif isinstance(value, str):
            number = float(Decimal(value.strip()))
        else:
            return None
    except (InvalidOperation, ValueError, OverflowError):
        return None
    # NaN and infinity have no JSON representation
    return number if math.isfinite(number) else None


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return False


def _as_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def _as_date(value: Any) -> date | None:
    # datetime is a subclass of date, so test it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        # a timestamp string keeps only its date part
        date_part = value.split("T", 1)[0].split(" ", 1)[0]
        try:
            return date.fromisoformat(date_part)
        except ValueError:
            return None
    return None


def row_to_entity(row: Mapping[str, Any]) -> ProfileEntity:
    """Convert one profiles row to a ProfileEntity.

    Never raises: missing columns and values of an unexpected type become
    empty fields, and unknown columns are ignored. The listing maps rows in
    a loop and one bad row must not abort the others.
    """
    score = _as_float(row.get("interaction_score"))
    return ProfileEntity(
        id=_as_text(row.get("id")),
        user_id=_as_text(row.get("user_id")),
        email=_as_text(row.get("email")),
        name=_as_text(row.get("name")),
        level=_as_text(row.get("level")),
        bike_type=_as_text(row.get("bike_type")),
        city=_as_text(row.get("city")),
        latitude=_as_float(row.get("latitude")),
        longitude=_as_float(row.get("longitude")),
        date_of_birth=_as_date(row.get("date_of_birth")),
        avatar=_as_text(row.get("avatar")),
        bio=_as_text(row.get("bio")),
        is_admin=_as_bool(row.get("is_admin")),
        last_login_at=_as_datetime(row.get("last_login_at")),
        last_message_sent_at=_as_datetime(row.get("last_message_sent_at")),
        last_post_created_at=_as_datetime(row.get("last_post_created_at")),
        last_friend_accepted_at=_as_datetime(row.get("last_friend_accepted_at")),
        interaction_score=score if score is not None else 0.0,
        created_at=_as_datetime(row.get("created_at")),
        updated_at=_as_datetime(row.get("updated_at")),
    )


class ProfileRepository:
    def __init__(self, pg_client: PostgresClient | None) -> None:
        self.pg_client = pg_client

    def _client(self) -> PostgresClient:
        if self.pg_client is None:
            raise RuntimeError("Profile store is not configured")
        return self.pg_client

    def list_all(self) -> list[ProfileEntity]:
        client = self._client()
        try:
            rows = client.execute_many(list_profiles_query())
        except Exception as exc:
            raise RuntimeError(f"PostgreSQL list profiles failed: {exc}") from exc
        return [row_to_entity(row) for row in rows]

    def get_by_user_id(self, user_id: str) -> ProfileEntity | None:
        client = self._client()
        try:
            row = client.execute_one("SELECT * FROM profiles WHERE user_id = %s", (user_id,))
        except Exception as exc:
            raise RuntimeError(f"PostgreSQL get profile failed: {exc}") from exc
        return row_to_entity(row) if row else None

    def update(self, user_id: str, fields: Mapping[str, Any]) -> ProfileEntity | None:
        """Update the given columns of a user's profile.

        Args:
            user_id: Owner of the profile.
            fields: Column name to new value; every key must be in UPDATABLE_COLUMNS.

        Returns:
            The updated profile, or None when the user has no profile.
        """
        unknown = set(fields) - UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Columns not updatable: {', '.join(sorted(unknown))}")
        if not fields:
            raise ValueError("No fields to update")

        columns = list(fields)
        assignments = sql.SQL(", ").join(
            sql.SQL("{} = {}").format(sql.Identifier(col), sql.Placeholder()) for col in columns
        )
        query = sql.SQL(
            "UPDATE profiles SET {}, updated_at = CURRENT_TIMESTAMP WHERE user_id = %s RETURNING *"
        ).format(assignments)
        params = tuple(fields[col] for col in columns) + (user_id,)

        client = self._client()
        try:
            row = client.execute_one(query, params)
        except Exception as exc:
            raise RuntimeError(f"PostgreSQL update profile failed: {exc}") from exc
        return row_to_entity(row) if row else None
