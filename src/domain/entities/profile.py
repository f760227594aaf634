from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class CyclistLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class BikeType(str, Enum):
    ROAD = "road"
    MOUNTAIN = "mountain"
    HYBRID = "hybrid"
    ELECTRIC = "electric"
    GRAVEL = "gravel"
    OTHER = "other"


@dataclass(frozen=True)
class ProfileEntity:
    id: str | None  # primary key of the profiles row
    user_id: str | None
    email: str | None = None
    name: str | None = None
    level: str | None = None
    bike_type: str | None = None
    city: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    date_of_birth: date | None = None
    avatar: str | None = None
    bio: str | None = None
    is_admin: bool = False
    # Activity tracking, maintained by database triggers
    last_login_at: datetime | None = None
    last_message_sent_at: datetime | None = None
    last_post_created_at: datetime | None = None
    last_friend_accepted_at: datetime | None = None
    interaction_score: float = 0.0
    created_at: datetime | None = None
    updated_at: datetime | None = None
