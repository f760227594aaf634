from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.domain.entities.profile import BikeType, CyclistLevel, ProfileEntity


class ProfileResponse(BaseModel):
    """Public profile of a cyclist, serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str | None = Field(None, description="Primary key of the profile")
    user_id: str | None = Field(None, description="ID of the user owning the profile")
    email: str | None = Field(None, description="Email address", examples=["rider@example.com"])
    name: str | None = Field(None, description="Display name", examples=["Alice"])
    level: str | None = Field(None, description="Cycling level", examples=["intermediate"])
    bike_type: str | None = Field(None, description="Preferred bike type", examples=["road"])
    city: str | None = Field(None, description="Home city", examples=["Madrid"])
    latitude: float | None = Field(None, description="Latitude of the home location")
    longitude: float | None = Field(None, description="Longitude of the home location")
    date_of_birth: date | None = Field(None, description="Date of birth")
    avatar: str | None = Field(None, description="Avatar image URL")
    bio: str | None = Field(None, description="Free-form biography")
    is_admin: bool = Field(False, description="Whether the user administers the network")
    last_login_at: datetime | None = Field(None, description="Last login time")
    last_message_sent_at: datetime | None = Field(None, description="Last chat message time")
    last_post_created_at: datetime | None = Field(None, description="Last post time")
    last_friend_accepted_at: datetime | None = Field(None, description="Last accepted friend request time")
    interaction_score: float = Field(0.0, description="Activity score between 0 and 100")
    created_at: datetime | None = Field(None, description="ISO timestamp when the profile was created")
    updated_at: datetime | None = Field(None, description="ISO timestamp of the last profile change")

    @classmethod
    def from_entity(cls, entity: ProfileEntity) -> "ProfileResponse":
        return cls(
            id=entity.id,
            user_id=entity.user_id,
            email=entity.email,
            name=entity.name,
            level=entity.level,
            bike_type=entity.bike_type,
            city=entity.city,
            latitude=entity.latitude,
            longitude=entity.longitude,
            date_of_birth=entity.date_of_birth,
            avatar=entity.avatar,
            bio=entity.bio,
            is_admin=entity.is_admin,
            last_login_at=entity.last_login_at,
            last_message_sent_at=entity.last_message_sent_at,
            last_post_created_at=entity.last_post_created_at,
            last_friend_accepted_at=entity.last_friend_accepted_at,
            interaction_score=entity.interaction_score,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )


class UpdateProfileBody(BaseModel):
    """Request model for updating a profile. Only the fields sent are changed."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, use_enum_values=True)

    name: str | None = Field(None, min_length=1, max_length=255, description="Display name", examples=["Alice"])
    email: str | None = Field(None, max_length=255, description="Email address")
    level: CyclistLevel | None = Field(None, description="Cycling level")
    bike_type: BikeType | None = Field(None, description="Preferred bike type")
    city: str | None = Field(None, min_length=1, max_length=255, description="Home city")
    latitude: float | None = Field(None, ge=-90, le=90, description="Latitude of the home location")
    longitude: float | None = Field(None, ge=-180, le=180, description="Longitude of the home location")
    date_of_birth: date | None = Field(None, description="Date of birth")
    avatar: str | None = Field(None, description="Avatar image URL")
    bio: str | None = Field(None, description="Free-form biography")

    @field_validator("name", "email", "level", "bike_type", "city")
    @classmethod
    def _not_null(cls, value):
        # NOT NULL columns; an explicit null is rejected rather than sent to the database
        if value is None:
            raise ValueError("must not be null")
        return value

    def changed_columns(self) -> dict[str, object]:
        """Fields the client sent, keyed by column name."""
        return self.model_dump(exclude_unset=True)
