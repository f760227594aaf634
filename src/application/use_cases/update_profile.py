from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from src.domain.entities.profile import ProfileEntity
from src.infrastructure.database.repositories.profile_repository import ProfileRepository


class NothingToUpdateError(ValueError):
    """Raised when an update request carries no fields."""


@dataclass
class UpdateProfileUseCase:
    profile_repo: ProfileRepository

    def execute(self, user_id: str, changes: Mapping[str, Any]) -> ProfileEntity | None:
        """
        Apply a partial update to a user's profile.

        Returns None when the user has no profile.
        """
        if not changes:
            raise NothingToUpdateError("No fields to update")
        return self.profile_repo.update(user_id, changes)
