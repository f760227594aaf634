from __future__ import annotations

from dataclasses import dataclass

from src.domain.entities.profile import ProfileEntity
from src.infrastructure.database.repositories.profile_repository import ProfileRepository


@dataclass
class ListProfilesUseCase:
    profile_repo: ProfileRepository

    def execute(self) -> list[ProfileEntity]:
        """Return every profile, ordered by name as the store sorted them."""
        return self.profile_repo.list_all()
