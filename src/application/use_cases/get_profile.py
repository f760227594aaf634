from __future__ import annotations

from dataclasses import dataclass

from src.domain.entities.profile import ProfileEntity
from src.infrastructure.database.repositories.profile_repository import ProfileRepository


@dataclass
class GetProfileUseCase:
    profile_repo: ProfileRepository

    def execute(self, user_id: str) -> ProfileEntity | None:
        return self.profile_repo.get_by_user_id(user_id)
