from __future__ import annotations

from fastapi import Depends

from src.application.use_cases.get_profile import GetProfileUseCase
from src.application.use_cases.list_profiles import ListProfilesUseCase
from src.application.use_cases.update_profile import UpdateProfileUseCase
from src.infrastructure.database.postgres_client import PostgresClient, get_postgres_client
from src.infrastructure.database.repositories.profile_repository import ProfileRepository


def get_db_client() -> PostgresClient | None:
    return get_postgres_client()


def get_profile_repo(client: PostgresClient | None = Depends(get_db_client)) -> ProfileRepository:
    return ProfileRepository(client)


def get_list_profiles_use_case(
    profiles: ProfileRepository = Depends(get_profile_repo),
) -> ListProfilesUseCase:
    return ListProfilesUseCase(profiles)


def get_get_profile_use_case(
    profiles: ProfileRepository = Depends(get_profile_repo),
) -> GetProfileUseCase:
    return GetProfileUseCase(profiles)


def get_update_profile_use_case(
    profiles: ProfileRepository = Depends(get_profile_repo),
) -> UpdateProfileUseCase:
    return UpdateProfileUseCase(profiles)
