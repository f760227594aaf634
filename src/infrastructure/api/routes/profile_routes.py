from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from src.application.dtos.common_dto import INTERNAL_SERVER_ERROR, ApiResponse, ErrorResponse
from src.application.dtos.profile_dto import ProfileResponse, UpdateProfileBody
from src.application.use_cases.get_profile import GetProfileUseCase
from src.application.use_cases.list_profiles import ListProfilesUseCase
from src.application.use_cases.update_profile import NothingToUpdateError, UpdateProfileUseCase
from src.infrastructure.api.dependencies import (
    get_get_profile_use_case,
    get_list_profiles_use_case,
    get_update_profile_use_case,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/profile",
    tags=["Profiles"],
    responses={
        500: {"model": ErrorResponse, "description": "Internal Server Error - The profile store failed"},
    },
)


def _envelope(status_code: int, body: ApiResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.to_body())


def _error(status_code: int, message: str) -> JSONResponse:
    return _envelope(status_code, ApiResponse.fail(message))


@router.get(
    "/all",
    response_model=ApiResponse[list[ProfileResponse]],
    summary="List All Profiles",
    description="""
    Retrieve every cyclist profile, ordered by name ascending.

    No pagination or filtering: the response always holds all profiles.
    On any store failure the response is a generic 500 error.
    """,
    response_description="All profiles wrapped in the response envelope",
)
def list_profiles(use_case: ListProfilesUseCase = Depends(get_list_profiles_use_case)):
    """Get all profiles."""
    try:
        entities = use_case.execute()
    except Exception:
        logger.exception("Get all profiles error")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_SERVER_ERROR)

    data = [ProfileResponse.from_entity(e) for e in entities]
    return _envelope(status.HTTP_200_OK, ApiResponse[list[ProfileResponse]].ok(data))


@router.get(
    "",
    response_model=ApiResponse[ProfileResponse],
    summary="Get Profile",
    description="""
    Retrieve the profile of one user.

    **Query parameters:**
    - `userId`: ID of the user whose profile is requested (required)
    """,
    response_description="The requested profile wrapped in the response envelope",
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request - userId is missing"},
        404: {"model": ErrorResponse, "description": "Not Found - The user has no profile"},
    },
)
def get_profile(
    user_id: str | None = Query(None, alias="userId", description="ID of the profile owner"),
    use_case: GetProfileUseCase = Depends(get_get_profile_use_case),
):
    """Get a profile by user ID."""
    if not user_id:
        return _error(status.HTTP_400_BAD_REQUEST, "User ID is required")
    try:
        entity = use_case.execute(user_id)
    except Exception:
        logger.exception("Get profile error")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_SERVER_ERROR)

    if entity is None:
        return _error(status.HTTP_404_NOT_FOUND, "Profile not found")
    return _envelope(
        status.HTTP_200_OK, ApiResponse[ProfileResponse].ok(ProfileResponse.from_entity(entity))
    )


@router.patch(
    "",
    response_model=ApiResponse[ProfileResponse],
    summary="Update Profile",
    description="""
    Update some fields of a user's profile.

    Send only the fields to change, with camelCase keys
    (`name`, `email`, `level`, `bikeType`, `city`, `latitude`, `longitude`,
    `dateOfBirth`, `avatar`, `bio`). `updatedAt` is refreshed automatically.
    """,
    response_description="The updated profile wrapped in the response envelope",
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request - userId is missing or no fields were sent"},
        404: {"model": ErrorResponse, "description": "Not Found - The user has no profile"},
    },
)
def update_profile(
    body: UpdateProfileBody,
    user_id: str | None = Query(None, alias="userId", description="ID of the profile owner"),
    use_case: UpdateProfileUseCase = Depends(get_update_profile_use_case),
):
    """Update a profile by user ID."""
    if not user_id:
        return _error(status.HTTP_400_BAD_REQUEST, "User ID is required")
    try:
        entity = use_case.execute(user_id, body.changed_columns())
    except NothingToUpdateError as exc:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))
    except Exception:
        logger.exception("Update profile error")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_SERVER_ERROR)

    if entity is None:
        return _error(status.HTTP_404_NOT_FOUND, "Profile not found")
    return _envelope(
        status.HTTP_200_OK, ApiResponse[ProfileResponse].ok(ProfileResponse.from_entity(entity))
    )
