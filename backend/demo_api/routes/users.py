"""
SDLC Demo API — User Route Handlers
====================================
"""

import logging

from fastapi import APIRouter, Depends

from demo_api.dependencies import get_user_service
from demo_api.exceptions import utc_timestamp
from demo_api.schemas.common import ErrorResponse
from demo_api.schemas.user import UserCreate, UserListResponse, UserResponse
from demo_api.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=UserListResponse, summary="List all users")
async def list_users(users: UserService = Depends(get_user_service)) -> UserListResponse:
    logger.info("Users list requested")
    data = users.list_users()
    return UserListResponse(data=data, total=len(data), timestamp=utc_timestamp())


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses={404: {"description": "User not found", "model": ErrorResponse}},
    summary="Get a user by ID",
)
async def get_user(
    user_id: int,
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    user = users.get_user(user_id)
    logger.info("User %d requested", user_id)
    return UserResponse(data=user, timestamp=utc_timestamp())


@router.post(
    "",
    status_code=201,
    response_model=UserResponse,
    responses={400: {"description": "Name or email missing", "model": ErrorResponse}},
    summary="Create a user",
)
async def create_user(
    payload: UserCreate,
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    user = users.create_user(payload)
    return UserResponse(
        data=user,
        message="User created successfully",
        timestamp=utc_timestamp(),
    )
