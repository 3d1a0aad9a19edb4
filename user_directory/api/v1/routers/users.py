from typing import List, Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from user_directory.db.session import get_session
from user_directory.api.v1.schemas import UserDto
from user_directory.api.v1.services import UserService, get_user_service
from user_directory.core.models import UserNotFoundError
from user_directory.core.models.base import MAX_ID
from user_directory.core.schemas import ErrorResponse

prefix = "/users"
router = APIRouter(prefix=prefix)

_invalid = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}
_not_found = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}

# Ids outside the 64-bit id column cannot exist and are rejected as bad input
UserId = Annotated[int, Path(ge=-MAX_ID - 1, le=MAX_ID)]


@router.post("/enroll", response_model=UserDto, status_code=status.HTTP_201_CREATED, responses=_invalid)
async def add_user(
        user: UserDto,
        db: Annotated[AsyncSession, Depends(get_session)],
        user_service: Annotated[UserService, Depends(get_user_service)]
):
    """Create a new user."""
    return await user_service.add_user(db, user)


@router.put("/edit/{user_id}", response_model=UserDto, responses={**_invalid, **_not_found})
async def update_user(
        user_id: UserId,
        user: UserDto,
        db: Annotated[AsyncSession, Depends(get_session)],
        user_service: Annotated[UserService, Depends(get_user_service)]
):
    """Update an existing user and return it."""
    return await user_service.update_user(db, user_id, user)


@router.get("", response_model=List[UserDto])
async def get_all_users(
        db: Annotated[AsyncSession, Depends(get_session)],
        user_service: Annotated[UserService, Depends(get_user_service)]
):
    """List every user."""
    return await user_service.get_all_users(db)


# Declared before /{user_id} so "search" is never parsed as an id
@router.get("/search", response_model=UserDto, responses=_not_found)
async def find_user(
        name: Annotated[str, Query()],
        db: Annotated[AsyncSession, Depends(get_session)],
        user_service: Annotated[UserService, Depends(get_user_service)]
):
    """Find a user by exact name."""
    user = await user_service.find_user_by_name(db, name)
    if user is None:
        raise UserNotFoundError(f"User with name '{name}' not found.")
    return user


@router.get("/{user_id}", response_model=UserDto, responses=_not_found)
async def read_user(
        user_id: UserId,
        db: Annotated[AsyncSession, Depends(get_session)],
        user_service: Annotated[UserService, Depends(get_user_service)]
):
    """Get a user by ID."""
    return await user_service.find_user_by_id(db, user_id)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, responses=_not_found)
async def delete_user(
        user_id: UserId,
        db: Annotated[AsyncSession, Depends(get_session)],
        user_service: Annotated[UserService, Depends(get_user_service)]
):
    """Delete a user by ID."""
    if not await user_service.delete_user(db, user_id):
        raise UserNotFoundError(f"User with ID {user_id} not found.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
