"""User directory API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import require_bearer_token
from app.schemas.user import (
    FindOrCreateResponse,
    UserCreateRequest,
    UserEnvelope,
    UserResponse,
    UserUpdateRequest,
)
from app.services.directory import UserDirectory, get_user_directory

router = APIRouter(
    prefix="/api/v1/users",
    tags=["Users"],
    dependencies=[Depends(require_bearer_token)],
)


@router.post("", response_model=FindOrCreateResponse)
def find_or_create_user(
    body: UserCreateRequest,
    db: Session = Depends(get_db),
    directory: UserDirectory = Depends(get_user_directory),
) -> FindOrCreateResponse:
    """Return the user with this email, creating it with a random credential if absent."""
    user, is_new = directory.find_or_create(db, body.email, body.display_name, body.photo_url)
    return FindOrCreateResponse(is_new_user=is_new, data=UserResponse.model_validate(user))


@router.get("/{user_id}", response_model=UserEnvelope)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    directory: UserDirectory = Depends(get_user_directory),
) -> UserEnvelope:
    """Get a single user by ID."""
    return UserEnvelope(data=UserResponse.model_validate(directory.get_by_id(db, user_id)))


@router.put("/{user_id}", response_model=UserEnvelope)
def update_user(
    user_id: int,
    body: UserUpdateRequest,
    db: Session = Depends(get_db),
    directory: UserDirectory = Depends(get_user_directory),
) -> UserEnvelope:
    """Apply a partial update to a user."""
    user = directory.update(db, user_id, body.model_dump(exclude_unset=True, exclude_none=True))
    return UserEnvelope(data=UserResponse.model_validate(user))


@router.delete("/{user_id}", response_model=UserEnvelope)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    directory: UserDirectory = Depends(get_user_directory),
) -> UserEnvelope:
    """Delete a user and return the removed record."""
    return UserEnvelope(data=UserResponse.model_validate(directory.delete(db, user_id)))
