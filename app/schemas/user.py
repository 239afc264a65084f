"""Pydantic schemas for user directory endpoints. Wire names are camelCase."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserCreateRequest(CamelModel):
    email: str
    display_name: str
    photo_url: str


class UserUpdateRequest(CamelModel):
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None
    profile_picture_url: str | None = None
    roles: list[str] | None = None


class UserResponse(CamelModel):
    id: int
    email: str
    first_name: str
    last_name: str
    phone_number: str
    profile_picture_url: str
    roles: list[str]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class UserEnvelope(CamelModel):
    success: bool = True
    data: UserResponse


class FindOrCreateResponse(CamelModel):
    success: bool = True
    is_new_user: bool
    data: UserResponse
