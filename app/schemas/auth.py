"""Pydantic schemas for authentication endpoints."""

from pydantic import BaseModel


class RegisterRequest(BaseModel):
    username: str
    password: str


class LoginRequest(BaseModel):
    username: str
    password: str


class AccountResponse(BaseModel):
    id: int
    username: str

    model_config = {"from_attributes": True}


class RegisterResponse(BaseModel):
    success: bool = True
    data: AccountResponse


class LoginResponse(BaseModel):
    success: bool = True
    verified: bool
    username: str
