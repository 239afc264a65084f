"""Pydantic schemas for upload endpoints."""

from pydantic import BaseModel


class UploadResponse(BaseModel):
    success: bool = True
    url: str
