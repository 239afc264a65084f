"""Pydantic schemas for delivery checkpoint endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from app.services.checkpoint import MAX_CHECKPOINT_ID, MIN_CHECKPOINT_ID


class CheckpointRequest(BaseModel):
    last_sent_id: int = Field(alias="lastSentId", ge=MIN_CHECKPOINT_ID, le=MAX_CHECKPOINT_ID)

    model_config = ConfigDict(populate_by_name=True)


class CheckpointResponse(BaseModel):
    success: bool = True
    last_sent_id: int | None = Field(alias="lastSentId")

    model_config = ConfigDict(populate_by_name=True)


class AdvanceResponse(BaseModel):
    success: bool = True
    advanced: bool
    last_sent_id: int | None = Field(alias="lastSentId")

    model_config = ConfigDict(populate_by_name=True)
