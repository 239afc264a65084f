"""Delivery checkpoint API endpoints."""

from fastapi import APIRouter, Depends

from app.dependencies import require_bearer_token
from app.schemas.checkpoint import AdvanceResponse, CheckpointRequest, CheckpointResponse
from app.services.checkpoint import DeliveryCheckpointStore, get_checkpoint_store

router = APIRouter(
    prefix="/api/v1/checkpoint",
    tags=["Checkpoint"],
    dependencies=[Depends(require_bearer_token)],
)


@router.get("", response_model=CheckpointResponse)
def get_checkpoint(store: DeliveryCheckpointStore = Depends(get_checkpoint_store)) -> CheckpointResponse:
    """Return the last sent id, or null if nothing has been sent yet."""
    return CheckpointResponse(last_sent_id=store.get_last_sent_id())


@router.put("", response_model=CheckpointResponse)
def set_checkpoint(
    body: CheckpointRequest,
    store: DeliveryCheckpointStore = Depends(get_checkpoint_store),
) -> CheckpointResponse:
    """Overwrite the last sent id. Smaller values are accepted."""
    store.set_last_sent_id(body.last_sent_id)
    return CheckpointResponse(last_sent_id=body.last_sent_id)


@router.post("/advance", response_model=AdvanceResponse)
def advance_checkpoint(
    body: CheckpointRequest,
    store: DeliveryCheckpointStore = Depends(get_checkpoint_store),
) -> AdvanceResponse:
    """Move the last sent id forward only if the given id is greater."""
    advanced = store.advance_if_greater(body.last_sent_id)
    return AdvanceResponse(advanced=advanced, last_sent_id=store.get_last_sent_id())
