"""Delivery checkpoint: the id of the last dispatched notification."""

import logging

from app.config import get_settings
from app.exceptions import StoreUnavailableError, ValidationError
from app.services.kv_store import KeyValueBackend, RedisKeyValueBackend

logger = logging.getLogger("newsline")

# Redis scripts compare numbers as Lua doubles, exact only up to 2**53 - 1.
MAX_CHECKPOINT_ID = 2**53 - 1
MIN_CHECKPOINT_ID = -MAX_CHECKPOINT_ID


def _check_range(last_sent_id: int) -> None:
    if not MIN_CHECKPOINT_ID <= last_sent_id <= MAX_CHECKPOINT_ID:
        raise ValidationError(f"Checkpoint id must be between {MIN_CHECKPOINT_ID} and {MAX_CHECKPOINT_ID}")


class DeliveryCheckpointStore:
    """Reads and writes a single integer checkpoint through a key-value backend.

    `set_last_sent_id` overwrites unconditionally, so the value can move
    backwards. Dispatchers that need "only ever forward" should call
    `advance_if_greater`, which is a compare-and-set on the backend.
    """

    def __init__(self, backend: KeyValueBackend, key: str) -> None:
        self.backend = backend
        self.key = key

    def get_last_sent_id(self) -> int | None:
        raw = self.backend.get(self.key)
        if raw is None:
            return None
        try:
            return int(raw)
        except ValueError:
            logger.error("Checkpoint %s holds non-integer value %r", self.key, raw)
            raise StoreUnavailableError("Checkpoint value is corrupt") from None

    def set_last_sent_id(self, last_sent_id: int) -> None:
        _check_range(last_sent_id)
        self.backend.set(self.key, str(last_sent_id))
        logger.info("Checkpoint %s set to %s", self.key, last_sent_id)

    def advance_if_greater(self, last_sent_id: int) -> bool:
        _check_range(last_sent_id)
        advanced = self.backend.set_if_greater(self.key, last_sent_id)
        if advanced:
            logger.info("Checkpoint %s advanced to %s", self.key, last_sent_id)
        return advanced


_checkpoint_store: DeliveryCheckpointStore | None = None


def get_checkpoint_store() -> DeliveryCheckpointStore:
    """Get singleton checkpoint store backed by Redis."""
    global _checkpoint_store
    if _checkpoint_store is None:
        settings = get_settings()
        _checkpoint_store = DeliveryCheckpointStore(
            backend=RedisKeyValueBackend.from_settings(settings),
            key=settings.CHECKPOINT_KEY,
        )
    return _checkpoint_store


def close_checkpoint_store() -> None:
    """Close the singleton's backend connection, if one was opened."""
    global _checkpoint_store
    if _checkpoint_store is not None:
        _checkpoint_store.backend.close()
        _checkpoint_store = None
