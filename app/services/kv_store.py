"""Key-value backends for shared process-wide values."""

import logging
import threading
from typing import Protocol

import redis
from redis.backoff import ExponentialBackoff
from redis.retry import Retry

from app.config import Settings
from app.exceptions import StoreUnavailableError

logger = logging.getLogger("newsline")

# Writes ARGV[1] only when the key is unset or holds a smaller integer.
SET_IF_GREATER_SCRIPT = """
local current = redis.call('GET', KEYS[1])
if current then
    local stored = tonumber(current)
    if not stored then
        return redis.error_reply("stored value is not a number")
    end
    if stored >= tonumber(ARGV[1]) then
        return 0
    end
end
redis.call('SET', KEYS[1], ARGV[1])
return 1
"""


class KeyValueBackend(Protocol):
    def connect(self) -> None: ...

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def set_if_greater(self, key: str, value: int) -> bool: ...

    def close(self) -> None: ...


class RedisKeyValueBackend:
    """Redis-backed store with a lazily opened, reused client.

    Socket timeouts bound every call. Dropped connections are retried with
    exponential backoff by redis-py; any remaining failure is raised as
    StoreUnavailableError.
    """

    def __init__(
        self,
        host: str,
        port: int,
        db: int = 0,
        password: str | None = None,
        socket_timeout: float = 5.0,
        retry_attempts: int = 3,
    ) -> None:
        self.host = host
        self.port = port
        self.db = db
        self.password = password
        self.socket_timeout = socket_timeout
        self.retry_attempts = retry_attempts
        self._client: redis.Redis | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "RedisKeyValueBackend":
        return cls(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT,
            db=settings.REDIS_DB,
            password=settings.REDIS_PASSWORD,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
            retry_attempts=settings.REDIS_RETRY_ATTEMPTS,
        )

    def connect(self) -> None:
        """Open the connection once; later calls are no-ops."""
        if self._client is not None:
            return
        with self._lock:
            if self._client is not None:
                return
            client = redis.Redis(
                host=self.host,
                port=self.port,
                db=self.db,
                password=self.password,
                socket_timeout=self.socket_timeout,
                socket_connect_timeout=self.socket_timeout,
                retry=Retry(ExponentialBackoff(), self.retry_attempts),
                retry_on_error=[redis.ConnectionError, redis.TimeoutError],
                decode_responses=True,
            )
            try:
                client.ping()
            except redis.RedisError as e:
                client.close()
                logger.error("Redis connection to %s:%s failed: %s", self.host, self.port, e)
                raise StoreUnavailableError("Key-value store unavailable") from e
            logger.info("Connected to Redis at %s:%s", self.host, self.port)
            self._client = client

    def get(self, key: str) -> str | None:
        client = self._connected()
        try:
            return client.get(key)
        except redis.RedisError as e:
            raise StoreUnavailableError("Key-value store unavailable") from e

    def set(self, key: str, value: str) -> None:
        client = self._connected()
        try:
            client.set(key, value)
        except redis.RedisError as e:
            raise StoreUnavailableError("Key-value store unavailable") from e

    def set_if_greater(self, key: str, value: int) -> bool:
        client = self._connected()
        try:
            return bool(client.eval(SET_IF_GREATER_SCRIPT, 1, key, value))
        except redis.RedisError as e:
            raise StoreUnavailableError("Key-value store unavailable") from e

    def close(self) -> None:
        with self._lock:
            if self._client is not None:
                self._client.close()
                self._client = None

    def _connected(self) -> redis.Redis:
        self.connect()
        return self._client  # type: ignore[return-value]
