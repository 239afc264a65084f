"""Object storage backends."""

import threading
from abc import ABC, abstractmethod

import boto3
from botocore.config import Config

from app.config import Settings


class ObjectStorage(ABC):
    """Interface for object storage backends."""

    @abstractmethod
    def put(self, bucket: str, key: str, body: bytes, content_type: str, cache_control: str) -> None:
        """Store `body` under `bucket`/`key`. Raises on any backend failure."""

    @abstractmethod
    def public_url(self, bucket: str, key: str) -> str:
        """Return the public URL of a stored object."""


class S3ObjectStorage(ObjectStorage):
    """Amazon S3 via boto3, with bounded timeouts and no retries."""

    def __init__(
        self,
        region: str,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        connect_timeout: float = 5.0,
        read_timeout: float = 30.0,
    ) -> None:
        self.region = region
        self.access_key_id = access_key_id
        self.secret_access_key = secret_access_key
        self.config = Config(
            region_name=region,
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
            retries={"total_max_attempts": 1, "mode": "standard"},
        )
        self._client = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3ObjectStorage":
        return cls(
            region=settings.AWS_REGION,
            access_key_id=settings.AWS_ACCESS_KEY_ID,
            secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
            connect_timeout=settings.S3_CONNECT_TIMEOUT,
            read_timeout=settings.S3_READ_TIMEOUT,
        )

    def _get_client(self):
        """Lazy-create the S3 client."""
        if self._client is None:
            with self._lock:
                if self._client is None:
                    self._client = boto3.client(
                        "s3",
                        region_name=self.region,
                        aws_access_key_id=self.access_key_id,
                        aws_secret_access_key=self.secret_access_key,
                        config=self.config,
                    )
        return self._client

    def put(self, bucket: str, key: str, body: bytes, content_type: str, cache_control: str) -> None:
        self._get_client().put_object(
            Bucket=bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
            CacheControl=cache_control,
        )

    def public_url(self, bucket: str, key: str) -> str:
        return f"https://{bucket}.s3.{self.region}.amazonaws.com/{key}"
