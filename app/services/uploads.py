"""Blob upload gateway: names, stores and publishes uploaded files."""

import logging
import re

from app.config import get_settings
from app.exceptions import UploadError, ValidationError
from app.services.credentials import generate_secret
from app.services.object_storage import ObjectStorage, S3ObjectStorage

logger = logging.getLogger("newsline")

OBJECT_NAME_BYTES = 16  # 32 hex characters
EXTENSION_PATTERN = re.compile(r"[A-Za-z0-9]{1,10}")


def file_extension(original_name: str) -> str:
    """Return the text after the last dot when it is a short alphanumeric suffix, else ""."""
    if "." not in original_name:
        return ""
    ext = original_name.rsplit(".", 1)[1]
    return ext if EXTENSION_PATTERN.fullmatch(ext) else ""


class BlobUploadGateway:
    """Stores uploads under a random name and returns their public URL."""

    def __init__(self, storage: ObjectStorage, bucket: str, key_prefix: str, cache_control: str) -> None:
        self.storage = storage
        self.bucket = bucket
        self.key_prefix = key_prefix.strip("/")
        self.cache_control = cache_control

    def object_key(self, original_name: str) -> str:
        name = generate_secret(OBJECT_NAME_BYTES)
        ext = file_extension(original_name)
        if ext:
            name = f"{name}.{ext}"
        return f"{self.key_prefix}/{name}" if self.key_prefix else name

    def upload(self, payload: bytes, original_name: str, mime_type: str) -> str:
        """Upload `payload` and return its URL. Raises UploadError on backend failure; no retry."""
        if not payload:
            raise ValidationError("Upload is empty")
        if not self.bucket:
            raise UploadError("Upload bucket is not configured")

        key = self.object_key(original_name)
        try:
            self.storage.put(self.bucket, key, payload, mime_type, self.cache_control)
        except Exception as e:
            logger.error("Error uploading %s to %s: %s", original_name, self.bucket, e)
            raise UploadError() from e

        logger.info("Uploaded %s (%d bytes) as %s", original_name, len(payload), key)
        return self.storage.public_url(self.bucket, key)


_upload_gateway: BlobUploadGateway | None = None


def get_upload_gateway() -> BlobUploadGateway:
    """Get singleton upload gateway backed by S3."""
    global _upload_gateway
    if _upload_gateway is None:
        settings = get_settings()
        _upload_gateway = BlobUploadGateway(
            storage=S3ObjectStorage.from_settings(settings),
            bucket=settings.S3_BUCKET_NAME,
            key_prefix=settings.S3_KEY_PREFIX,
            cache_control=settings.S3_CACHE_CONTROL,
        )
    return _upload_gateway
