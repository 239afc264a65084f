"""File upload API endpoints."""

from fastapi import APIRouter, Depends, UploadFile
from starlette.concurrency import run_in_threadpool

from app.config import get_settings
from app.dependencies import require_bearer_token
from app.exceptions import ValidationError
from app.schemas.upload import UploadResponse
from app.services.uploads import BlobUploadGateway, get_upload_gateway

router = APIRouter(
    prefix="/api/v1/uploads",
    tags=["Uploads"],
    dependencies=[Depends(require_bearer_token)],
)


async def read_limited(upload: UploadFile, max_bytes: int) -> bytes:
    """Read the upload in chunks, failing once it exceeds `max_bytes`."""
    chunks = []
    size = 0
    chunk_size = 1024 * 64  # 64KB chunks
    while True:
        chunk = await upload.read(chunk_size)
        if not chunk:
            break
        size += len(chunk)
        if size > max_bytes:
            raise ValidationError(f"File too large. Maximum: {max_bytes // (1024 * 1024)}MB")
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("", response_model=UploadResponse)
async def upload_file(
    file: UploadFile,
    gateway: BlobUploadGateway = Depends(get_upload_gateway),
) -> UploadResponse:
    """Store a file in object storage and return its public URL."""
    if not file.filename:
        raise ValidationError("File name is required")

    settings = get_settings()
    payload = await read_limited(file, settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024)
    url = await run_in_threadpool(
        gateway.upload, payload, file.filename, file.content_type or "application/octet-stream"
    )
    return UploadResponse(url=url)
