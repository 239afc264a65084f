"""Access dependencies for FastAPI routes."""

from fastapi import Depends, Request

from app.exceptions import UnauthorizedError
from app.services.access_gate import AccessGate, get_access_gate


def bearer_token(request: Request) -> str | None:
    """Return the token from an `Authorization: Bearer <token>` header, if any."""
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[7:]
    return None


def require_bearer_token(
    request: Request,
    gate: AccessGate = Depends(get_access_gate),
) -> None:
    """Reject the request with 401 unless the bearer token passes the gate."""
    if not gate.check(bearer_token(request)):
        raise UnauthorizedError()
