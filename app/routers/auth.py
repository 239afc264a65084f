"""Authentication API endpoints."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.rate_limit import limiter
from app.schemas.auth import AccountResponse, LoginRequest, LoginResponse, RegisterRequest, RegisterResponse
from app.services.auth import AuthService, get_auth_service

router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])


@router.post("/register", response_model=RegisterResponse)
@limiter.limit("5/minute")
def register(
    request: Request,
    body: RegisterRequest,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
) -> RegisterResponse:
    """Register a username/password account."""
    account = auth_service.register(db, body.username, body.password)
    return RegisterResponse(data=AccountResponse.model_validate(account))


@router.post("/login", response_model=LoginResponse)
@limiter.limit("10/minute")
def login(
    request: Request,
    body: LoginRequest,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """Verify a username/password pair. No session token is issued."""
    result = auth_service.login(db, body.username, body.password)
    return LoginResponse(verified=result.verified, username=result.username)
