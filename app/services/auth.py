"""Authentication service."""

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import store_errors
from app.exceptions import InvalidCredentialsError, NotFoundError, ValidationError
from app.models.account import Account
from app.services.credentials import hash_secret, verify_secret


@dataclass
class LoginResult:
    """Outcome of a successful login. No session token is issued."""

    verified: bool
    account_id: int
    username: str


class AuthService:
    """Handles account registration and password verification."""

    def __init__(self, password_rounds: int) -> None:
        self.password_rounds = password_rounds

    def register(self, db: Session, username: str, password: str) -> Account:
        """Register a new account. Raises ValidationError on blank fields or a taken username."""
        if not username or not username.strip() or not password:
            raise ValidationError("Username and password are required")
        username = username.strip()

        with store_errors(db):
            existing = db.query(Account).filter(Account.username == username).first()
            if existing:
                raise ValidationError("Username already registered")

            account = Account(username=username, password_hash=hash_secret(password, self.password_rounds))
            db.add(account)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                raise ValidationError("Username already registered") from None
            db.refresh(account)

        return account

    def login(self, db: Session, username: str, password: str) -> LoginResult:
        """Verify a username/password pair."""
        with store_errors(db):
            account = db.query(Account).filter(Account.username == username.strip()).first()
        if not account:
            raise NotFoundError("Account not found")

        if not verify_secret(password, account.password_hash):
            raise InvalidCredentialsError()

        with store_errors(db):
            account.last_login_at = datetime.utcnow()
            db.commit()

        return LoginResult(verified=True, account_id=account.id, username=account.username)


_auth_service: AuthService | None = None


def get_auth_service() -> AuthService:
    """Get singleton auth service instance."""
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService(password_rounds=get_settings().PASSWORD_BCRYPT_ROUNDS)
    return _auth_service
