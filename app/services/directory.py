"""User directory: find-or-create by email plus read, update and delete by id."""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import store_errors
from app.exceptions import NotFoundError, ValidationError
from app.models.user import DEFAULT_ROLES, User
from app.services.credentials import generate_secret, hash_secret

logger = logging.getLogger("newsline")

UPDATABLE_FIELDS = ("email", "first_name", "last_name", "phone_number", "profile_picture_url", "roles")


class UserDirectory:
    """Owns the lifecycle of directory users.

    Auto-provisioned users get a random credential hashed at a separate,
    configurable bcrypt cost. That credential is never handed out and is not
    meant to be used for login.
    """

    def __init__(self, provision_rounds: int) -> None:
        self.provision_rounds = provision_rounds

    def find_or_create(self, db: Session, email: str, display_name: str, photo_url: str) -> tuple[User, bool]:
        """Return (user, is_new). At most one user is ever created per email.

        A concurrent caller that inserts the same email first makes our insert
        fail on the unique index; we then return the winner's row.
        """
        _require(email=email, displayName=display_name, photoUrl=photo_url)

        with store_errors(db):
            existing = self._find_by_email(db, email)
            if existing:
                return existing, False

            user = User(
                email=email,
                first_name=display_name,
                password_hash=hash_secret(generate_secret(), self.provision_rounds),
                profile_picture_url=photo_url,
                roles=list(DEFAULT_ROLES),
            )
            db.add(user)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                winner = self._find_by_email(db, email)
                if winner is None:
                    raise
                logger.info("Concurrent provisioning for %s resolved to user %s", email, winner.id)
                return winner, False

            db.refresh(user)
            logger.info("Provisioned user %s for %s", user.id, email)
            return user, True

    def get_by_id(self, db: Session, user_id: int) -> User:
        with store_errors(db):
            user = db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def update(self, db: Session, user_id: int, patch: dict[str, Any]) -> User:
        """Merge the updatable fields of `patch` into the user. Other keys are ignored."""
        user = self.get_by_id(db, user_id)
        changes = {k: v for k, v in patch.items() if k in UPDATABLE_FIELDS}
        if "roles" in changes and not changes["roles"]:
            raise ValidationError("roles must not be empty")
        for field in ("email", "first_name", "profile_picture_url"):
            if field in changes and not changes[field]:
                raise ValidationError(f"{field} must not be empty")

        with store_errors(db):
            for field, value in changes.items():
                setattr(user, field, value)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                raise ValidationError("Email already in use") from None
            db.refresh(user)
        return user

    def delete(self, db: Session, user_id: int) -> User:
        """Delete the user and return a detached copy of the removed record."""
        user = self.get_by_id(db, user_id)
        with store_errors(db):
            db.refresh(user)
            db.expunge(user)
            db.query(User).filter(User.id == user_id).delete()
            db.commit()
        logger.info("Deleted user %s", user_id)
        return user

    def _find_by_email(self, db: Session, email: str) -> User | None:
        return db.query(User).filter(User.email == email).first()


def _require(**fields: str | None) -> None:
    missing = [name for name, value in fields.items() if not value or not value.strip()]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")


_user_directory: UserDirectory | None = None


def get_user_directory() -> UserDirectory:
    """Get singleton user directory instance."""
    global _user_directory
    if _user_directory is None:
        _user_directory = UserDirectory(provision_rounds=get_settings().PROVISIONED_BCRYPT_ROUNDS)
    return _user_directory
