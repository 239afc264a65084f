"""Tests for the user directory service."""

import pytest
from sqlalchemy.orm import Session

from app.exceptions import NotFoundError, ValidationError
from app.models.user import User
from app.services.credentials import verify_secret
from app.services.directory import UserDirectory


@pytest.fixture(name="directory")
def directory_fixture() -> UserDirectory:
    return UserDirectory(provision_rounds=4)


class TestFindOrCreate:
    """Tests for find-or-create by email."""

    def test_creates_on_empty_directory(self, db_session: Session, directory: UserDirectory):
        user, is_new = directory.find_or_create(db_session, "new@example.com", "Ann", "http://x/p.png")
        assert is_new is True
        assert user.id is not None
        assert user.email == "new@example.com"
        assert user.first_name == "Ann"
        assert user.profile_picture_url == "http://x/p.png"
        assert user.roles == ["ROLE_USER"]
        assert user.last_name == ""
        assert user.phone_number == ""
        assert user.password_hash.startswith("$2b$04$")
        assert user.created_at is not None
        assert user.updated_at is not None

    def test_second_call_returns_existing(self, db_session: Session, directory: UserDirectory):
        first, first_new = directory.find_or_create(db_session, "ann@example.com", "Ann", "http://x/p.png")
        second, second_new = directory.find_or_create(db_session, "ann@example.com", "Other", "http://x/q.png")
        assert first_new is True
        assert second_new is False
        assert second.id == first.id
        assert second.first_name == "Ann"
        assert db_session.query(User).count() == 1

    @pytest.mark.parametrize(
        "email,display_name,photo_url",
        [("", "Ann", "http://x/p.png"), ("a@example.com", " ", "http://x/p.png"), ("a@example.com", "Ann", "")],
    )
    def test_missing_fields_rejected(
        self, db_session: Session, directory: UserDirectory, email: str, display_name: str, photo_url: str
    ):
        with pytest.raises(ValidationError):
            directory.find_or_create(db_session, email, display_name, photo_url)
        assert db_session.query(User).count() == 0

    def test_lost_race_returns_winner(self, db_session: Session, directory: UserDirectory, monkeypatch):
        """A caller whose lookup missed a concurrent insert gets the winner back, not a duplicate."""
        winner, _ = directory.find_or_create(db_session, "race@example.com", "First", "http://x/1.png")

        real_find = UserDirectory._find_by_email
        calls = []

        def stale_find(self, db, email):
            calls.append(email)
            if len(calls) == 1:
                return None
            return real_find(self, db, email)

        monkeypatch.setattr(UserDirectory, "_find_by_email", stale_find)

        user, is_new = directory.find_or_create(db_session, "race@example.com", "Second", "http://x/2.png")
        assert is_new is False
        assert user.id == winner.id
        assert user.first_name == "First"
        assert db_session.query(User).filter(User.email == "race@example.com").count() == 1

    def test_provisioned_credential_is_random(self, db_session: Session, directory: UserDirectory):
        user, _ = directory.find_or_create(db_session, "a@example.com", "A", "http://x/a.png")
        other, _ = directory.find_or_create(db_session, "b@example.com", "B", "http://x/b.png")
        assert user.password_hash != other.password_hash
        assert not verify_secret("", user.password_hash)


class TestGetUpdateDelete:
    """Tests for id-based operations."""

    def test_get_by_id(self, db_session: Session, directory: UserDirectory):
        user, _ = directory.find_or_create(db_session, "ann@example.com", "Ann", "http://x/p.png")
        assert directory.get_by_id(db_session, user.id).email == "ann@example.com"

    def test_get_missing(self, db_session: Session, directory: UserDirectory):
        with pytest.raises(NotFoundError):
            directory.get_by_id(db_session, 9999)

    def test_update_changes_only_given_field(self, db_session: Session, directory: UserDirectory):
        user, _ = directory.find_or_create(db_session, "ann@example.com", "Ann", "http://x/p.png")
        before = {
            "id": user.id,
            "email": user.email,
            "first_name": user.first_name,
            "phone_number": user.phone_number,
            "password_hash": user.password_hash,
            "profile_picture_url": user.profile_picture_url,
            "roles": list(user.roles),
            "created_at": user.created_at,
        }

        updated = directory.update(db_session, user.id, {"last_name": "Z"})

        assert updated.last_name == "Z"
        after = {key: getattr(updated, key) for key in before}
        assert after == before

    def test_update_ignores_protected_fields(self, db_session: Session, directory: UserDirectory):
        user, _ = directory.find_or_create(db_session, "ann@example.com", "Ann", "http://x/p.png")
        original_hash = user.password_hash
        updated = directory.update(db_session, user.id, {"id": 42, "password_hash": "plain", "phone_number": "555"})
        assert updated.id == user.id
        assert updated.password_hash == original_hash
        assert updated.phone_number == "555"

    def test_update_missing(self, db_session: Session, directory: UserDirectory):
        with pytest.raises(NotFoundError):
            directory.update(db_session, 9999, {"last_name": "Z"})

    def test_update_rejects_empty_roles(self, db_session: Session, directory: UserDirectory):
        user, _ = directory.find_or_create(db_session, "ann@example.com", "Ann", "http://x/p.png")
        with pytest.raises(ValidationError):
            directory.update(db_session, user.id, {"roles": []})

    def test_update_to_taken_email_rejected(self, db_session: Session, directory: UserDirectory):
        directory.find_or_create(db_session, "ann@example.com", "Ann", "http://x/p.png")
        bob, _ = directory.find_or_create(db_session, "bob@example.com", "Bob", "http://x/b.png")
        with pytest.raises(ValidationError):
            directory.update(db_session, bob.id, {"email": "ann@example.com"})
        assert directory.get_by_id(db_session, bob.id).email == "bob@example.com"

    def test_delete_returns_prior_record(self, db_session: Session, directory: UserDirectory):
        user, _ = directory.find_or_create(db_session, "ann@example.com", "Ann", "http://x/p.png")
        user_id = user.id

        deleted = directory.delete(db_session, user_id)

        assert deleted.id == user_id
        assert deleted.email == "ann@example.com"
        with pytest.raises(NotFoundError):
            directory.get_by_id(db_session, user_id)

    def test_delete_missing(self, db_session: Session, directory: UserDirectory):
        with pytest.raises(NotFoundError):
            directory.delete(db_session, 9999)
