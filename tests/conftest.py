"""Pytest configuration and fixtures."""

import threading

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.models.account import Account  # noqa: F401
from app.models.user import User  # noqa: F401
from app.services.access_gate import AccessGate, get_access_gate
from app.services.auth import AuthService, get_auth_service
from app.services.checkpoint import DeliveryCheckpointStore, get_checkpoint_store
from app.services.object_storage import ObjectStorage
from app.services.uploads import BlobUploadGateway, get_upload_gateway

TEST_TOKEN = "test-token"
AUTH_HEADERS = {"Authorization": f"Bearer {TEST_TOKEN}"}


class InMemoryKeyValueBackend:
    """Key-value backend kept in a dict."""

    def __init__(self) -> None:
        self.values: dict[str, str] = {}
        self.connect_calls = 0
        self._lock = threading.Lock()

    def connect(self) -> None:
        self.connect_calls += 1

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value

    def set_if_greater(self, key: str, value: int) -> bool:
        with self._lock:
            current = self.values.get(key)
            if current is not None and int(current) >= value:
                return False
            self.values[key] = str(value)
            return True

    def close(self) -> None:
        pass


class RecordingObjectStorage(ObjectStorage):
    """Object storage that records puts, or raises `error` if set."""

    def __init__(self, error: Exception | None = None) -> None:
        self.objects: dict[tuple[str, str], dict] = {}
        self.error = error

    def put(self, bucket: str, key: str, body: bytes, content_type: str, cache_control: str) -> None:
        if self.error:
            raise self.error
        self.objects[(bucket, key)] = {"body": body, "content_type": content_type, "cache_control": cache_control}

    def public_url(self, bucket: str, key: str) -> str:
        return f"https://{bucket}.s3.test-region.amazonaws.com/{key}"


@pytest.fixture(name="db_session")
def db_session_fixture():
    """Create an in-memory SQLite database for tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    testing_session_local = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(name="kv_backend")
def kv_backend_fixture() -> InMemoryKeyValueBackend:
    return InMemoryKeyValueBackend()


@pytest.fixture(name="checkpoint_store")
def checkpoint_store_fixture(kv_backend: InMemoryKeyValueBackend) -> DeliveryCheckpointStore:
    return DeliveryCheckpointStore(backend=kv_backend, key="lastSentNewsId")


@pytest.fixture(name="object_storage")
def object_storage_fixture() -> RecordingObjectStorage:
    return RecordingObjectStorage()


@pytest.fixture(name="upload_gateway")
def upload_gateway_fixture(object_storage: RecordingObjectStorage) -> BlobUploadGateway:
    return BlobUploadGateway(
        storage=object_storage,
        bucket="news-bucket",
        key_prefix="banner-image-new",
        cache_control="public, max-age=31536000",
    )


@pytest.fixture(name="client")
def client_fixture(
    db_session: Session,
    checkpoint_store: DeliveryCheckpointStore,
    upload_gateway: BlobUploadGateway,
):
    """Create a test client with overridden backends and disabled rate limiting."""
    from app.rate_limit import limiter
    from main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_access_gate] = lambda: AccessGate(TEST_TOKEN)
    app.dependency_overrides[get_auth_service] = lambda: AuthService(password_rounds=4)
    app.dependency_overrides[get_checkpoint_store] = lambda: checkpoint_store
    app.dependency_overrides[get_upload_gateway] = lambda: upload_gateway
    limiter.enabled = False
    with TestClient(app) as c:
        yield c
    limiter.enabled = True
    app.dependency_overrides.clear()


@pytest.fixture(name="test_user")
def test_user_fixture(client: TestClient) -> dict:
    """Create a directory user through the API and return its JSON."""
    response = client.post(
        "/api/v1/users",
        json={"email": "ann@example.com", "displayName": "Ann", "photoUrl": "http://x/p.png"},
        headers=AUTH_HEADERS,
    )
    assert response.status_code == 200
    return response.json()["data"]
