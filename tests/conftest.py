import os

os.environ["DATABASE_URI"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-bytes-for-hs256"
os.environ["ADMIN_PASSWORD"] = ""
os.environ["CLOUDINARY_CLOUD_NAME"] = "demo"

import pytest
from fastapi.testclient import TestClient

from medsales import app
from medsales.core.cloudinary import get_blob_store
from medsales.core.database import Base, SessionLocal, db_engine, init_db
from medsales.core.exceptions import BlobStoreError
from medsales.core.security.jwt import create_token
from medsales.models.user import User, UserRole

PASSWORD = "Sup3r-secret"


class FakeBlobStore:
    """In-memory stand-in for the Cloudinary client."""

    folder = "uploads"

    def __init__(self):
        self.blobs: dict[str, bytes] = {}
        self.fail_delete = False

    def object_key(self, public_id: str) -> str:
        return f"{self.folder}/{public_id}"

    def public_url(self, public_id: str) -> str:
        return f"https://res.cloudinary.com/demo/image/upload/{self.object_key(public_id)}"

    def upload(self, file, public_id: str) -> str:
        self.blobs[public_id] = file.read()
        return self.public_url(public_id)

    def delete(self, public_id: str) -> None:
        if self.fail_delete:
            raise BlobStoreError("Failed to delete file", detail="boom")
        self.blobs.pop(public_id, None)

    def sign_upload(self, public_id: str) -> dict:
        return {
            "folder": self.folder,
            "public_id": public_id,
            "timestamp": 1700000000,
            "signature": "signed",
            "api_key": "key",
        }

    def upload_url(self) -> str:
        return "https://api.cloudinary.com/v1_1/demo/image/upload"


@pytest.fixture(autouse=True)
def tables():
    init_db()
    yield
    Base.metadata.drop_all(bind=db_engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def blob_store():
    store = FakeBlobStore()
    app.dependency_overrides[get_blob_store] = lambda: store
    yield store
    app.dependency_overrides.pop(get_blob_store, None)


@pytest.fixture
def client(blob_store):
    return TestClient(app)


def auth_headers(db, username: str, role: UserRole) -> dict:
    user = User.ensure(db, username, PASSWORD, role)
    return {"Authorization": f"Bearer {create_token(user).token}"}


@pytest.fixture
def admin_headers(db):
    return auth_headers(db, "admin", UserRole.admin)


@pytest.fixture
def editor_headers(db):
    return auth_headers(db, "editor", UserRole.editor)
