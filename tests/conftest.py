from __future__ import annotations

import os
from typing import Any, BinaryIO, Callable

import pytest
from fastapi.testclient import TestClient


def pytest_configure() -> None:
    # Ensure the SQLAlchemy engine is created against sqlite for tests.
    os.environ["ORM_DB_URL"] = "sqlite:///./test.db"
    os.environ["ORM_USE_MYSQL"] = "false"
    os.environ["ENVIRONMENT"] = "test"
    os.environ["ADMIN_EMAILS"] = '["admin@example.com"]'
    os.environ["JWT_SECRET"] = "test-secret"
    os.environ["LOG_LEVEL"] = "WARNING"
    # Tests never reach the real image provider.
    for key in ("CLOUD_NAME", "API_KEY", "API_SECRET"):
        os.environ.pop(key, None)


class FakeUploader:
    def __init__(self) -> None:
        self.uploads: list[str] = []
        self.discarded: list[str] = []
        self.fail = False

    def upload(self, file: BinaryIO, *, filename: str | None = None) -> str:
        from waysbucks.services.image_upload import ImageUploadError

        if self.fail:
            raise ImageUploadError("Image upload failed")
        data = file.read()
        assert data, "uploader received an empty stream"
        self.uploads.append(filename or "")
        return f"https://res.cloudinary.com/demo/image/upload/WaysBucks/{filename}"

    def discard(self, url: str) -> None:
        self.discarded.append(url)


@pytest.fixture()
def uploader() -> FakeUploader:
    return FakeUploader()


@pytest.fixture()
def client(uploader: FakeUploader) -> Any:
    from waysbucks.database import Base, engine
    from waysbucks.main import create_app
    from waysbucks.routers.dependencies import get_image_uploader

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    app = create_app()
    app.dependency_overrides[get_image_uploader] = lambda: uploader
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def login(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Register (if needed) and log in, returning the login payload plus auth headers."""

    def _login(email: str, password: str = "SecretPass123", name: str | None = "Tester") -> dict[str, Any]:
        client.post("/api/v1/register", json={"email": email, "password": password, "name": name})
        r = client.post("/api/v1/login", json={"email": email, "password": password})
        assert r.status_code == 200, r.text
        data = r.json()["data"]
        data["headers"] = {"Authorization": f"Bearer {data['token']}"}
        return data

    return _login
