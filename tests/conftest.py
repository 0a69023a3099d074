import os
import tempfile
from typing import Generator

# Point the process-wide settings at throwaway locations before the app is imported.
_tmp = tempfile.mkdtemp(prefix="mock-backend-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_tmp, 'test.db')}")
os.environ.setdefault("UPLOAD_DIR", os.path.join(_tmp, "uploads"))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mock_backend.auth import issue_token
from mock_backend.db import Base
from mock_backend.main import app, get_db, get_file_store
from mock_backend.storage import FileStore


@pytest.fixture(scope="function")
def db_session() -> Generator:
    # Use in-memory SQLite with a single connection
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def file_store(tmp_path) -> FileStore:
    return FileStore(str(tmp_path / "uploads"))


@pytest.fixture(scope="function")
def client(db_session, file_store):
    # Override dependencies to use the same session and a per-test uploads dir
    def override_get_db():
        try:
            yield db_session
        finally:
            pass
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_store] = lambda: file_store
    from fastapi.testclient import TestClient
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def user_headers():
    return {"Authorization": f"Bearer {issue_token('user')}"}


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {issue_token('admin')}"}
