import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("REDIS_URL", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from smartspend.database.connection import Base, get_db
from smartspend.main import app
from smartspend.models.model import Category
from smartspend.services.cache import LookupCache
from smartspend.services.file_storage import FileStorage

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session, tmp_path):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.state.cache = LookupCache()
    app.state.file_storage = FileStorage(str(tmp_path / "uploads"))
    yield TestClient(app)
    app.dependency_overrides.clear()


def register_and_login(client, username="alice", password="s3cret-pass"):
    response = client.post(
        "/api/user/create",
        json={
            "full_name": username.title(),
            "username": username,
            "email": f"{username}@example.com",
            "password": password,
        },
    )
    assert response.status_code == 201
    response = client.post(
        "/api/user/login", data={"username": username, "password": password}
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def auth_headers(client):
    return register_and_login(client)


@pytest.fixture
def categories(db_session):
    rows = [
        Category(name="Groceries", color="#4CAF50", icon="shopping_cart"),
        Category(name="Transport", color="#2196F3", icon="directions_car"),
        Category(name="Salary", color="#FFC107", icon="payments"),
    ]
    db_session.add_all(rows)
    db_session.commit()
    for row in rows:
        db_session.refresh(row)
    return {row.name: row for row in rows}


@pytest.fixture
def login(client):
    def _login(username):
        return register_and_login(client, username=username)

    return _login
