from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.schema import ensure_schema
from app.db.session import create_db_engine, get_db
from app.main import app


@pytest.fixture()
def engine():
    engine = create_db_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    ensure_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_maker(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_maker):
    session = session_maker()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_maker):
    def _get_db():
        session = session_maker()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def make_spot(client):
    def _make_spot(**overrides) -> dict:
        payload = {
            "name": "Central ATM",
            "description": "24h cash machine",
            "category": "facility",
            "type": "ATM",
            "latitude": 0.0,
            "longitude": 0.0,
            "address": "1 Main St",
            "image_url": "https://example.com/atm.png",
        }
        payload.update(overrides)
        resp = client.post("/spots", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make_spot
