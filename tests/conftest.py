import os

# Must be set before webcommon.database.session builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENV", "test")

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from webcommon.database.session import get_db
from webcommon.models import Base, Notice


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    from main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def notices(db_session):
    """Three notices spread over January and February 2024."""
    rows = [
        Notice(title="Maintenance window", content="Sunday night", status="published",
               created_at=datetime(2024, 1, 5, 9, 0), updated_at=datetime(2024, 1, 5, 9, 0)),
        Notice(title="New pricing", content=None, status="draft",
               created_at=datetime(2024, 1, 31, 18, 30), updated_at=datetime(2024, 1, 31, 18, 30)),
        Notice(title="Office closed", content="Public holiday", status="closed",
               created_at=datetime(2024, 2, 14, 12, 0), updated_at=datetime(2024, 2, 14, 12, 0)),
    ]
    db_session.add_all(rows)
    db_session.commit()
    for row in rows:
        db_session.refresh(row)
    return rows
