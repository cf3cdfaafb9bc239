"""Shared test fixtures for the Goodwill API."""

import os
from datetime import datetime, timedelta

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from goodwill.core.database import Base, get_db
from goodwill.core.security import create_access_token
from goodwill.models import User, Like
from goodwill.schemas.quality import QualityCategory, QualityWithMetadata


@pytest.fixture
def engine():
    """In-memory SQLite database shared by every connection."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    Session = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def make_user(db):
    """Create a user whose account is `age` old."""
    def _make(phone_number, age=timedelta(days=45), is_active=True, created_at=None):
        user = User(
            phone_number=phone_number,
            is_active=is_active,
            created_at=created_at or datetime.utcnow() - age,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture
def make_like(db):
    """Insert a like row directly, bypassing the ledger and its quota."""
    def _make(
        from_phone_number,
        to_phone_number,
        qualities=None,
        is_endorsed=False,
        used_search=True,
        is_mother_quality=False,
        created_at=None,
    ):
        like = Like(
            from_phone_number=from_phone_number,
            to_phone_number=to_phone_number,
            qualities=qualities if qualities is not None else [quality("Calm", QualityCategory.WISDOM)],
            is_endorsed=is_endorsed,
            used_search=used_search,
            is_mother_quality=is_mother_quality,
            created_at=created_at or datetime.utcnow(),
        )
        db.add(like)
        db.commit()
        db.refresh(like)
        return like
    return _make


def quality(value, category=QualityCategory.EMOTIONAL, **extra):
    """Stored form of a quality attribution."""
    return QualityWithMetadata(value=value, category=category, **extra).to_storage()


def auth_headers(phone_number):
    return {"Authorization": f"Bearer {create_access_token(phone_number)}"}


@pytest.fixture
def client(db):
    from fastapi.testclient import TestClient
    from goodwill.main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
