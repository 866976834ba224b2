"""Pytest configuration and fixtures for Artist Shield tests."""

from collections.abc import Generator
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from artistshield.api.deps import get_db
from artistshield.core.time import utcnow
from artistshield.main import app
from artistshield.models.base import Base
from artistshield.models.saved_ipi import RecordType, SavedIpi
from artistshield.schemas.split_sheet import Publisher, SongInfo, Writer

# Use SQLite in-memory for tests (fast, isolated)
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass  # Don't close the session here, let the db fixture handle it

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def saved_ipis(db: Session) -> list[SavedIpi]:
    """Three saved records, oldest first."""
    now = utcnow()
    rows = [
        SavedIpi(
            name="Jane Doe",
            ipi_number="123456789",
            type=RecordType.WRITER.value,
            created_at=now - timedelta(hours=2),
        ),
        SavedIpi(
            name="Acme Music Publishing",
            ipi_number="98765432100",
            type=RecordType.PUBLISHER.value,
            created_at=now - timedelta(hours=1),
        ),
        SavedIpi(
            name="Calvin Broadus",
            ipi_number="5550001112",
            type=RecordType.PERFORMER.value,
            created_at=now,
        ),
    ]
    db.add_all(rows)
    db.commit()
    for row in rows:
        db.refresh(row)
    return rows


@pytest.fixture
def song_info() -> SongInfo:
    return SongInfo(title="Midnight Drive", artist_name="The Night Shift")


@pytest.fixture
def balanced_writers() -> list[Writer]:
    """A writer at 60% with a publisher at 40%: totals 100."""
    return [
        Writer(
            full_name="Jane Doe",
            email="jane@example.com",
            pro="ASCAP",
            ipi_number="123456789",
            role="Composer",
            share=60,
            publisher=Publisher(
                name="Acme Music Publishing",
                email="royalties@acme.example",
                pro="ASCAP",
                share=40,
            ),
        )
    ]
