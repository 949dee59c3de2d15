"""Pytest configuration and fixtures."""

import os

# Keep tests off the real database, log file and background watcher
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["LOG_FILE"] = ""
os.environ["ENABLE_MIDNIGHT_WATCHER"] = "false"

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import tallyboard.models  # noqa: F401
from tallyboard.database import Base
from tallyboard.exceptions import StoreUnavailable
from tallyboard.services.civil_clock import CivilDayClock
from tallyboard.services.document_store import DocumentStore, SQLDocumentStore
from tallyboard.services.tally_service import TallyService

ZONE = "America/Vancouver"


class FrozenClock:
    """Controllable replacement for the wall clock, passed as ``now_func``."""

    def __init__(self, instant: datetime):
        self.instant = instant

    def __call__(self) -> datetime:
        return self.instant

    def set_local(self, year, month, day, hour=0, minute=0, second=0, zone=ZONE):
        from zoneinfo import ZoneInfo

        self.instant = datetime(year, month, day, hour, minute, second, tzinfo=ZoneInfo(zone))

    def advance(self, **kwargs):
        self.instant = self.instant + timedelta(**kwargs)


class FlakyStore(DocumentStore):
    """Wraps a store and fails writes to chosen documents on demand."""

    def __init__(self, inner: DocumentStore):
        self.inner = inner
        self.fail_writes_to = set()
        self.fail_reads = False

    def get(self, collection, document_id):
        if self.fail_reads:
            raise StoreUnavailable(f"Could not read {collection}/{document_id}")
        return self.inner.get(collection, document_id)

    def set(self, collection, document_id, data):
        if (collection, document_id) in self.fail_writes_to or collection in self.fail_writes_to:
            raise StoreUnavailable(f"Could not write {collection}/{document_id}")
        self.inner.set(collection, document_id, data)

    def list_documents(self, collection):
        if self.fail_reads:
            raise StoreUnavailable(f"Could not list {collection}")
        return self.inner.list_documents(collection)


@pytest.fixture(scope="function")
def session_factory():
    """Session factory bound to a fresh in-memory database."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    yield TestingSessionLocal

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def store(session_factory):
    """Document store backed by the test database."""
    return SQLDocumentStore(session_factory=session_factory)


@pytest.fixture
def flaky_store(store):
    return FlakyStore(store)


@pytest.fixture
def frozen_now():
    """Noon on 2024-01-15 in Vancouver (20:00 UTC)."""
    return FrozenClock(datetime(2024, 1, 15, 20, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def clock(frozen_now):
    return CivilDayClock(ZONE, now_func=frozen_now)


@pytest.fixture
def tally_service(store, clock):
    """Tally service with 2024-01-15 loaded."""
    service = TallyService(store, clock, confirmation_phrase="confirm")
    service.load()
    return service
