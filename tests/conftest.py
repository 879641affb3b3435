import os

# Keep the app from touching a real database file during import
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_ON_STARTUP", "0")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from deck_tracker.core.admin_auth import ADMIN_SECRET_HEADER
from deck_tracker.core.config import Settings, get_settings
from deck_tracker.core.database import get_session, init_db
from deck_tracker.main import app
from deck_tracker.models import Deck, Event
from deck_tracker.seed.seed_decks import seed_decks

ADMIN_SECRET = "test-admin-secret"


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def settings():
    return Settings(database_url="sqlite://", admin_secret=ADMIN_SECRET, seed_on_startup=False)


@pytest.fixture
def client(session, settings):
    """Test client sharing the test session and settings with the app."""
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {ADMIN_SECRET_HEADER: ADMIN_SECRET}


@pytest.fixture
def decks(session):
    seed_decks(session)
    return {deck.name: deck for deck in session.query(Deck).all()}


@pytest.fixture
def make_event(session):
    def _make_event(name: str = "Friday Night Magic") -> Event:
        event = Event(name=name)
        session.add(event)
        session.commit()
        session.refresh(event)
        return event

    return _make_event


@pytest.fixture
def event(make_event):
    return make_event()
