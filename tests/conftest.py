import os
import tempfile

# Keep the module-level engine away from the working tree
os.environ.setdefault(
    "PRAYER_DIARY_DB_PATH", os.path.join(tempfile.gettempdir(), "prayer_diary_test.db")
)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from prayer_diary.database import Base, get_db, register_functions
from prayer_diary.main import app
from prayer_diary.models import ApprovalState, MonthFilter, PrayerTopic, Profile

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
register_functions(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    """Fresh in-memory database per test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_person(db):
    """Create an approved, visible profile on the calendar."""

    def _make(name, day=0, months=MonthFilter.ALL, **kwargs):
        kwargs.setdefault("approval_state", ApprovalState.APPROVED.value)
        profile = Profile(
            full_name=kwargs.pop("full_name", name),
            display_name=name,
            pray_day=day,
            pray_months=int(months),
            **kwargs,
        )
        db.add(profile)
        db.commit()
        db.refresh(profile)
        return profile

    return _make


@pytest.fixture
def make_topic(db):
    def _make(title, day=0, months=MonthFilter.ALL, **kwargs):
        topic = PrayerTopic(title=title, pray_day=day, pray_months=int(months), **kwargs)
        db.add(topic)
        db.commit()
        db.refresh(topic)
        return topic

    return _make


@pytest.fixture
def editor(make_person):
    return make_person("Calendar Editor", prayer_calendar_editor=True)


@pytest.fixture
def admin(make_person):
    return make_person("Site Admin", user_role="Administrator")


def auth(profile):
    """Request headers identifying the calling member."""
    return {"X-Profile-Id": str(profile.id)}
