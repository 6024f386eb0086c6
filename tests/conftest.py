import os
import tempfile

import pytest

_DB_DIR = tempfile.mkdtemp(prefix="cuebook-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'cuebook.db')}"
os.environ["REDIS_URL"] = ""

from fastapi.testclient import TestClient  # noqa: E402

from cuebook.database import SessionLocal, engine  # noqa: E402
from cuebook.dependencies import get_now  # noqa: E402
from cuebook.main import app  # noqa: E402
from cuebook.models import Base  # noqa: E402
from cuebook.models.generated import (  # noqa: E402
    BilliardTables,
    Durations,
    OperatingSchedules,
)
from cuebook.redis_client import get_redis  # noqa: E402
from cuebook.services.slots.config import WEEKDAY_NAMES  # noqa: E402
from helpers import NOW  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded(db):
    """Open 09:00-22:00 every day, one table, the usual duration catalog."""
    for weekday in WEEKDAY_NAMES:
        db.add(OperatingSchedules(weekday=weekday, open_time="09:00:00", close_time="22:00:00"))
    db.add(BilliardTables(id=1, name="Table 1", billiard_type="Pool"))
    db.add(BilliardTables(id=2, name="Table 2", billiard_type="Snooker", status="Maintenance"))
    for hours in (1, 1.5, 2, 3):
        db.add(Durations(hours=hours))
    db.commit()
    return db


@pytest.fixture
def client():
    app.dependency_overrides[get_now] = lambda: NOW
    app.dependency_overrides[get_redis] = lambda: None
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
