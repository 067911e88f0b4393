"""Shared test configuration.

Environment variables must be set before any ``tasket`` module is imported,
because the database engine is created at import time.
"""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "tasket_realtime_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ["ENABLE_SCHEDULER"] = "false"

from tasket.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

import pytest  # noqa: E402

from tests.fakes import (  # noqa: E402
    FakeIdentityResolver,
    FrozenClock,
    InMemoryNotificationStore,
)


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture()
def identity() -> FakeIdentityResolver:
    return FakeIdentityResolver()


@pytest.fixture()
def notification_store() -> InMemoryNotificationStore:
    return InMemoryNotificationStore()


@pytest.fixture()
def hub(identity: FakeIdentityResolver, clock: FrozenClock):
    from tasket.infrastructure.realtime import RealtimeHub

    return RealtimeHub(identity, clock=clock)


@pytest.fixture()
def database():
    """Recreate every table and return the database module."""

    from tasket.infrastructure import database as database_module
    from tasket.infrastructure import models  # noqa: F401

    database_module.Base.metadata.drop_all(bind=database_module.engine, checkfirst=True)
    database_module.Base.metadata.create_all(bind=database_module.engine)
    yield database_module
    database_module.Base.metadata.drop_all(bind=database_module.engine, checkfirst=True)


@pytest.fixture()
def seed(database):
    """Insert rows through the ORM and return them refreshed."""

    def _seed(*models):
        with database.SessionLocal() as session:
            session.add_all(models)
            session.commit()
            for model in models:
                session.refresh(model)
            session.expunge_all()
        return models

    return _seed
