import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

# FORCE model registration
import procurement.models  # noqa

from procurement.core.config import Settings
from procurement.db.base import Base
from procurement.db.session import build_session_factory
from procurement.main import create_app
from procurement.services.registry import build_services
from procurement.tests.factories import World, build_world


@pytest.fixture(scope="function")
def engine():
    # one shared in-memory database per test
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture(scope="function")
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def services(session_factory):
    return build_services(session_factory)


@pytest.fixture(scope="function")
def world(db) -> World:
    return build_world(db)


@pytest.fixture(scope="function")
def client(session_factory):
    settings = Settings(database_url="sqlite://", log_level="WARNING")
    app = create_app(settings, session_factory=session_factory)
    return TestClient(app)
