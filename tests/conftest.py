import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import coffee_club.config as config_mod
from coffee_club.app_factory import create_app
from coffee_club.db import get_db, get_session_factory
from coffee_club.models import Base
from coffee_club.routes import limiter
from coffee_club.seed_menu import seed_menu

# Test admin credentials
TEST_ADMIN_USERNAME = "testadmin"
TEST_ADMIN_PASSWORD = "testpassword123"
TEST_SHOP_ID = "shop-test-001"


@pytest.fixture
def engine(tmp_path):
    """SQLite engine backed by a file in tmp_path.

    A file database (not :memory: + StaticPool) because the dialog loader
    reads from several worker threads, each with its own connection.
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'coffee_club_test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def shop_id(monkeypatch):
    monkeypatch.setattr(config_mod, "SHOP_ID", TEST_SHOP_ID)
    return TEST_SHOP_ID


@pytest.fixture
def seeded(db_session, shop_id):
    """Demo catalog: Latte (sized), Cortado (ratio recipe), House Drip Coffee."""
    return seed_menu(db_session, shop_id=shop_id)


@pytest.fixture
def client(session_factory, seeded, monkeypatch):
    """FastAPI TestClient on a fresh app wired to the seeded test database.

    Sets up test admin credentials and disables rate limiting.
    """
    monkeypatch.setattr(config_mod, "ADMIN_USERNAME", TEST_ADMIN_USERNAME)
    monkeypatch.setattr(config_mod, "ADMIN_PASSWORD", TEST_ADMIN_PASSWORD)
    monkeypatch.setattr(limiter, "enabled", False)

    app = create_app()

    def override_get_db():
        db_sess = session_factory()
        try:
            yield db_sess
        finally:
            db_sess.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_auth():
    """Returns HTTP Basic Auth tuple for admin endpoints."""
    return (TEST_ADMIN_USERNAME, TEST_ADMIN_PASSWORD)
