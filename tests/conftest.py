import pytest
from fastapi.testclient import TestClient

from quizstore.core.config import get_settings
from quizstore.db import database
from quizstore.main import create_app
from quizstore.services.licenses import LicenseRegistry


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'quizstore-test.db'}"


@pytest.fixture
def db(db_url):
    """
    Session SQLAlchemy sur une base SQLite temporaire (tests des services).
    """
    database.init_engine(db_url)
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def registry(db):
    return LicenseRegistry(db)


@pytest.fixture
def principal(registry):
    registry.create("DEMO-1", notes="tests")
    return registry.authorize("DEMO-1")


@pytest.fixture
def test_client(db_url, monkeypatch):
    """
    TestClient avec une base isolée et quelques variables d'env forcées.
    """
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("APP_NAME", "Quiz Store API (tests)")
    monkeypatch.setenv("DATABASE_URL", db_url)
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost")
    monkeypatch.setenv("SEED_DEFAULTS", "true")
    monkeypatch.setenv("DEFAULT_ADMIN_PASSWORD", "admin123")

    # IMPORTANT: vider le cache des settings pour prendre en compte les env
    get_settings.cache_clear()

    app = create_app()
    with TestClient(app) as client:
        yield client

    get_settings.cache_clear()
