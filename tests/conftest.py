import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.database import Base, create_database_tables
from app.main import create_app

ALLOWED_ORIGIN = "http://localhost:3000"


@pytest.fixture()
def app_settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'students_test.db'}",
        CONFIG_FILE=str(tmp_path / "missing.yaml"),
        CORS_ALLOWED_ORIGINS=[ALLOWED_ORIGIN],
    )


@pytest.fixture()
def app(app_settings):
    return create_app(app_settings)


@pytest.fixture()
def engine(app):
    engine = app.state.engine
    create_database_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db(app, engine):
    session = app.state.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(app, engine):
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def broken_storage(engine):
    """Drop the students table so every query fails at the driver."""
    Base.metadata.drop_all(bind=engine)
