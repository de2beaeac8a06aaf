import pytest
from fastapi.testclient import TestClient

# FORCE model registration
import gigflow.models  # noqa

from gigflow.core.config import Settings
from gigflow.db.base import Base
from gigflow.db.session import build_engine, build_session_factory
from gigflow.db.store import EntityStore
from gigflow.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'gigflow_test.db'}",
        auto_create_schema=True,
        jwt_secret_key="test-secret",
        log_level="WARNING",
    )


@pytest.fixture
def engine(settings):
    engine = build_engine(settings)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def store(engine):
    return EntityStore(build_session_factory(engine))


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as c:
        yield c
    app.state.engine.dispose()
