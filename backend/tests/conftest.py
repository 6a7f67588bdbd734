from __future__ import annotations

import os
import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlmodel import Session, SQLModel, create_engine

from focusgrid.api.deps import get_db
from focusgrid.core.config import settings
from focusgrid.db import session as db_session_module
from focusgrid.main import app
from focusgrid.models.client import Client, ClientFeature


@pytest.fixture(autouse=True)
def no_default_client(monkeypatch) -> None:
    monkeypatch.setattr(settings, "client_id", None)


@pytest.fixture()
def db_engine(tmp_path):
    test_database_url = os.getenv("TEST_DATABASE_URL")
    if not test_database_url:
        db_path = tmp_path / f"test_{uuid.uuid4().hex}.db"
        test_database_url = f"sqlite:///{db_path}"

    is_postgres = test_database_url.startswith("postgresql")

    admin_engine = None
    schema_name = None

    if is_postgres:
        schema_name = f"test_{uuid.uuid4().hex}"
        admin_engine = create_engine(test_database_url, future=True)
        with admin_engine.connect() as conn:
            conn.execution_options(isolation_level="AUTOCOMMIT").execute(
                text(f'CREATE SCHEMA IF NOT EXISTS "{schema_name}"')
            )
        client_encoding = os.getenv("POSTGRES_CLIENT_ENCODING", "UTF8")
        connect_args = {"options": f"-csearch_path={schema_name},public -cclient_encoding={client_encoding}"}
        engine = create_engine(make_url(test_database_url), connect_args=connect_args, future=True)
    else:
        engine = create_engine(test_database_url, connect_args={"check_same_thread": False})

    SQLModel.metadata.create_all(bind=engine)

    previous_engine = db_session_module.engine
    db_session_module.engine = engine

    def override_dependency():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = override_dependency

    yield engine

    app.dependency_overrides.pop(get_db, None)
    db_session_module.engine = previous_engine
    engine.dispose()
    if is_postgres and admin_engine and schema_name:
        with admin_engine.connect() as conn:
            conn.execution_options(isolation_level="AUTOCOMMIT").execute(
                text(f'DROP SCHEMA IF EXISTS "{schema_name}" CASCADE')
            )
        admin_engine.dispose()


@pytest.fixture()
def unreachable_db(tmp_path):
    """Every request gets a session whose database cannot be opened."""
    engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'nowhere.db'}")

    def override_dependency():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = override_dependency
    yield engine
    app.dependency_overrides.pop(get_db, None)
    engine.dispose()


@pytest.fixture()
def client(db_engine) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def outage_client(unreachable_db) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def db_session(db_engine) -> Session:
    with Session(db_engine) as session:
        yield session


def seed_client(
    session: Session,
    *,
    name: str = "Acme",
    slug: str | None = None,
    features: dict[str, bool] | None = None,
) -> Client:
    tenant = Client(name=name, slug=slug or f"acme-{uuid.uuid4().hex[:6]}")
    session.add(tenant)
    session.flush()
    for feature_name, enabled in (features or {}).items():
        session.add(ClientFeature(client_id=tenant.id, feature_name=feature_name, enabled=enabled))
    session.commit()
    session.refresh(tenant)
    return tenant


def api(path: str) -> str:
    return f"{settings.api_prefix}{path}"
