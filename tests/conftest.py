import secrets
import sys
from pathlib import Path
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure project root on sys.path so 'app' package resolves without an install
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app.main import app  # type: ignore
from app.database import Base  # type: ignore
from app.api import deps  # type: ignore
"""Pytest fixtures and factories.

Each test gets its own in-memory SQLite database. StaticPool keeps a single
connection so the test session and request sessions see the same data.
"""
from app.config import (
    XML_PATH_ENABLED,
    XML_PATH_DEVELOPMENT_ACCOUNT_NUMBER,
    XML_PATH_DEVELOPMENT_LICENSE_KEY,
    XML_PATH_DEVELOPMENT_COMPANY_CODE,
    XML_PATH_PRODUCTION_ACCOUNT_NUMBER,
    XML_PATH_PRODUCTION_LICENSE_KEY,
    XML_PATH_PRODUCTION_COMPANY_CODE,
)
from app.integrations.base import ConnectivityClient
from app.models.db import Store, TaxRule
from app.models.db.enums import ConfigScopeCode
from app.services.avatax_config import AvaTaxConfig
from app.services.scope_config import ScopeConfigWriter

DEVELOPMENT_CREDENTIALS = {
    XML_PATH_DEVELOPMENT_ACCOUNT_NUMBER: "2000123456",
    XML_PATH_DEVELOPMENT_LICENSE_KEY: "DEVLICENSEKEY",
    XML_PATH_DEVELOPMENT_COMPANY_CODE: "DEFAULT",
}

PRODUCTION_CREDENTIALS = {
    XML_PATH_PRODUCTION_ACCOUNT_NUMBER: "1100123456",
    XML_PATH_PRODUCTION_LICENSE_KEY: "PRODLICENSEKEY",
    XML_PATH_PRODUCTION_COMPANY_CODE: "ACME",
}


class FakeConnectivityClient(ConnectivityClient):
    """Records pings; returns ``result`` or raises ``error`` when set."""

    def __init__(self, result: bool = True, error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls: list = []

    def ping(self, is_production, scope):
        self.calls.append((is_production, scope))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture()
def fake_client():
    return FakeConnectivityClient()

@pytest.fixture()
def client(session_factory, fake_client):
    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[deps.get_db] = _override_get_db
    app.dependency_overrides[deps.get_connectivity_client] = lambda: fake_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

@pytest.fixture()
def avatax_config(db_session):
    return AvaTaxConfig(db_session)

# ---------- Data factory helpers ----------

@pytest.fixture()
def config_factory(db_session):
    """Write scoped config values the same way the admin endpoint does."""
    def _set(values: dict, scope: ConfigScopeCode = ConfigScopeCode.DEFAULT, scope_id: int = 0):
        return ScopeConfigWriter(db_session).save(scope, scope_id, values)
    return _set

@pytest.fixture()
def store_factory(db_session):
    def _create(store_id: int, website_id: int = 0, code: str | None = None):
        store = Store(
            store_id=store_id,
            website_id=website_id,
            code=code or f"store_{store_id}_{secrets.token_hex(2)}",
            name=f"Store {store_id}",
        )
        db_session.add(store)
        db_session.commit()
        db_session.refresh(store)
        return store
    return _create

@pytest.fixture()
def tax_rule_factory(db_session):
    def _create(code: str | None = None, is_active: bool = True):
        rule = TaxRule(code=code or f"rule_{secrets.token_hex(3)}", is_active=is_active)
        db_session.add(rule)
        db_session.commit()
        return rule
    return _create

@pytest.fixture()
def enabled_module(config_factory):
    """AvaTax enabled at default scope in development mode with full credentials."""
    config_factory({XML_PATH_ENABLED: "1", **DEVELOPMENT_CREDENTIALS})
