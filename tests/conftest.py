"""Shared fixtures: the app wired to an in-memory SQLite store."""

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.services.session_service import SessionIssuer
from tests.helpers import insert_admin, make_config, make_db


@pytest.fixture
def config():
    return make_config()


@pytest.fixture
def db(config):
    return make_db(config)


@pytest.fixture
def client(config, db):
    app = create_app(config, db)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def sessions(config):
    return SessionIssuer(config)


@pytest.fixture
def admin_token(config, db, sessions):
    admin_id = insert_admin(db, config)
    return sessions.issue(admin_id, "admin")
