"""Test helpers: config, in-memory store and seed data."""

from sqlalchemy import create_engine, text
from sqlalchemy.pool import StaticPool

from app.config import Config
from app.database import DatabaseManager
from app.services.session_service import PasswordHasher

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin-secret"


def make_config(**overrides) -> Config:
    values = dict(
        DB_URL="sqlite://",
        JWT_SECRET="test-secret",
        PASSWORD_HASH_ROUNDS=1000,
        DEFAULT_USER_PASSWORD="password123",
    )
    values.update(overrides)
    return Config(**values)


def make_db(cfg: Config, with_transactions: bool = True) -> DatabaseManager:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db = DatabaseManager(cfg, engine=engine)
    db.create_schema(with_transactions=with_transactions)
    return db


def insert_admin(db: DatabaseManager, cfg: Config, email: str = ADMIN_EMAIL) -> int:
    with db.get_connection() as conn:
        result = conn.execute(
            text(
                "INSERT INTO accounts (name, email, password_hash, role) "
                "VALUES ('Admin', :email, :pw, 'admin')"
            ),
            {"email": email, "pw": PasswordHasher(cfg).hash_password(ADMIN_PASSWORD)},
        )
        conn.commit()
        return result.lastrowid


def insert_scanner(db: DatabaseManager, scanner_id: int, scanner_type: str, station: str) -> None:
    with db.get_connection() as conn:
        conn.execute(text("INSERT INTO stations (name) VALUES (:name)"), {"name": station})
        station_id = conn.execute(
            text("SELECT id FROM stations WHERE name = :name"), {"name": station}
        ).scalar_one()
        conn.execute(
            text("INSERT INTO scanners (id, type, station_id) VALUES (:id, :type, :sid)"),
            {"id": scanner_id, "type": scanner_type, "sid": station_id},
        )
        conn.commit()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def signup(client, name="Alice", email="alice@example.com", password="s3cret-pass"):
    response = client.post("/api/signup", json={"name": name, "email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()
