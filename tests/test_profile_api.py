"""Profile assembly and its transaction-history degradation."""

from fastapi.testclient import TestClient

from app.main import create_app
from app.services.session_service import SessionIssuer
from tests.helpers import bearer, insert_admin, insert_scanner, make_config, make_db, signup


def create_tagged_user(client, admin_token, tag="TAG123", email="alice@example.com"):
    response = client.post(
        "/api/users",
        json={"name": "Alice", "tag_id": tag, "email": email, "balance": 12.5},
        headers=bearer(admin_token),
    )
    assert response.status_code == 201, response.text
    return response.json()


def login(client, email="alice@example.com", password="password123"):
    response = client.post("/api/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


class TestProfile:

    def test_token_yields_own_account_only(self, client):
        alice = signup(client, name="Alice", email="alice@example.com")
        bob = signup(client, name="Bob", email="bob@example.com")

        response = client.get("/api/profile", headers=bearer(alice["token"]))
        assert response.status_code == 200
        assert response.json()["user"]["id"] == alice["user"]["id"]
        assert response.json()["user"]["name"] == "Alice"

        response = client.get("/api/profile", headers=bearer(bob["token"]))
        assert response.json()["user"]["id"] == bob["user"]["id"]

    def test_untagged_user_has_no_history(self, client):
        alice = signup(client)
        body = client.get("/api/profile", headers=bearer(alice["token"])).json()
        assert body["recentTransactions"] == []
        assert "password_hash" not in body["user"]

    def test_deleted_account_is_404(self, client, sessions):
        token = sessions.issue(999, "user")
        response = client.get("/api/profile", headers=bearer(token))
        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}

    def test_recent_transactions_newest_first_and_capped(self, client, db, admin_token):
        insert_scanner(db, 7, "entry", "Central")
        insert_scanner(db, 8, "exit", "Harbour")
        create_tagged_user(client, admin_token)
        for scanner_id in (7, 8, 7, 8, 7, 8):
            response = client.post("/api/rfid/scan", json={"tag_id": "TAG123", "scanner_id": scanner_id})
            assert response.status_code == 200

        token = login(client)
        transactions = client.get("/api/profile", headers=bearer(token)).json()["recentTransactions"]
        assert len(transactions) == 5
        assert [t["scanner_id"] for t in transactions] == [8, 7, 8, 7, 8]
        assert transactions[0]["scanner_type"] == "exit"
        assert transactions[0]["station_name"] == "Harbour"
        assert transactions[1]["event"] == "entry"
        assert transactions[1]["station_name"] == "Central"


class TestProfileWithoutTransactionTables:

    def test_probe_disables_history(self):
        cfg = make_config()
        db = make_db(cfg, with_transactions=False)
        with TestClient(create_app(cfg, db)) as client:
            assert db.transactions_enabled is False
            admin_token = _admin_token(cfg, db)
            create_tagged_user(client, admin_token)
            response = client.get("/api/profile", headers=bearer(login(client)))
            assert response.status_code == 200
            assert response.json()["recentTransactions"] == []

    def test_flag_on_but_tables_missing_still_degrades(self):
        cfg = make_config(TRANSACTIONS_ENABLED=True)
        db = make_db(cfg, with_transactions=False)
        with TestClient(create_app(cfg, db)) as client:
            assert db.transactions_enabled is True
            admin_token = _admin_token(cfg, db)
            create_tagged_user(client, admin_token)
            response = client.get("/api/profile", headers=bearer(login(client)))
            assert response.status_code == 200
            assert response.json()["recentTransactions"] == []


def _admin_token(cfg, db):
    return SessionIssuer(cfg).issue(insert_admin(db, cfg), "admin")
