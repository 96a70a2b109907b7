"""RFID scan workflow: tag validation plus best-effort transaction logging."""

from sqlalchemy import text

from app.models.enums import TransactionLog
from app.services.scan_service import ScanService
from tests.helpers import bearer, insert_scanner, make_config, make_db


def add_passenger(client, admin_token, tag="TAG123", status="active", email="alice@example.com"):
    response = client.post(
        "/api/users",
        json={"name": "Alice", "tag_id": tag, "email": email, "status": status, "balance": 20},
        headers=bearer(admin_token),
    )
    assert response.status_code == 201, response.text
    return response.json()


def count_transactions(db):
    with db.get_connection() as conn:
        return conn.execute(text("SELECT COUNT(*) FROM transactions")).scalar_one()


class TestScanEndpoint:

    def test_valid_tag_uses_scanner_event(self, client, db, admin_token):
        insert_scanner(db, 7, "exit", "Central")
        add_passenger(client, admin_token)
        response = client.post("/api/rfid/scan", json={"tag_id": "TAG123", "scanner_id": 7})
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "user": {"name": "Alice", "balance": 20},
            "event": "exit",
        }
        assert count_transactions(db) == 1

    def test_unknown_scanner_defaults_to_entry(self, client, db, admin_token):
        add_passenger(client, admin_token)
        response = client.post("/api/rfid/scan", json={"tag_id": "TAG123", "scanner_id": 99})
        assert response.status_code == 200
        assert response.json()["event"] == "entry"

    def test_unknown_tag(self, client):
        response = client.post("/api/rfid/scan", json={"tag_id": "UNKNOWN", "scanner_id": 7})
        assert response.status_code == 404
        assert response.json() == {"error": "Invalid or inactive RFID tag"}

    def test_inactive_tag(self, client, db, admin_token):
        insert_scanner(db, 7, "entry", "Central")
        add_passenger(client, admin_token, status="inactive")
        response = client.post("/api/rfid/scan", json={"tag_id": "TAG123", "scanner_id": 7})
        assert response.status_code == 404
        assert count_transactions(db) == 0

    def test_balance_is_not_debited(self, client, db, admin_token):
        insert_scanner(db, 7, "entry", "Central")
        add_passenger(client, admin_token)
        for _ in range(3):
            body = client.post("/api/rfid/scan", json={"tag_id": "TAG123", "scanner_id": 7}).json()
            assert body["user"]["balance"] == 20

    def test_no_session_required(self, client, db, admin_token):
        add_passenger(client, admin_token)
        response = client.post(
            "/api/rfid/scan",
            json={"tag_id": "TAG123", "scanner_id": 1},
            headers=bearer("garbage"),
        )
        assert response.status_code == 200

    def test_bad_payload(self, client):
        response = client.post("/api/rfid/scan", json={"scanner_id": 7})
        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "Invalid request"
        assert body["details"][0]["loc"] == ["body", "tag_id"]


class TestScanService:

    def _passenger(self, db):
        with db.get_connection() as conn:
            conn.execute(
                text(
                    "INSERT INTO accounts (name, email, password_hash, tag_id, balance) "
                    "VALUES ('Alice', 'alice@example.com', 'x', 'TAG123', 5)"
                )
            )
            conn.commit()

    def test_logged_outcome(self):
        db = make_db(make_config())
        insert_scanner(db, 7, "entry", "Central")
        self._passenger(db)
        with db.get_connection() as conn:
            result = ScanService(db).scan(conn, "TAG123", 7)
        assert result.transaction_log is TransactionLog.LOGGED
        assert result.log_error is None
        assert result.account_name == "Alice"
        assert result.balance == 5
        assert count_transactions(db) == 1

    def test_failed_outcome_when_tables_absent(self):
        db = make_db(make_config(), with_transactions=False)
        self._passenger(db)
        with db.get_connection() as conn:
            result = ScanService(db).scan(conn, "TAG123", 7)
        assert result.transaction_log is TransactionLog.FAILED
        assert result.event == "entry"

    def test_failed_insert_is_swallowed(self):
        # flag forced on, tables missing: both reads and writes fail underneath
        db = make_db(make_config(TRANSACTIONS_ENABLED=True), with_transactions=False)
        self._passenger(db)
        with db.get_connection() as conn:
            result = ScanService(db).scan(conn, "TAG123", 7)
        assert result.transaction_log is TransactionLog.FAILED
        assert "transactions" in result.log_error
        assert result.event == "entry"
        assert result.account_name == "Alice"
