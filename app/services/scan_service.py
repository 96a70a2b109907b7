# =======================================================================================
# app/services/scan_service.py - RFID scan handling
# =======================================================================================
import logging
from dataclasses import dataclass
from typing import Optional
from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from ..database import DatabaseManager
from ..models.enums import ACTIVE_STATUS, DEFAULT_EVENT, TransactionLog
from ..utils.exceptions import InvalidTagError

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    """Outcome of a scan: the tag check always succeeded, the log write may not have."""
    account_id: int
    account_name: str
    balance: float
    event: str
    transaction_log: TransactionLog
    log_error: Optional[str] = None


class ScanService:
    """Validates scanned tags and records entry/exit transactions."""

    def __init__(self, db: DatabaseManager):
        self.db = db

    def resolve_event(self, conn: Connection, scanner_id: int) -> str:
        """Scanner's configured event type, or 'entry' when it cannot be resolved."""
        if not self.db.transactions_enabled:
            return DEFAULT_EVENT
        try:
            row = conn.execute(
                text("SELECT type FROM scanners WHERE id = :sid"),
                {"sid": scanner_id},
            ).mappings().first()
        except SQLAlchemyError as e:
            conn.rollback()
            logger.warning("Scanner %s lookup failed: %s", scanner_id, e)
            return DEFAULT_EVENT
        if not row or not row["type"]:
            logger.debug("Scanner %s unknown, defaulting to %s", scanner_id, DEFAULT_EVENT)
            return DEFAULT_EVENT
        return row["type"]

    def log_transaction(self, conn: Connection, user_id: int, scanner_id: int, event: str):
        """Append a transaction row in its own commit. Returns (outcome, error message)."""
        if not self.db.transactions_enabled:
            return TransactionLog.FAILED, "transaction tables unavailable"
        try:
            conn.execute(
                text(
                    """
                    INSERT INTO transactions (user_id, scanner_id, event)
                    VALUES (:uid, :sid, :evt)
                    """
                ),
                {"uid": user_id, "sid": scanner_id, "evt": event},
            )
            conn.commit()
        except SQLAlchemyError as e:
            conn.rollback()
            logger.warning("Could not log transaction for account %s: %s", user_id, e)
            return TransactionLog.FAILED, str(e)
        return TransactionLog.LOGGED, None

    def scan(self, conn: Connection, tag_id: str, scanner_id: int) -> ScanResult:
        """
        Validate a tag against an active account, then best-effort record the event.
        Only an unknown or inactive tag is a failure; no balance is touched.
        """
        user = conn.execute(
            text("SELECT id, name, balance FROM accounts WHERE tag_id = :tag AND status = :status"),
            {"tag": tag_id, "status": ACTIVE_STATUS},
        ).mappings().first()
        # close the read before the independent write
        conn.commit()

        if not user:
            logger.info("Invalid RFID tag %s at scanner %s", tag_id, scanner_id)
            raise InvalidTagError()

        event = self.resolve_event(conn, scanner_id)
        outcome, error = self.log_transaction(conn, user["id"], scanner_id, event)
        if outcome is TransactionLog.LOGGED:
            logger.info("Scan %s for account %s at scanner %s", event, user["id"], scanner_id)

        return ScanResult(
            account_id=user["id"],
            account_name=user["name"],
            balance=float(user["balance"] or 0),
            event=event,
            transaction_log=outcome,
            log_error=error,
        )
