# =======================================================================================
# app/services/account_service.py - Signup, login and profile
# =======================================================================================
import logging
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..database import DatabaseManager
from ..models.enums import DEFAULT_STATUS, RECENT_TRANSACTIONS_LIMIT
from ..models.schemas import Account, TransactionItem
from ..utils.exceptions import AccountNotFoundError, ConflictError, InvalidCredentialsError
from .session_service import PasswordHasher, SessionIssuer

logger = logging.getLogger(__name__)

# Everything but the password hash
ACCOUNT_COLUMNS = "id, name, email, role, tag_id, status, balance, created_at"


class AccountService:
    """Handles self-service accounts: signup, login and the profile page."""

    def __init__(self, db: DatabaseManager, hasher: PasswordHasher, sessions: SessionIssuer):
        self.db = db
        self.hasher = hasher
        self.sessions = sessions

    # ----------------- helpers -----------------

    @staticmethod
    def get_account_by_id(conn: Connection, account_id: int) -> Optional[Account]:
        row = conn.execute(
            text(f"SELECT {ACCOUNT_COLUMNS} FROM accounts WHERE id = :id"),
            {"id": account_id},
        ).mappings().first()
        return Account(**row) if row else None

    @staticmethod
    def get_account_by_email(conn: Connection, email: str) -> Optional[Account]:
        row = conn.execute(
            text(f"SELECT {ACCOUNT_COLUMNS} FROM accounts WHERE email = :email"),
            {"email": email},
        ).mappings().first()
        return Account(**row) if row else None

    # ----------------- signup / login -----------------

    def signup(self, conn: Connection, name: str, email: str, password: str) -> Tuple[str, Account]:
        """Create a role=user account and open a session for it."""
        try:
            conn.execute(
                text(
                    """
                    INSERT INTO accounts (name, email, password_hash, role, status, balance)
                    VALUES (:name, :email, :password_hash, 'user', :status, 0)
                    """
                ),
                {
                    "name": name,
                    "email": email,
                    "password_hash": self.hasher.hash_password(password),
                    "status": DEFAULT_STATUS,
                },
            )
            account = self.get_account_by_email(conn, email)
            conn.commit()
        except IntegrityError as e:
            conn.rollback()
            logger.info("Signup rejected for %s: %s", email, e.orig)
            raise ConflictError("Email already registered")

        token = self.sessions.issue(account.id, account.role)
        logger.info("Account %s created", account.id)
        return token, account

    def login(self, conn: Connection, email: str, password: str) -> Tuple[str, Account]:
        """Verify credentials; unknown email and wrong password look identical to the caller."""
        row = conn.execute(
            text(f"SELECT {ACCOUNT_COLUMNS}, password_hash FROM accounts WHERE email = :email"),
            {"email": email},
        ).mappings().first()

        if not row:
            logger.info("Login failed: no account for %s", email)
            raise InvalidCredentialsError()

        if not self.hasher.verify_password(password, row["password_hash"]):
            logger.info("Login failed: wrong password for account %s", row["id"])
            raise InvalidCredentialsError()

        data = dict(row)
        data.pop("password_hash")
        account = Account(**data)
        logger.info("Login successful for account %s (role %s)", account.id, account.role)
        return self.sessions.issue(account.id, account.role), account

    # ----------------- profile -----------------

    def get_profile(self, conn: Connection, account_id: int) -> Tuple[Account, List[TransactionItem]]:
        account = self.get_account_by_id(conn, account_id)
        if account is None:
            logger.warning("Profile requested for missing account %s", account_id)
            raise AccountNotFoundError()

        transactions: List[TransactionItem] = []
        if not account.tag_id:
            logger.debug("Account %s has no tag, skipping history", account_id)
        elif not self.db.transactions_enabled:
            logger.debug("Transaction tables unavailable, skipping history")
        else:
            transactions = self.get_recent_transactions(conn, account_id)

        return account, transactions

    def get_recent_transactions(
        self, conn: Connection, account_id: int, limit: int = RECENT_TRANSACTIONS_LIMIT
    ) -> List[TransactionItem]:
        """Latest transactions with scanner type and station name; empty on any store error."""
        try:
            rows = conn.execute(
                text(
                    """
                    SELECT t.id, t.user_id, t.scanner_id, t.event, t.timestamp,
                           s.type  AS scanner_type,
                           st.name AS station_name
                    FROM transactions t
                    JOIN scanners s  ON t.scanner_id = s.id
                    JOIN stations st ON s.station_id = st.id
                    WHERE t.user_id = :uid
                    ORDER BY t.timestamp DESC, t.id DESC
                    LIMIT :limit
                    """
                ),
                {"uid": account_id, "limit": limit},
            ).mappings().all()
        except SQLAlchemyError as e:
            conn.rollback()
            logger.warning("Transaction history unavailable for account %s: %s", account_id, e)
            return []

        items: List[TransactionItem] = []
        for row in rows:
            data: Dict[str, Any] = dict(row)
            items.append(TransactionItem(**data))
        return items
