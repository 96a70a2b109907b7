# =======================================================================================
# app/services/admin_service.py - User Management Service
# =======================================================================================
import logging
from typing import List
from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError

from ..config import Config
from ..models.schemas import Account, CreateUserRequest
from ..utils.exceptions import ConflictError
from .account_service import ACCOUNT_COLUMNS, AccountService
from .session_service import PasswordHasher

logger = logging.getLogger(__name__)


class AdminService:
    """Admin-only management of passenger (role=user) accounts."""

    def __init__(self, cfg: Config, hasher: PasswordHasher):
        self.default_password = cfg.DEFAULT_USER_PASSWORD
        self.hasher = hasher

    def list_users(self, conn: Connection) -> List[Account]:
        rows = conn.execute(
            text(
                f"""
                SELECT {ACCOUNT_COLUMNS}
                FROM accounts
                WHERE role = 'user'
                ORDER BY created_at DESC, id DESC
                """
            )
        ).mappings().all()
        return [Account(**row) for row in rows]

    def create_user(self, conn: Connection, request: CreateUserRequest) -> Account:
        """Create a passenger account with the default password."""
        try:
            conn.execute(
                text(
                    """
                    INSERT INTO accounts (name, email, password_hash, role, tag_id, status, balance)
                    VALUES (:name, :email, :password_hash, 'user', :tag, :status, :balance)
                    """
                ),
                {
                    "name": request.name,
                    "email": request.email,
                    "password_hash": self.hasher.hash_password(self.default_password),
                    "tag": request.tag_id or None,
                    "status": request.status,
                    "balance": request.balance,
                },
            )
            account = AccountService.get_account_by_email(conn, request.email)
            conn.commit()
        except IntegrityError as e:
            conn.rollback()
            logger.info("Create user rejected for %s: %s", request.email, e.orig)
            raise ConflictError()

        logger.info("Admin created account %s (tag %s)", account.id, account.tag_id)
        return account

    def delete_user(self, conn: Connection, user_id: int) -> None:
        """Delete a role=user account; unknown ids and admin ids are left alone."""
        result = conn.execute(
            text("DELETE FROM accounts WHERE id = :id AND role = 'user'"),
            {"id": user_id},
        )
        conn.commit()
        if result.rowcount:
            logger.info("Admin deleted account %s", user_id)
        else:
            logger.debug("Delete of account %s matched nothing", user_id)
