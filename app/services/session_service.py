# =======================================================================================
# app/services/session_service.py - Password hashing and session tokens
# =======================================================================================
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt
from passlib.context import CryptContext

from ..config import Config
from ..models.enums import Role
from ..models.schemas import Identity
from ..utils.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)


class PasswordHasher:
    """Salted pbkdf2 hashing with a fixed work factor."""

    def __init__(self, cfg: Config):
        self._context = CryptContext(
            schemes=["pbkdf2_sha256"],
            deprecated="auto",
            pbkdf2_sha256__default_rounds=cfg.PASSWORD_HASH_ROUNDS,
        )

    def hash_password(self, password: str) -> str:
        return self._context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        try:
            return self._context.verify(plain_password, hashed_password)
        except (ValueError, TypeError):
            # unrecognised or corrupt stored hash
            return False


class SessionIssuer:
    """Issues and verifies the signed bearer tokens handed out at login/signup."""

    def __init__(self, cfg: Config):
        self._secret = cfg.JWT_SECRET
        self._algorithm = cfg.JWT_ALGORITHM
        self._lifetime = timedelta(hours=cfg.JWT_EXPIRE_HOURS)

    def issue(self, account_id: int, role: Role) -> str:
        now = datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            "sub": str(account_id),
            "role": role,
            "iat": now,
            "exp": now + self._lifetime,
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Identity:
        """
        Decode and validate a token.
        Bad signature, expiry, malformed input and bad claims all raise InvalidTokenError.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.PyJWTError as e:
            logger.info("Token verification failed: %s", e)
            raise InvalidTokenError()

        role = payload.get("role")
        try:
            account_id = int(payload["sub"])
        except (TypeError, ValueError):
            logger.info("Token carries a non-numeric subject")
            raise InvalidTokenError()
        if role not in ("user", "admin"):
            logger.info("Token carries unknown role %r", role)
            raise InvalidTokenError()

        return Identity(id=account_id, role=role)
