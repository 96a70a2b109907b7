# =======================================================================================
# app/api/dependencies.py - FastAPI Dependencies
# =======================================================================================
import logging
from typing import Generator, Optional
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.engine import Connection

from ..models.schemas import Identity
from ..services import AccountService, AdminService, ScanService, SessionIssuer
from ..utils.exceptions import (
    ForbiddenError,
    InvalidCredentialError,
    InvalidTokenError,
    MissingCredentialError,
)

logger = logging.getLogger(__name__)
bearer_scheme = HTTPBearer(auto_error=False)


def get_db_connection(request: Request) -> Generator[Connection, None, None]:
    """Dependency to get a pooled connection for the duration of one request."""
    with request.app.state.db.get_connection() as conn:
        yield conn


def get_session_issuer(request: Request) -> SessionIssuer:
    return request.app.state.sessions


def get_account_service(request: Request) -> AccountService:
    return request.app.state.account_service


def get_admin_service(request: Request) -> AdminService:
    return request.app.state.admin_service


def get_scan_service(request: Request) -> ScanService:
    return request.app.state.scan_service


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    sessions: SessionIssuer = Depends(get_session_issuer),
) -> Identity:
    """Require a valid bearer token: 401 when absent, 403 when it does not verify."""
    if credentials is None or not credentials.credentials:
        logger.info("Rejected request without bearer token")
        raise MissingCredentialError()
    try:
        identity = sessions.verify(credentials.credentials)
    except InvalidTokenError:
        raise InvalidCredentialError()
    logger.debug("Token verified for account %s", identity.id)
    return identity


def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    if identity.role != "admin":
        logger.info("Account %s denied admin route", identity.id)
        raise ForbiddenError()
    return identity
