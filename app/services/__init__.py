# =======================================================================================
# app/services/__init__.py - Services Package
# =======================================================================================
from .session_service import PasswordHasher, SessionIssuer
from .account_service import AccountService
from .admin_service import AdminService
from .scan_service import ScanService, ScanResult

__all__ = [
    "PasswordHasher", "SessionIssuer", "AccountService", "AdminService",
    "ScanService", "ScanResult",
]
