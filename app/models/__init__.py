# =======================================================================================
# app/models/__init__.py - Models Package
# =======================================================================================
from .schemas import *
from .enums import *

__all__ = [
    "Identity", "Account", "SignupRequest", "LoginRequest", "AuthResponse",
    "TransactionItem", "ProfileResponse", "CreateUserRequest", "ScanRequest",
    "ScanUser", "ScanResponse", "HealthResponse", "Role", "ScanEvent", "TransactionLog",
]
