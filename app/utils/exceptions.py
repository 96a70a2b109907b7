# =======================================================================================
# app/utils/exceptions.py - Custom Exceptions
# =======================================================================================
from typing import Optional


class AccessControlError(Exception):
    """Base exception for the RFID transit backend."""
    status_code: int = 500
    message: Optional[str] = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message or self.__class__.__name__)


class MissingCredentialError(AccessControlError):
    """Raised when a protected route is called without a bearer token."""
    status_code = 401
    message = None


class InvalidCredentialError(AccessControlError):
    """Raised when a bearer token is present but cannot be verified."""
    status_code = 403
    message = None


class ForbiddenError(AccessControlError):
    """Raised when the caller's role is not allowed on the route."""
    status_code = 403
    message = "Admin access required"


class InvalidCredentialsError(AccessControlError):
    """Raised when an email/password pair does not match an account."""
    status_code = 401
    message = "Invalid credentials"


class AccountNotFoundError(AccessControlError):
    """Raised when an account is not found."""
    status_code = 404
    message = "User not found"


class InvalidTagError(AccessControlError):
    """Raised when a scanned tag is unknown or belongs to an inactive account."""
    status_code = 404
    message = "Invalid or inactive RFID tag"


class ConflictError(AccessControlError):
    """Raised when an insert hits a unique constraint (email or tag)."""
    status_code = 409
    message = "Email or RFID tag already registered"


class InvalidTokenError(AccessControlError):
    """Raised by the session issuer for malformed, forged or expired tokens."""
    status_code = 403
    message = None
