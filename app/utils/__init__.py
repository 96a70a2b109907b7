# =======================================================================================
# app/utils/__init__.py - Utils Package
# =======================================================================================
from .exceptions import *

__all__ = [
    "AccessControlError", "MissingCredentialError", "InvalidCredentialError",
    "ForbiddenError", "InvalidCredentialsError", "AccountNotFoundError",
    "InvalidTagError", "ConflictError", "InvalidTokenError",
]
