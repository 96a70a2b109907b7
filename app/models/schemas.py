# =======================================================================================
# app/models/schemas.py - Pydantic Models
# =======================================================================================
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field
from .enums import Role, DEFAULT_STATUS

# ========== Sessions ==========

class Identity(BaseModel):
    """Decoded session token attached to protected requests."""
    id: int
    role: Role


# ========== Accounts ==========

class Account(BaseModel):
    """Account as exposed over the API (never carries the password hash)."""
    id: int
    name: str
    email: str
    role: Role = "user"
    tag_id: Optional[str] = None
    status: str = DEFAULT_STATUS
    balance: float = 0
    created_at: Optional[datetime] = None


class SignupRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class LoginRequest(BaseModel):
    email: str
    password: str


class AuthResponse(BaseModel):
    token: str
    user: Account


class TransactionItem(BaseModel):
    """A transaction row joined with its scanner type and station name."""
    id: int
    user_id: int
    scanner_id: int
    event: str
    timestamp: Optional[datetime] = None
    scanner_type: Optional[str] = None
    station_name: Optional[str] = None


class ProfileResponse(BaseModel):
    user: Account
    recentTransactions: List[TransactionItem] = []


# ========== Admin ==========

class CreateUserRequest(BaseModel):
    """Admin-side user creation; the password is the documented default."""
    name: str = Field(..., min_length=1, max_length=255)
    tag_id: Optional[str] = Field(None, max_length=100, description="RFID tag identifier")
    email: str = Field(..., min_length=3, max_length=255)
    status: str = Field(DEFAULT_STATUS, min_length=1, max_length=32)
    balance: float = Field(0, ge=0)


# ========== RFID scan ==========

class ScanRequest(BaseModel):
    """RFID scan request model."""
    tag_id: str = Field(..., min_length=1, max_length=100, description="RFID tag identifier")
    scanner_id: int = Field(..., description="Scanner that read the tag")


class ScanUser(BaseModel):
    name: str
    balance: float


class ScanResponse(BaseModel):
    """RFID scan response model."""
    success: bool = True
    user: ScanUser
    event: str


# ========== Health ==========

class HealthResponse(BaseModel):
    status: str                 # "OK" | "DEGRADED"
    timestamp: datetime
    database: str               # "connected" | "disconnected"
    message: Optional[str] = None
