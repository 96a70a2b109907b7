# =======================================================================================
# app/models/enums.py - Enums and Constants
# =======================================================================================
from enum import Enum
from typing import Literal

# Type aliases for better type hints
Role = Literal["user", "admin"]
ScanEvent = Literal["entry", "exit"]

DEFAULT_STATUS = "active"
# only accounts in this status may scan through
ACTIVE_STATUS = "active"
DEFAULT_EVENT: ScanEvent = "entry"
RECENT_TRANSACTIONS_LIMIT = 5


class TransactionLog(Enum):
    """Outcome of the best-effort transaction write done on each scan."""
    LOGGED = "logged"
    FAILED = "failed"
