# =======================================================================================
# app/api/routes/profile.py - Profile Endpoint
# =======================================================================================
from fastapi import APIRouter, Depends
from sqlalchemy.engine import Connection
from ...models.schemas import Identity, ProfileResponse
from ...services import AccountService
from ..dependencies import get_account_service, get_current_identity, get_db_connection

router = APIRouter()


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    identity: Identity = Depends(get_current_identity),
    conn: Connection = Depends(get_db_connection),
    accounts: AccountService = Depends(get_account_service),
):
    """Own account plus the latest transactions, if history is available."""
    account, transactions = accounts.get_profile(conn, identity.id)
    return ProfileResponse(user=account, recentTransactions=transactions)
