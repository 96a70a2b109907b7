# =======================================================================================
# app/api/routes/auth.py - Signup and Login Endpoints
# =======================================================================================
from fastapi import APIRouter, Depends
from sqlalchemy.engine import Connection
from ...models.schemas import AuthResponse, LoginRequest, SignupRequest
from ...services import AccountService
from ..dependencies import get_account_service, get_db_connection

router = APIRouter()


@router.post("/signup", response_model=AuthResponse)
def signup(
    request: SignupRequest,
    conn: Connection = Depends(get_db_connection),
    accounts: AccountService = Depends(get_account_service),
):
    token, account = accounts.signup(conn, request.name, request.email, request.password)
    return AuthResponse(token=token, user=account)


@router.post("/login", response_model=AuthResponse)
def login(
    request: LoginRequest,
    conn: Connection = Depends(get_db_connection),
    accounts: AccountService = Depends(get_account_service),
):
    token, account = accounts.login(conn, request.email, request.password)
    return AuthResponse(token=token, user=account)
