# =======================================================================================
# app/api/routes/users.py - User Management Endpoints (admin only)
# =======================================================================================
from typing import List
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.engine import Connection
from ...models.schemas import Account, CreateUserRequest
from ...services import AdminService
from ..dependencies import get_admin_service, get_db_connection, require_admin

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/users", response_model=List[Account])
def list_users(
    conn: Connection = Depends(get_db_connection),
    admin: AdminService = Depends(get_admin_service),
):
    return admin.list_users(conn)


@router.post("/users", response_model=Account, status_code=status.HTTP_201_CREATED)
def create_user(
    request: CreateUserRequest,
    conn: Connection = Depends(get_db_connection),
    admin: AdminService = Depends(get_admin_service),
):
    return admin.create_user(conn, request)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    conn: Connection = Depends(get_db_connection),
    admin: AdminService = Depends(get_admin_service),
):
    admin.delete_user(conn, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
