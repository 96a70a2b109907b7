# =======================================================================================
# app/api/routes/scan.py - Scan Endpoints (device-facing, no session)
# =======================================================================================
from fastapi import APIRouter, Depends
from sqlalchemy.engine import Connection
from ...models.schemas import ScanRequest, ScanResponse, ScanUser
from ...services import ScanService
from ..dependencies import get_db_connection, get_scan_service

router = APIRouter()


@router.post("/rfid/scan", response_model=ScanResponse)
def handle_scan(
    request: ScanRequest,
    conn: Connection = Depends(get_db_connection),
    scans: ScanService = Depends(get_scan_service),
):
    """Process an RFID scan reported by a station scanner."""
    result = scans.scan(conn, request.tag_id, request.scanner_id)
    return ScanResponse(
        success=True,
        user=ScanUser(name=result.account_name, balance=result.balance),
        event=result.event,
    )
