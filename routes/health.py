from datetime import datetime, timezone
from fastapi import APIRouter
from database import check_connection

router = APIRouter(tags=["system"])

@router.get("/health")
def health():
    return {
        "status": "OK",
        "database": "Connected" if check_connection() else "Disconnected",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
