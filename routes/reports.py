import logging
from fastapi import APIRouter, HTTPException, Depends
from database import get_db
from schemas.moderation import ReportCreate, ReportResponse
from routes.moderation import REPORT_SELECT, report_row_to_dict
from utils.security import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])

@router.post("", response_model=ReportResponse, status_code=201)
def create_report(report: ReportCreate, current_user: dict = Depends(get_current_user)):
    """File a report against a user, a post, or both. New reports start as pending."""
    if report.reported_user_id is None and report.reported_post_id is None:
        raise HTTPException(status_code=400, detail="A reported user or post is required")
    with get_db() as conn:
        if report.reported_user_id is not None:
            if not conn.execute("SELECT 1 FROM users WHERE id = ?", (report.reported_user_id,)).fetchone():
                raise HTTPException(status_code=404, detail="User not found")
        if report.reported_post_id is not None:
            if not conn.execute("SELECT 1 FROM posts WHERE id = ?", (report.reported_post_id,)).fetchone():
                raise HTTPException(status_code=404, detail="Post not found")
        cursor = conn.execute(
            "INSERT INTO reports (reporter_id, reported_user_id, reported_post_id, reason) VALUES (?, ?, ?, ?)",
            (current_user["id"], report.reported_user_id, report.reported_post_id, report.reason)
        )
        report_id = cursor.lastrowid
        conn.commit()
        row = conn.execute(REPORT_SELECT + " WHERE r.id = ?", (report_id,)).fetchone()
    logger.info("User %s filed report %s", current_user["id"], report_id)
    return report_row_to_dict(row)
