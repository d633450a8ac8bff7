import logging
from datetime import datetime, timezone
from typing import List
from fastapi import APIRouter, HTTPException, Depends, Query
from database import get_db
from schemas.admin import MessageResponse
from schemas.moderation import ResolveReportRequest, ReportResponse, REPORT_STATUSES, REPORT_BAN_HOURS
from routes.admin import apply_ban, delete_post_with_audit
from utils.security import require_moderator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/moderation", tags=["moderation"])

REPORT_SELECT = """
    SELECT r.*,
           reporter.display_name AS reporter_display_name, reporter.username AS reporter_username,
           target.display_name AS target_display_name, target.username AS target_username,
           p.content AS post_content, p.user_id AS post_user_id
    FROM reports r
    LEFT JOIN users reporter ON reporter.id = r.reporter_id
    LEFT JOIN users target ON target.id = r.reported_user_id
    LEFT JOIN posts p ON p.id = r.reported_post_id
"""

def report_row_to_dict(row) -> dict:
    report = {key: row[key] for key in (
        "id", "reporter_id", "reported_user_id", "reported_post_id", "reason", "status",
        "resolved_by", "resolved_at", "resolution_action", "resolution_notes", "created_at"
    )}
    report["reporter"] = None
    if row["reporter_username"] is not None:
        report["reporter"] = {"display_name": row["reporter_display_name"], "username": row["reporter_username"]}
    report["reported_user"] = None
    if row["target_username"] is not None:
        report["reported_user"] = {"display_name": row["target_display_name"], "username": row["target_username"]}
    report["reported_post"] = None
    if row["post_content"] is not None:
        report["reported_post"] = {"content": row["post_content"], "user_id": row["post_user_id"]}
    return report

@router.get("/reports", response_model=List[ReportResponse])
def list_reports(status: str = Query("pending"), current_user: dict = Depends(require_moderator)):
    if status not in REPORT_STATUSES:
        raise HTTPException(status_code=400, detail=f"Status must be one of: {list(REPORT_STATUSES)}")
    with get_db() as conn:
        rows = conn.execute(
            REPORT_SELECT + " WHERE r.status = ? ORDER BY r.created_at DESC, r.id DESC", (status,)
        ).fetchall()
    return [report_row_to_dict(row) for row in rows]

@router.post("/reports/{report_id}/resolve", response_model=MessageResponse)
def resolve_report(report_id: int, resolution: ResolveReportRequest, current_user: dict = Depends(require_moderator)):
    """Resolve a pending report. 'ban' (admins only) and 'delete' also act on the reported user or post."""
    moderator_id = current_user["id"]
    with get_db() as conn:
        report = conn.execute("SELECT * FROM reports WHERE id = ?", (report_id,)).fetchone()
        if not report:
            raise HTTPException(status_code=404, detail="Report not found")
        if report["status"] == "resolved":
            raise HTTPException(status_code=400, detail="Report already resolved")
        if resolution.action == "ban":
            # Same power as the direct ban route, which only admins may call
            if not current_user.get("is_admin"):
                raise HTTPException(status_code=403, detail="Admin access required")
            if report["reported_user_id"] is None:
                raise HTTPException(status_code=400, detail="Report has no reported user to ban")
        if resolution.action == "delete" and report["reported_post_id"] is None:
            raise HTTPException(status_code=400, detail="Report has no reported post to delete")

        conn.execute(
            """UPDATE reports SET status = 'resolved', resolved_by = ?, resolved_at = ?,
                   resolution_action = ?, resolution_notes = ?
               WHERE id = ?""",
            (moderator_id, datetime.now(timezone.utc).isoformat(), resolution.action, resolution.notes, report_id)
        )
        reason = resolution.notes or f"Resolved report #{report_id}"
        if resolution.action == "ban":
            apply_ban(conn, moderator_id, report["reported_user_id"], reason, REPORT_BAN_HOURS)
        elif resolution.action == "delete":
            delete_post_with_audit(conn, moderator_id, report["reported_post_id"], reason, report_id)
        conn.execute(
            "INSERT INTO moderation_actions (moderator_id, target_report_id, action_type, reason) VALUES (?, ?, ?, ?)",
            (moderator_id, report_id, 'resolve_report', f"{resolution.action}: {reason}")
        )
        conn.commit()
    logger.info("Moderator %s resolved report %s with %s", moderator_id, report_id, resolution.action)
    return {"message": "Report resolved successfully"}
