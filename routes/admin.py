import logging
import math
import random
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import APIRouter, HTTPException, Depends, Query
from database import get_db
from schemas.admin import (
    BanRequest, DeletePostRequest, UserListResponse, AnalyticsResponse, MessageResponse,
    DEFAULT_DELETE_REASON, UNBAN_REASON
)
from utils.route_helpers import user_row_to_dict
from utils.security import require_admin, require_moderator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

def apply_ban(conn, admin_id: int, user_id: int, reason: str, duration_hours: int) -> str:
    """Ban a user and record the admin action. Caller commits."""
    banned_until = (datetime.now(timezone.utc) + timedelta(hours=duration_hours)).isoformat()
    cursor = conn.execute(
        "UPDATE users SET is_banned = 1, banned_until = ? WHERE id = ?", (banned_until, user_id)
    )
    if cursor.rowcount == 0:
        raise HTTPException(status_code=404, detail="User not found")
    conn.execute(
        "INSERT INTO admin_actions (admin_id, target_user_id, action_type, reason, duration_hours) VALUES (?, ?, ?, ?, ?)",
        (admin_id, user_id, 'ban', reason, duration_hours)
    )
    logger.info("Admin %s banned user %s for %sh: %s", admin_id, user_id, duration_hours, reason)
    return banned_until

def delete_post_with_audit(conn, moderator_id: int, post_id: int, reason: str, report_id: Optional[int] = None):
    """Hard-delete a post and record the moderation action. Caller commits."""
    cursor = conn.execute("DELETE FROM posts WHERE id = ?", (post_id,))
    if cursor.rowcount == 0:
        raise HTTPException(status_code=404, detail="Post not found")
    conn.execute(
        "INSERT INTO moderation_actions (moderator_id, target_post_id, target_report_id, action_type, reason) VALUES (?, ?, ?, ?, ?)",
        (moderator_id, post_id, report_id, 'delete_post', reason)
    )
    logger.info("Moderator %s deleted post %s: %s", moderator_id, post_id, reason)

def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")

@router.get("/users", response_model=UserListResponse)
def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    search: str = "",
    current_user: dict = Depends(require_admin)
):
    """Admin: paginated user list, optionally filtered by a case-insensitive substring."""
    where = ""
    params = []
    search = search.strip()
    if search:
        where = (
            "WHERE LOWER(username) LIKE ? ESCAPE '\\' OR LOWER(display_name) LIKE ? ESCAPE '\\'"
            " OR LOWER(email) LIKE ? ESCAPE '\\'"
        )
        pattern = f"%{_escape_like(search.lower())}%"
        params = [pattern, pattern, pattern]
    offset = (page - 1) * limit
    with get_db() as conn:
        total = conn.execute(f"SELECT COUNT(*) FROM users {where}", params).fetchone()[0]
        rows = conn.execute(
            f"SELECT * FROM users {where} ORDER BY created_at DESC, id DESC LIMIT ? OFFSET ?",
            (*params, limit, offset)
        ).fetchall()
    return {
        "users": [user_row_to_dict(row) for row in rows],
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit),
        },
    }

@router.post("/users/{user_id}/ban", response_model=MessageResponse)
def ban_user(user_id: int, ban: BanRequest, current_user: dict = Depends(require_admin)):
    with get_db() as conn:
        apply_ban(conn, current_user["id"], user_id, ban.reason, ban.duration_hours)
        conn.commit()
    return {"message": "User banned successfully"}

@router.post("/users/{user_id}/unban", response_model=MessageResponse)
def unban_user(user_id: int, current_user: dict = Depends(require_admin)):
    with get_db() as conn:
        cursor = conn.execute("UPDATE users SET is_banned = 0, banned_until = NULL WHERE id = ?", (user_id,))
        if cursor.rowcount == 0:
            raise HTTPException(status_code=404, detail="User not found")
        conn.execute(
            "INSERT INTO admin_actions (admin_id, target_user_id, action_type, reason) VALUES (?, ?, ?, ?)",
            (current_user["id"], user_id, 'unban', UNBAN_REASON)
        )
        conn.commit()
    logger.info("Admin %s unbanned user %s", current_user["id"], user_id)
    return {"message": "User unbanned successfully"}

@router.delete("/posts/{post_id}", response_model=MessageResponse)
def delete_post(post_id: int, body: Optional[DeletePostRequest] = None, current_user: dict = Depends(require_moderator)):
    reason = (body.reason.strip() if body and body.reason else "") or DEFAULT_DELETE_REASON
    with get_db() as conn:
        delete_post_with_audit(conn, current_user["id"], post_id, reason)
        conn.commit()
    return {"message": "Post deleted successfully"}

@router.get("/analytics", response_model=AnalyticsResponse)
def get_analytics(period: str = Query("7d", pattern="^(7d|30d|90d)$"), current_user: dict = Depends(require_admin)):
    """Platform totals. The period is echoed back; counts are not bucketed by it."""
    with get_db() as conn:
        user_count = conn.execute("SELECT COUNT(*) FROM users").fetchone()[0]
        post_count = conn.execute("SELECT COUNT(*) FROM posts").fetchone()[0]
    return {
        "period": period,
        "user_growth": user_count,
        "total_posts": post_count,
        "active_today": random.randint(50, 149),  # mock figure until activity tracking exists
        "revenue": {"total_revenue": 0, "premium_users": 0, "conversion_rate": 0},
    }
