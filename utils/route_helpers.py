from datetime import datetime, timezone
from typing import Optional
from fastapi import Request
from database import get_db

USER_FLAG_COLUMNS = ("is_admin", "is_moderator", "is_verified", "is_premium", "is_banned")

PUBLIC_PROFILE_COLUMNS = """
    id, display_name, username, avatar_url, banner_url, bio, website, location,
    is_verified, is_premium, created_at
"""

# Every post listing goes through this select so the shape stays the same everywhere
POST_SELECT = """
    SELECT p.id, p.user_id, p.content, p.created_at,
           u.display_name, u.username, u.avatar_url, u.is_verified, u.is_premium,
           (SELECT COUNT(*) FROM likes l WHERE l.post_id = p.id) AS likes_count,
           EXISTS(SELECT 1 FROM likes l WHERE l.post_id = p.id AND l.user_id = ?) AS liked_by_me
    FROM posts p
    JOIN users u ON u.id = p.user_id
"""

def get_client_ip(request: Request, trust_proxy: bool = False) -> str:
    """Socket address of the caller. X-Forwarded-For is only read when the proxy is trusted."""
    forwarded_for = request.headers.get("X-Forwarded-For") if trust_proxy else None
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.client.host if request.client else "unknown"

def user_row_to_dict(row) -> dict:
    """Convert a users row to a response dict. The password hash never leaves this function."""
    user = dict(row)
    user.pop("password_hash", None)
    for flag in USER_FLAG_COLUMNS:
        if flag in user:
            user[flag] = bool(user[flag])
    return user

def post_row_to_dict(row) -> dict:
    return {
        "id": row["id"],
        "user_id": row["user_id"],
        "content": row["content"],
        "created_at": row["created_at"],
        "user": {
            "display_name": row["display_name"],
            "username": row["username"],
            "avatar_url": row["avatar_url"],
            "is_verified": bool(row["is_verified"]),
            "is_premium": bool(row["is_premium"]),
        },
        "likes_count": row["likes_count"],
        "liked_by_me": bool(row["liked_by_me"]),
    }

def is_ban_active(user) -> bool:
    """A ban blocks the account until banned_until; once that passes the flag is ignored."""
    if not user["is_banned"]:
        return False
    banned_until = user["banned_until"]
    if not banned_until:
        return True
    try:
        banned_until_dt = datetime.fromisoformat(banned_until)
    except ValueError:
        return True
    if banned_until_dt.tzinfo is None:
        banned_until_dt = banned_until_dt.replace(tzinfo=timezone.utc)
    return banned_until_dt > datetime.now(timezone.utc)

def get_user_by_id(user_id: int):
    with get_db() as conn:
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        return user_row_to_dict(row) if row else None

def get_user_id_by_username(username: str) -> Optional[int]:
    with get_db() as conn:
        row = conn.execute("SELECT id FROM users WHERE username = ?", (username.lower(),)).fetchone()
        return row["id"] if row else None

def get_post_response(post_id: int, viewer_id: Optional[int] = None):
    """Single post in feed shape, or None if it does not exist."""
    with get_db() as conn:
        row = conn.execute(POST_SELECT + " WHERE p.id = ?", (viewer_id, post_id)).fetchone()
        return post_row_to_dict(row) if row else None
