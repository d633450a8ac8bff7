import logging
import sqlite3
from typing import List, Optional
from fastapi import APIRouter, HTTPException, Depends
from database import get_db
from schemas.users import ProfileResponse, ProfileUpdate, FollowResponse, UserResponse
from schemas.posts import PostResponse
from utils.route_helpers import (
    PUBLIC_PROFILE_COLUMNS, POST_SELECT, post_row_to_dict, get_user_id_by_username, get_user_by_id
)
from utils.security import get_current_user, get_optional_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

def _resolve_username(username: str) -> int:
    user_id = get_user_id_by_username(username)
    if user_id is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user_id

def _count(conn, query: str, value: int) -> int:
    return conn.execute(query, (value,)).fetchone()[0]

@router.put("/me/profile", response_model=UserResponse)
def update_profile(update: ProfileUpdate, current_user: dict = Depends(get_current_user)):
    """Edit the caller's own profile fields. Omitted fields are left untouched."""
    changes = update.model_dump(exclude_unset=True, exclude_none=True)
    if changes:
        assignments = ", ".join(f"{column} = ?" for column in changes)
        with get_db() as conn:
            conn.execute(
                f"UPDATE users SET {assignments} WHERE id = ?",
                (*changes.values(), current_user["id"])
            )
            conn.commit()
        logger.info("User %s updated profile fields %s", current_user["id"], sorted(changes))
    user = get_user_by_id(current_user["id"])
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user

@router.get("/{username}", response_model=ProfileResponse)
def get_profile(username: str, viewer: Optional[dict] = Depends(get_optional_user)):
    """Public profile with post, follower and following counts."""
    with get_db() as conn:
        row = conn.execute(
            f"SELECT {PUBLIC_PROFILE_COLUMNS} FROM users WHERE username = ?", (username.lower(),)
        ).fetchone()
        if not row:
            raise HTTPException(status_code=404, detail="User not found")
        profile = dict(row)
        profile["is_verified"] = bool(profile["is_verified"])
        profile["is_premium"] = bool(profile["is_premium"])
        profile["posts_count"] = _count(conn, "SELECT COUNT(*) FROM posts WHERE user_id = ?", row["id"])
        profile["followers_count"] = _count(conn, "SELECT COUNT(*) FROM follows WHERE following_id = ?", row["id"])
        profile["following_count"] = _count(conn, "SELECT COUNT(*) FROM follows WHERE follower_id = ?", row["id"])
        if viewer:
            following = conn.execute(
                "SELECT 1 FROM follows WHERE follower_id = ? AND following_id = ?", (viewer["id"], row["id"])
            ).fetchone()
            profile["is_following"] = following is not None
    return profile

@router.get("/{username}/posts", response_model=List[PostResponse])
def get_user_posts(username: str, viewer: Optional[dict] = Depends(get_optional_user)):
    user_id = _resolve_username(username)
    with get_db() as conn:
        rows = conn.execute(
            POST_SELECT + " WHERE p.user_id = ? ORDER BY p.created_at DESC, p.id DESC",
            (viewer["id"] if viewer else None, user_id)
        ).fetchall()
    return [post_row_to_dict(row) for row in rows]

@router.post("/{username}/follow", response_model=FollowResponse)
def follow_user(username: str, current_user: dict = Depends(get_current_user)):
    target_id = _resolve_username(username)
    if target_id == current_user["id"]:
        raise HTTPException(status_code=400, detail="You cannot follow yourself")
    with get_db() as conn:
        try:
            conn.execute(
                "INSERT INTO follows (follower_id, following_id) VALUES (?, ?)", (current_user["id"], target_id)
            )
            conn.commit()
        except sqlite3.IntegrityError:
            logger.warning("User %s already follows %s", current_user["id"], target_id)
            raise HTTPException(status_code=400, detail="Already following")
    logger.info("User %s followed %s", current_user["id"], target_id)
    return {"following": True}

@router.delete("/{username}/follow", response_model=FollowResponse)
def unfollow_user(username: str, current_user: dict = Depends(get_current_user)):
    target_id = _resolve_username(username)
    with get_db() as conn:
        conn.execute(
            "DELETE FROM follows WHERE follower_id = ? AND following_id = ?", (current_user["id"], target_id)
        )
        conn.commit()
    logger.info("User %s unfollowed %s", current_user["id"], target_id)
    return {"following": False}
