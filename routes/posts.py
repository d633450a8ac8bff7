import logging
import sqlite3
from typing import List, Optional
from fastapi import APIRouter, HTTPException, Depends, Query
from database import get_db
from schemas.posts import PostCreate, PostResponse, LikeResponse
from utils.route_helpers import POST_SELECT, post_row_to_dict, get_post_response
from utils.security import get_current_user, get_optional_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])

def _viewer_id(viewer: Optional[dict]) -> Optional[int]:
    return viewer["id"] if viewer else None

def _ensure_post_exists(conn, post_id: int):
    row = conn.execute("SELECT 1 FROM posts WHERE id = ?", (post_id,)).fetchone()
    if not row:
        raise HTTPException(status_code=404, detail="Post not found")

@router.get("", response_model=List[PostResponse])
def list_posts(
    feed: str = Query("all", pattern="^(all|following)$"),
    viewer: Optional[dict] = Depends(get_optional_user)
):
    """Posts newest first, with owner fields and like counts. The following feed needs a token."""
    viewer_id = _viewer_id(viewer)
    where = ""
    params = [viewer_id]
    if feed == "following":
        if viewer_id is None:
            raise HTTPException(status_code=401, detail="Access token required")
        where = " WHERE p.user_id IN (SELECT following_id FROM follows WHERE follower_id = ?)"
        params.append(viewer_id)
    with get_db() as conn:
        rows = conn.execute(POST_SELECT + where + " ORDER BY p.created_at DESC, p.id DESC", params).fetchall()
    return [post_row_to_dict(row) for row in rows]

@router.post("", response_model=PostResponse)
def create_post(post: PostCreate, current_user: dict = Depends(get_current_user)):
    # Owner always comes from the token, never from the body
    with get_db() as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("INSERT INTO posts (user_id, content) VALUES (?, ?)", (current_user["id"], post.content))
        except sqlite3.IntegrityError:
            # Token outlived its user row
            raise HTTPException(status_code=404, detail="User not found")
        post_id = cursor.lastrowid
        conn.commit()
    logger.info("User %s created post %s", current_user["id"], post_id)
    return get_post_response(post_id, current_user["id"])

@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: int, viewer: Optional[dict] = Depends(get_optional_user)):
    post = get_post_response(post_id, _viewer_id(viewer))
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post

@router.post("/{post_id}/like", response_model=LikeResponse)
def like_post(post_id: int, current_user: dict = Depends(get_current_user)):
    with get_db() as conn:
        _ensure_post_exists(conn, post_id)
        try:
            conn.execute("INSERT INTO likes (user_id, post_id) VALUES (?, ?)", (current_user["id"], post_id))
            conn.commit()
        except sqlite3.IntegrityError:
            logger.warning("User %s tried to like post %s twice", current_user["id"], post_id)
            raise HTTPException(status_code=400, detail="Post already liked")
    return {"liked": True}

@router.delete("/{post_id}/like", response_model=LikeResponse)
def unlike_post(post_id: int, current_user: dict = Depends(get_current_user)):
    with get_db() as conn:
        _ensure_post_exists(conn, post_id)
        # No-op when the like does not exist
        conn.execute("DELETE FROM likes WHERE user_id = ? AND post_id = ?", (current_user["id"], post_id))
        conn.commit()
    return {"liked": False}
