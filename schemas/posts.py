from pydantic import BaseModel, validator
from typing import Optional

MAX_POST_LENGTH = 280

class PostCreate(BaseModel):
    content: str

    @validator('content')
    def validate_content(cls, v):
        v = v.strip()
        if len(v) < 1:
            raise ValueError('Content cannot be empty')
        if len(v) > MAX_POST_LENGTH:
            raise ValueError(f'Content must be at most {MAX_POST_LENGTH} characters long')
        return v

class PostAuthor(BaseModel):
    display_name: str
    username: str
    avatar_url: Optional[str] = None
    is_verified: bool = False
    is_premium: bool = False

class PostResponse(BaseModel):
    id: int
    user_id: int
    content: str
    created_at: str
    user: PostAuthor
    likes_count: int = 0
    liked_by_me: bool = False

class LikeResponse(BaseModel):
    liked: bool
