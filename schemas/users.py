from pydantic import BaseModel, validator
from typing import Optional

class UserResponse(BaseModel):
    id: int
    display_name: str
    username: str
    email: str
    is_admin: bool = False
    is_moderator: bool = False
    is_verified: bool = False
    is_premium: bool = False
    is_banned: bool = False
    banned_until: Optional[str] = None
    avatar_url: Optional[str] = None
    banner_url: Optional[str] = None
    bio: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    created_at: Optional[str] = None

class ProfileResponse(BaseModel):
    id: int
    display_name: str
    username: str
    avatar_url: Optional[str] = None
    banner_url: Optional[str] = None
    bio: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    is_verified: bool = False
    is_premium: bool = False
    created_at: Optional[str] = None
    posts_count: int
    followers_count: int
    following_count: int
    is_following: Optional[bool] = None

class ProfileUpdate(BaseModel):
    display_name: Optional[str] = None
    bio: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    avatar_url: Optional[str] = None
    banner_url: Optional[str] = None

    @validator('display_name')
    def validate_display_name(cls, v):
        if v is not None:
            v = v.strip()
            if len(v) < 1:
                raise ValueError('Display name cannot be empty')
            if len(v) > 50:
                raise ValueError('Display name must be at most 50 characters long')
        return v

    @validator('bio')
    def validate_bio(cls, v):
        if v is not None:
            v = v.strip()
            if len(v) > 160:
                raise ValueError('Bio must be at most 160 characters long')
        return v

    @validator('website', 'location', 'avatar_url', 'banner_url')
    def validate_short_text(cls, v):
        if v is not None:
            v = v.strip()
            if len(v) > 200:
                raise ValueError('Value must be at most 200 characters long')
        return v

class FollowResponse(BaseModel):
    following: bool
