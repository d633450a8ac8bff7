from pydantic import BaseModel, validator
from typing import List, Optional
from schemas.users import UserResponse

DEFAULT_DELETE_REASON = "Violation of community guidelines"
UNBAN_REASON = "Manual unban by admin"

class BanRequest(BaseModel):
    reason: str
    duration_hours: int

    @validator('reason')
    def validate_reason(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Reason is required')
        return v

    @validator('duration_hours')
    def validate_duration(cls, v):
        if v < 1:
            raise ValueError('Ban duration must be at least 1 hour')
        return v

class DeletePostRequest(BaseModel):
    reason: Optional[str] = None

class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int

class UserListResponse(BaseModel):
    users: List[UserResponse]
    pagination: Pagination

class RevenueStats(BaseModel):
    total_revenue: float = 0
    premium_users: int = 0
    conversion_rate: float = 0

class AnalyticsResponse(BaseModel):
    period: str
    user_growth: int
    total_posts: int
    active_today: int  # placeholder figure, not a real metric
    revenue: RevenueStats

class MessageResponse(BaseModel):
    message: str
