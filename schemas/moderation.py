from pydantic import BaseModel, validator
from typing import Optional

REPORT_STATUSES = ('pending', 'resolved')
RESOLUTION_ACTIONS = ('dismiss', 'warn', 'ban', 'delete')

# Duration applied when a report is resolved with the 'ban' action
REPORT_BAN_HOURS = 24

class ReportCreate(BaseModel):
    reported_user_id: Optional[int] = None
    reported_post_id: Optional[int] = None
    reason: str

    @validator('reason')
    def validate_reason(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Reason is required')
        if len(v) > 500:
            raise ValueError('Reason must be at most 500 characters long')
        return v

class ResolveReportRequest(BaseModel):
    action: str
    notes: Optional[str] = None

    @validator('action')
    def validate_action(cls, v):
        if v not in RESOLUTION_ACTIONS:
            raise ValueError(f'Action must be one of: {list(RESOLUTION_ACTIONS)}')
        return v

class ReportParty(BaseModel):
    display_name: str
    username: str

class ReportedPost(BaseModel):
    content: str
    user_id: int

class ReportResponse(BaseModel):
    id: int
    reporter_id: int
    reported_user_id: Optional[int] = None
    reported_post_id: Optional[int] = None
    reason: str
    status: str
    resolved_by: Optional[int] = None
    resolved_at: Optional[str] = None
    resolution_action: Optional[str] = None
    resolution_notes: Optional[str] = None
    created_at: Optional[str] = None
    reporter: Optional[ReportParty] = None
    reported_user: Optional[ReportParty] = None
    reported_post: Optional[ReportedPost] = None
