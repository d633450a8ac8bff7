import re
from pydantic import BaseModel, ConfigDict, Field, validator
from schemas.users import UserResponse

USERNAME_PATTERN = re.compile(r'^[a-zA-Z0-9_]+$')
EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    display_name: str = Field(alias="displayName")
    username: str
    email: str
    password: str

    @validator('display_name')
    def validate_display_name(cls, v):
        v = v.strip()
        if len(v) < 1:
            raise ValueError('Display name is required')
        if len(v) > 50:
            raise ValueError('Display name must be at most 50 characters long')
        return v

    @validator('username')
    def validate_username(cls, v):
        v = v.strip()
        if len(v) < 3 or len(v) > 30:
            raise ValueError('Username must be between 3 and 30 characters long')
        if not USERNAME_PATTERN.match(v):
            raise ValueError('Username can only contain letters, numbers, and underscores')
        return v

    @validator('email')
    def validate_email(cls, v):
        v = v.strip()
        if not EMAIL_PATTERN.match(v):
            raise ValueError('Please enter a valid email address')
        return v

    @validator('password')
    def validate_password(cls, v):
        if len(v) < 6:
            raise ValueError('Password must be at least 6 characters long')
        return v

class LoginRequest(BaseModel):
    identifier: str  # username or email
    password: str

    @validator('identifier')
    def validate_identifier(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Username or email is required')
        return v

    @validator('password')
    def validate_password(cls, v):
        if not v:
            raise ValueError('Password is required')
        return v

class AuthResponse(BaseModel):
    user: UserResponse
    token: str
    message: str
