# Schemas package
from .users import UserResponse, ProfileResponse, ProfileUpdate, FollowResponse
from .auth import RegisterRequest, LoginRequest, AuthResponse
from .posts import PostCreate, PostResponse, PostAuthor, LikeResponse
from .admin import BanRequest, DeletePostRequest, UserListResponse, AnalyticsResponse, MessageResponse
from .moderation import ReportCreate, ResolveReportRequest, ReportResponse
