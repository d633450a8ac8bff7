# Client package
from .api import ApiClient, ApiError
from .app import ClientApp
from .auth import AuthSession, AuthError
from .banners import Banner, BannerBoard
from .feed import FeedState
from .profile import ProfileState
from .storage import AuthStore
