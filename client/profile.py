import logging
from typing import List, Optional

from client.api import ApiClient, ApiError
from client.auth import AuthSession
from client.banners import BannerBoard
from client.render import BIO_MAX_LENGTH, char_counter, render_feed, render_profile_header

logger = logging.getLogger(__name__)

PROFILE_TABS = ("posts", "replies", "media", "likes")


class ProfileState:
    """View model for a profile page, either the signed-in user's or someone else's."""

    def __init__(self, api: ApiClient, session: AuthSession, banners: BannerBoard):
        self.api = api
        self.session = session
        self.banners = banners
        self.profile: Optional[dict] = None
        self.posts: List[dict] = []
        self.is_own_profile = False
        self.current_tab = "posts"

    def load(self, username: str = "me") -> bool:
        """Load a profile by username; ``me`` means the signed-in user."""
        current_user = self.session.current_user
        if username == "me":
            if current_user is None:
                return False
            username = current_user["username"]
        try:
            self.profile = self.api.get_profile(username)
        except ApiError as e:
            logger.error("Error loading profile %s: %s", username, e.message)
            self.banners.error("Failed to load profile")
            return False
        self.is_own_profile = current_user is not None and current_user["username"] == self.profile["username"]
        self.load_posts()
        return True

    def load_posts(self) -> List[dict]:
        if self.profile is None:
            return []
        try:
            self.posts = self.api.get_user_posts(self.profile["username"]) or []
        except ApiError as e:
            logger.error("Error loading posts for %s: %s", self.profile["username"], e.message)
            self.banners.error("Failed to load posts")
        return self.posts

    def action_label(self) -> str:
        if self.is_own_profile:
            return "Edit Profile"
        return "Following" if self.profile and self.profile.get("is_following") else "Follow"

    def toggle_follow(self) -> Optional[bool]:
        if self.profile is None or self.is_own_profile:
            return None
        if not self.session.is_authenticated():
            self.banners.error("Please log in to follow users")
            return None
        following = bool(self.profile.get("is_following"))
        try:
            if following:
                self.api.unfollow(self.profile["username"])
            else:
                self.api.follow(self.profile["username"])
        except ApiError as e:
            logger.error("Error toggling follow: %s", e.message)
            self.banners.error("Failed to update follow status")
            return None
        self.profile["is_following"] = not following
        self.profile["followers_count"] = max(0, self.profile.get("followers_count", 0) + (-1 if following else 1))
        self.banners.success("Unfollowed" if following else "Followed!")
        return self.profile["is_following"]

    @staticmethod
    def bio_counter(text: str) -> dict:
        return char_counter(text, BIO_MAX_LENGTH, 140)

    def save_profile(self, display_name: str, bio: str = "", website: str = "", location: str = "") -> bool:
        if not self.is_own_profile:
            return False
        fields = {
            "display_name": (display_name or "").strip(),
            "bio": (bio or "").strip(),
            "website": (website or "").strip(),
            "location": (location or "").strip(),
        }
        if not fields["display_name"]:
            self.banners.error("Display name is required")
            return False
        if len(fields["bio"]) > BIO_MAX_LENGTH:
            self.banners.error(f"Bio must be {BIO_MAX_LENGTH} characters or less")
            return False
        try:
            user = self.api.update_profile(**fields)
        except ApiError as e:
            logger.error("Error saving profile: %s", e.message)
            self.banners.error("Failed to update profile")
            return False
        self.profile.update(fields)
        self.session.update_current_user(user)
        self.banners.success("Profile updated!")
        return True

    def switch_tab(self, tab: str) -> None:
        if tab not in PROFILE_TABS:
            raise ValueError(f"Unknown profile tab: {tab}")
        self.current_tab = tab
        if tab == "posts":
            self.load_posts()

    def render(self) -> str:
        if self.profile is None:
            return ""
        return render_profile_header(self.profile, self.action_label()) + render_feed(self.posts)
