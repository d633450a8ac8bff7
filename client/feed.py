import logging
from typing import List, Optional

from client.api import ApiClient, ApiError
from client.auth import AuthSession
from client.banners import BannerBoard
from client.render import POST_MAX_LENGTH, char_counter, render_feed

logger = logging.getLogger(__name__)

# Tab name -> server feed
FEEDS = {"for-you": "all", "following": "following"}


class FeedState:
    """View model for the home feed: loaded posts, the composer and like toggles."""

    def __init__(self, api: ApiClient, session: AuthSession, banners: BannerBoard):
        self.api = api
        self.session = session
        self.banners = banners
        self.posts: List[dict] = []
        self.is_loading = False
        self.current_feed = "for-you"

    @property
    def is_empty(self) -> bool:
        return not self.posts

    def load(self) -> List[dict]:
        """Fetch the current feed. A second call while one is running is ignored."""
        if self.is_loading:
            return self.posts
        self.is_loading = True
        try:
            self.posts = self.api.list_posts(FEEDS[self.current_feed]) or []
        except ApiError as e:
            logger.error("Error loading posts: %s", e.message)
            self.banners.error("Failed to load posts. Please try again.")
        finally:
            self.is_loading = False
        return self.posts

    def toggle_feed(self) -> str:
        """Switch between everyone's posts and posts from followed users, then reload."""
        if self.current_feed == "for-you" and not self.session.is_authenticated():
            self.banners.error("Please log in to see posts from people you follow")
            return self.current_feed
        self.current_feed = "following" if self.current_feed == "for-you" else "for-you"
        self.load()
        return self.current_feed

    def feed_label(self) -> str:
        return "Feeds: For You" if self.current_feed == "for-you" else "Feeds: Following"

    @staticmethod
    def composer_counter(text: str) -> dict:
        return char_counter(text, POST_MAX_LENGTH, 250)

    @staticmethod
    def can_post(text: str) -> bool:
        length = len((text or "").strip())
        return 0 < length <= POST_MAX_LENGTH

    def create_post(self, content: str) -> Optional[dict]:
        if not self.session.is_authenticated():
            self.banners.error("Please log in to create posts")
            return None
        content = (content or "").strip()
        if not content:
            self.banners.error("Post content cannot be empty")
            return None
        if len(content) > POST_MAX_LENGTH:
            self.banners.error(f"Post must be {POST_MAX_LENGTH} characters or less")
            return None
        try:
            post = self.api.create_post(content)
        except ApiError as e:
            logger.error("Error creating post: %s", e.message)
            self.banners.error(e.message or "Failed to create post")
            return None
        self.posts.insert(0, post)
        self.banners.success("Post created!")
        return post

    def find_post(self, post_id: int) -> Optional[dict]:
        return next((post for post in self.posts if post["id"] == post_id), None)

    def toggle_like(self, post_id: int) -> Optional[bool]:
        """Like or unlike a loaded post. Returns the new liked state, or None on failure."""
        if not self.session.is_authenticated():
            self.banners.error("Please log in to like posts")
            return None
        post = self.find_post(post_id)
        if post is None:
            return None
        liked = post.get("liked_by_me", False)
        try:
            if liked:
                self.api.unlike_post(post_id)
            else:
                self.api.like_post(post_id)
        except ApiError as e:
            logger.error("Error toggling like on %s: %s", post_id, e.message)
            self.banners.error("Failed to like post")
            return None
        post["liked_by_me"] = not liked
        post["likes_count"] = max(0, post.get("likes_count", 0) + (-1 if liked else 1))
        return post["liked_by_me"]

    def render(self) -> str:
        return render_feed(self.posts)
