from typing import Optional

import requests

from client.api import ApiClient, DEFAULT_BASE_URL
from client.auth import AuthSession
from client.banners import BannerBoard
from client.feed import FeedState
from client.profile import ProfileState
from client.storage import AuthStore, DEFAULT_STORAGE_PATH


class ClientApp:
    """
    Owns every piece of client state. Views receive the objects they need from
    here instead of reaching for module-level singletons.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, storage_path=DEFAULT_STORAGE_PATH,
                 session: Optional[requests.Session] = None):
        self.api = ApiClient(base_url, session=session)
        self.store = AuthStore(storage_path)
        self.banners = BannerBoard()
        self.auth = AuthSession(self.api, self.store)
        self.feed = FeedState(self.api, self.auth, self.banners)
        self.profile = ProfileState(self.api, self.auth, self.banners)

    def open_page(self, page: str, username: str = "me") -> Optional[str]:
        """
        Prepare the state for ``page``. Returns the page to redirect to when the
        auth state forbids it, otherwise None.
        """
        redirect = self.auth.redirect_for(page)
        if redirect:
            return redirect
        if page == "index":
            self.feed.load()
        elif page == "profile":
            if not self.profile.load(username) and username == "me":
                return "login"
        return None

    def logout(self) -> str:
        self.auth.logout()
        self.feed.posts = []
        self.profile.profile = None
        return "login"
