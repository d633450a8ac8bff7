"""HTTP client for the social platform API."""

import logging
import os
from typing import Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = os.getenv("SOCIAL_API_URL", "http://localhost:3000/api")


class ApiError(Exception):
    """A non-2xx answer (or no answer at all) from the API."""

    def __init__(self, status_code: int, message: str, payload=None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.payload = payload


class ApiClient:
    """
    Thin wrapper over ``requests`` for every backend route.

    The bearer token is attached to every call while ``token`` is set. Failed
    calls raise :class:`ApiError` carrying the server's ``error`` message.
    Nothing is retried.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, token: Optional[str] = None,
                 session: Optional[requests.Session] = None, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    def headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, method: str, path: str, json=None, params=None):
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method, url, json=json, params=params, headers=self.headers(), timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise ApiError(0, "Network error. Please try again.") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if not 200 <= response.status_code < 300:
            message = data.get("error") if isinstance(data, dict) else None
            message = message or f"Request failed with status {response.status_code}"
            logger.warning("%s %s -> %s: %s", method, url, response.status_code, message)
            raise ApiError(response.status_code, message, data)
        return data

    # Auth
    def register(self, display_name: str, username: str, email: str, password: str) -> dict:
        return self._request("POST", "/auth/register", json={
            "displayName": display_name,
            "username": username,
            "email": email,
            "password": password,
        })

    def login(self, identifier: str, password: str) -> dict:
        return self._request("POST", "/auth/login", json={"identifier": identifier, "password": password})

    def me(self) -> dict:
        return self._request("GET", "/auth/me")

    # Posts
    def list_posts(self, feed: str = "all") -> list:
        """``feed`` is "all" or "following"; the latter needs a token."""
        return self._request("GET", "/posts", params={"feed": feed})

    def get_post(self, post_id: int) -> dict:
        return self._request("GET", f"/posts/{post_id}")

    def create_post(self, content: str) -> dict:
        return self._request("POST", "/posts", json={"content": content})

    def like_post(self, post_id: int) -> dict:
        return self._request("POST", f"/posts/{post_id}/like")

    def unlike_post(self, post_id: int) -> dict:
        return self._request("DELETE", f"/posts/{post_id}/like")

    # Users
    def get_profile(self, username: str) -> dict:
        return self._request("GET", f"/users/{username}")

    def get_user_posts(self, username: str) -> list:
        return self._request("GET", f"/users/{username}/posts")

    def follow(self, username: str) -> dict:
        return self._request("POST", f"/users/{username}/follow")

    def unfollow(self, username: str) -> dict:
        return self._request("DELETE", f"/users/{username}/follow")

    def update_profile(self, **fields) -> dict:
        return self._request("PUT", "/users/me/profile", json=fields)

    def report(self, reason: str, reported_user_id: Optional[int] = None,
               reported_post_id: Optional[int] = None) -> dict:
        return self._request("POST", "/reports", json={
            "reason": reason,
            "reported_user_id": reported_user_id,
            "reported_post_id": reported_post_id,
        })

    # Admin / moderation
    def list_users(self, page: int = 1, limit: int = 50, search: str = "") -> dict:
        return self._request("GET", "/admin/users", params={"page": page, "limit": limit, "search": search})

    def ban_user(self, user_id: int, reason: str, duration_hours: int) -> dict:
        return self._request("POST", f"/admin/users/{user_id}/ban",
                             json={"reason": reason, "duration_hours": duration_hours})

    def unban_user(self, user_id: int) -> dict:
        return self._request("POST", f"/admin/users/{user_id}/unban")

    def delete_post(self, post_id: int, reason: Optional[str] = None) -> dict:
        return self._request("DELETE", f"/admin/posts/{post_id}", json={"reason": reason} if reason else None)

    def analytics(self, period: str = "7d") -> dict:
        return self._request("GET", "/admin/analytics", params={"period": period})

    def list_reports(self, status: str = "pending") -> list:
        return self._request("GET", "/moderation/reports", params={"status": status})

    def resolve_report(self, report_id: int, action: str, notes: Optional[str] = None) -> dict:
        body = {"action": action}
        if notes:
            body["notes"] = notes
        return self._request("POST", f"/moderation/reports/{report_id}/resolve", json=body)

    def health(self) -> dict:
        return self._request("GET", "/health")
