import logging
import re
from typing import List, Optional

from client.api import ApiClient, ApiError
from client.storage import AuthStore

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r'^[a-zA-Z0-9_]+$')
EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

PROTECTED_PAGES = ("index", "profile", "dms")
AUTH_PAGES = ("login", "signup")


class AuthError(Exception):
    """Raised for a rejected form or a failed register/login call."""


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email or ""))


def validate_registration(display_name: str, username: str, email: str, password: str,
                          confirm_password: str, privacy_policy: bool) -> List[str]:
    errors = []

    if not (display_name or "").strip():
        errors.append("Display name is required")

    username = (username or "").strip()
    if not username:
        errors.append("Username is required")
    elif len(username) < 3:
        errors.append("Username must be at least 3 characters")
    elif not USERNAME_PATTERN.match(username):
        errors.append("Username can only contain letters, numbers, and underscores")

    email = (email or "").strip()
    if not email:
        errors.append("Email is required")
    elif not is_valid_email(email):
        errors.append("Please enter a valid email address")

    if not password:
        errors.append("Password is required")
    elif len(password) < 6:
        errors.append("Password must be at least 6 characters")

    if password != confirm_password:
        errors.append("Passwords do not match")

    if not privacy_policy:
        errors.append("You must agree to the Privacy Policy and Terms of Service")

    return errors


def validate_login(identifier: str, password: str) -> List[str]:
    errors = []
    if not (identifier or "").strip():
        errors.append("Username or email is required")
    if not password:
        errors.append("Password is required")
    return errors


class AuthSession:
    """Signed-in state: who the user is and the token the API client sends."""

    def __init__(self, api: ApiClient, store: AuthStore):
        self.api = api
        self.store = store
        self.current_user: Optional[dict] = store.get_user()
        self.token: Optional[str] = store.get_token()
        self.api.token = self.token

    def is_authenticated(self) -> bool:
        return self.current_user is not None

    def auth_headers(self) -> dict:
        return self.api.headers()

    def _sign_in(self, result: dict) -> dict:
        self.store.set(result["user"], result["token"])
        self.current_user = result["user"]
        self.token = result["token"]
        self.api.token = self.token
        return result

    def register(self, display_name: str, username: str, email: str, password: str,
                 confirm_password: str, privacy_policy: bool) -> dict:
        """Validate the signup form, create the account and sign in with it."""
        errors = validate_registration(display_name, username, email, password, confirm_password, privacy_policy)
        if errors:
            raise AuthError(errors[0])
        try:
            result = self.api.register(display_name.strip(), username.strip(), email.strip(), password)
        except ApiError as e:
            raise AuthError(e.message or "Registration failed. Please try again.") from e
        logger.info("Registration successful: %s", result["user"]["username"])
        return self._sign_in(result)

    def login(self, identifier: str, password: str) -> dict:
        errors = validate_login(identifier, password)
        if errors:
            raise AuthError(errors[0])
        try:
            result = self.api.login(identifier.strip(), password)
        except ApiError as e:
            raise AuthError(e.message or "Login failed. Please check your credentials.") from e
        logger.info("Login successful: %s", result["user"]["username"])
        return self._sign_in(result)

    def logout(self) -> None:
        self.store.clear()
        self.current_user = None
        self.token = None
        self.api.token = None

    def update_current_user(self, fields: dict) -> None:
        """Merge edited profile fields into the stored user."""
        if self.current_user is None:
            return
        self.current_user = {**self.current_user, **fields}
        self.store.set(self.current_user)

    def redirect_for(self, page: str) -> Optional[str]:
        """Page to send the user to instead of ``page``, or None to stay."""
        if self.is_authenticated() and page in AUTH_PAGES:
            return "index"
        if not self.is_authenticated() and page in PROTECTED_PAGES:
            return "login"
        return None
