import json
import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Fixed keys, same ones the browser build keeps in localStorage
USER_KEY = "social_currentUser"
TOKEN_KEY = "social_token"

DEFAULT_STORAGE_PATH = Path(os.getenv("SOCIAL_CLIENT_STORAGE", Path.home() / ".social_client" / "storage.json"))


class AuthStore:
    """Persists the signed-in user and token in a small JSON file."""

    def __init__(self, path=DEFAULT_STORAGE_PATH):
        self.path = Path(path)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error("Could not read auth storage %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data), encoding="utf-8")
        tmp_path.replace(self.path)

    def get_user(self) -> Optional[dict]:
        return self._read().get(USER_KEY)

    def get_token(self) -> Optional[str]:
        return self._read().get(TOKEN_KEY)

    def set(self, user: dict, token: Optional[str] = None) -> None:
        data = self._read()
        data[USER_KEY] = user
        if token:
            data[TOKEN_KEY] = token
        self._write(data)

    def clear(self) -> None:
        data = self._read()
        data.pop(USER_KEY, None)
        data.pop(TOKEN_KEY, None)
        self._write(data)
