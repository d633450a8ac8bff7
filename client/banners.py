import time
from dataclasses import dataclass, field
from typing import List, Optional

BANNER_TTL_SECONDS = 3.0


@dataclass
class Banner:
    kind: str  # 'error', 'success' or 'info'
    message: str
    created_at: float = field(default_factory=time.monotonic)


class BannerBoard:
    """Transient messages shown to the user; each one disappears after a few seconds."""

    def __init__(self, ttl: float = BANNER_TTL_SECONDS):
        self.ttl = ttl
        self._banners: List[Banner] = []

    def add(self, kind: str, message: str) -> Banner:
        banner = Banner(kind, message)
        self._banners.append(banner)
        return banner

    def error(self, message: str) -> Banner:
        return self.add("error", message)

    def success(self, message: str) -> Banner:
        return self.add("success", message)

    def info(self, message: str) -> Banner:
        return self.add("info", message)

    def visible(self, now: Optional[float] = None) -> List[Banner]:
        now = time.monotonic() if now is None else now
        self._banners = [b for b in self._banners if now - b.created_at < self.ttl]
        return list(self._banners)

    def latest(self) -> Optional[Banner]:
        return self._banners[-1] if self._banners else None

    def clear(self) -> None:
        self._banners.clear()
