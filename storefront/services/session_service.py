"""Session helpers (issue tokens, cookies, validation)."""
from __future__ import annotations

import secrets
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from fastapi import Request, Response

from storefront.core.config import Settings


@dataclass(frozen=True)
class SessionData:
    user_id: str
    username: str
    expires_at: float


MIN_SESSION_TTL_SECONDS = 60


def session_lifetime(ttl_seconds: int) -> int:
    """Effective lifetime shared by the server-side session and its cookie."""
    return max(MIN_SESSION_TTL_SECONDS, ttl_seconds)


class SessionStore:
    """Server-side session state keyed by opaque cookie tokens."""

    def __init__(self, ttl_seconds: int, clock: Callable[[], float] = time.time) -> None:
        self.ttl_seconds = session_lifetime(ttl_seconds)
        self._clock = clock
        self._sessions: dict[str, SessionData] = {}
        self._lock = threading.Lock()

    def issue(self, user_id: str, username: str) -> str:
        """Create a new session token for ``user_id``."""
        token = secrets.token_urlsafe(32)
        now = self._clock()
        data = SessionData(user_id=user_id, username=username, expires_at=now + self.ttl_seconds)
        with self._lock:
            # Sweep sessions whose clients never came back.
            expired = [t for t, d in self._sessions.items() if d.expires_at < now]
            for stale in expired:
                del self._sessions[stale]
            self._sessions[token] = data
        return token

    def get(self, token: Optional[str]) -> Optional[SessionData]:
        if not token:
            return None
        with self._lock:
            data = self._sessions.get(token)
            if data and data.expires_at < self._clock():
                del self._sessions[token]
                return None
            return data

    def destroy(self, token: Optional[str]) -> None:
        if not token:
            return
        with self._lock:
            self._sessions.pop(token, None)

    def __len__(self) -> int:
        return len(self._sessions)


def session_token(request: Request, settings: Settings) -> Optional[str]:
    return request.cookies.get(settings.session_cookie_name)


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        settings.session_cookie_name,
        token,
        httponly=True,
        secure=settings.secure_cookies,
        samesite="lax",
        max_age=session_lifetime(settings.session_ttl_seconds),
        path="/",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(settings.session_cookie_name, path="/")
