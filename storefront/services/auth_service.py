"""
Authentication use cases: login, logout and resolving the current user.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from storefront.core.errors import AuthenticationError
from storefront.domain.entities import User
from storefront.repositories.base import Storage
from storefront.services.session_service import SessionStore

logger = logging.getLogger(__name__)


class InvalidCredentialsError(AuthenticationError):
    default_message = "Invalid credentials"


@dataclass
class LoginSuccess:
    user: User
    session_token: str


@dataclass
class AuthService:
    """Turns credentials into sessions and sessions back into users."""

    storage: Storage
    sessions: SessionStore

    def login(self, username: str, password: str, previous_token: Optional[str] = None) -> LoginSuccess:
        raw_username = (username or "").strip()
        user = self.storage.validate_credentials(raw_username, password)
        if not user:
            logger.info("login failed for %s", raw_username)
            raise InvalidCredentialsError()
        # Never reuse a token the client brought with it.
        self.sessions.destroy(previous_token)
        token = self.sessions.issue(user.id, user.username)
        logger.info("login succeeded for %s", user.username)
        return LoginSuccess(user=user, session_token=token)

    def logout(self, session_token: Optional[str]) -> None:
        if not session_token:
            return
        data = self.sessions.get(session_token)
        self.sessions.destroy(session_token)
        if data:
            logger.info("logout for %s", data.username)

    def current_user(
        self,
        session_token: Optional[str],
        *,
        missing_message: str = "Authentication required",
        stale_message: str = "Invalid session",
    ) -> User:
        """Resolve the session's user or raise AuthenticationError.

        A session pointing at a user that no longer exists is destroyed.
        """
        data = self.sessions.get(session_token)
        if not data:
            raise AuthenticationError(missing_message)
        user = self.storage.get_user(data.user_id)
        if not user:
            self.sessions.destroy(session_token)
            raise AuthenticationError(stale_message)
        return user
