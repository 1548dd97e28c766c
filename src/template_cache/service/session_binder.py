"""Keeps the template cache namespaced to the signed-in user."""

from typing import Callable, Optional

from src.shared.logging import LoggingManager
from ..const import (
    AUTH_EVENT_INITIAL_SESSION,
    AUTH_EVENT_SIGNED_IN,
    AUTH_EVENT_SIGNED_OUT,
    AUTH_EVENT_TOKEN_REFRESHED,
    AUTH_EVENT_USER_UPDATED,
)
from ..ports.auth_provider import AuthProvider, AuthSession
from .template_cache_service import TemplateCacheService

logger = LoggingManager.get_logger(__name__)

USER_EVENTS = {
    AUTH_EVENT_INITIAL_SESSION,
    AUTH_EVENT_SIGNED_IN,
    AUTH_EVENT_TOKEN_REFRESHED,
    AUTH_EVENT_USER_UPDATED,
}


class AuthSessionBinder:
    """Binds identity changes from the auth provider to the cache namespace.

    Signing out clears the departing user's cache so templates never outlive
    the session on a shared machine.
    """

    def __init__(self, auth_provider: AuthProvider, cache: TemplateCacheService):
        self.auth_provider = auth_provider
        self.cache = cache
        self._unsubscribe: Optional[Callable[[], None]] = None

    async def initialize(self) -> Optional[AuthSession]:
        """Namespace the cache to the current session and follow later changes."""
        session = await self.auth_provider.get_session()
        if session is not None and session.user is not None:
            self.cache.set_user(session.user.id)
            logger.info(f"Initial session established for {session.user.email}")
        if self._unsubscribe is None:
            self._unsubscribe = self.auth_provider.on_auth_state_change(self.handle_auth_state_change)
        return session

    def handle_auth_state_change(self, event: str, session: Optional[AuthSession]) -> None:
        logger.debug(f"Auth state changed: {event}")
        if event == AUTH_EVENT_SIGNED_OUT:
            self._clear_current_user()
        elif event in USER_EVENTS and session is not None and session.user is not None:
            if session.user.id != self.cache.user_id:
                self.cache.set_user(session.user.id)

    async def sign_out(self) -> None:
        """Clear the current user's cache, then end the provider session."""
        self._clear_current_user()
        await self.auth_provider.sign_out()

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _clear_current_user(self) -> None:
        if self.cache.user_id is None:
            return
        self.cache.clear()
        self.cache.set_user(None)
