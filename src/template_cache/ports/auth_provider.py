"""Port interface for the external identity provider."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional, Union


@dataclass
class AuthUser:
    """Identity of the signed-in user."""
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    image: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class AuthSession:
    """Session returned by the identity provider."""
    user: Optional[AuthUser] = None
    access_token: Optional[str] = None


AuthStateCallback = Callable[[str, Optional[AuthSession]], Union[None, Awaitable[None]]]


class AuthProvider(ABC):
    """Port interface for the identity provider."""

    @abstractmethod
    async def get_session(self) -> Optional[AuthSession]:
        """Return the current session, or None when signed out."""
        pass

    @abstractmethod
    def on_auth_state_change(self, callback: AuthStateCallback) -> Callable[[], None]:
        """Subscribe to auth events. Returns an unsubscribe function."""
        pass

    @abstractmethod
    async def sign_in_with_google(self) -> None:
        """Start the Google sign-in flow."""
        pass

    @abstractmethod
    async def sign_out(self) -> None:
        """End the current session."""
        pass
