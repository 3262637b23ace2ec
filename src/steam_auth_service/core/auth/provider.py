"""Abstract authentication provider interface.

This module defines the contract the host application relies on, so that
routes stay independent of how a provider proves who the user is.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional
from pydantic import BaseModel, Field


class UserIdentity(BaseModel):
    """User identity returned from authentication providers.

    Attributes:
        user_id: Unique user identifier (64-bit SteamID for Steam)
        username: Username for display
        display_name: Full name for UI
        avatar_url: Profile picture URL (optional)
        profile_url: Public profile page (optional)
        provider: Auth provider used ('steam')
        metadata: Provider-specific metadata (optional)
    """
    user_id: str
    username: str
    display_name: str
    avatar_url: Optional[str] = None
    profile_url: Optional[str] = None
    provider: str
    metadata: Dict[str, Any] = Field(default_factory=dict)


class AuthProvider(ABC):
    """Abstract interface for redirect-based authentication providers.

    A login takes two requests: the first is sent to the provider's login
    page, the second comes back from it carrying the provider's assertion.
    """

    @abstractmethod
    def get_login_url(self, return_url: Optional[str] = None) -> str:
        """Generate the URL to redirect the user to.

        Args:
            return_url: Callback URL; defaults to the provider's configured one

        Returns:
            URL to initiate authentication flow
        """
        pass

    @abstractmethod
    def is_callback(self, params: Mapping[str, str]) -> bool:
        """Return True if the request parameters carry a provider assertion.

        Args:
            params: Query parameters of the incoming request
        """
        pass

    @abstractmethod
    async def authenticate(self, params: Mapping[str, str]) -> UserIdentity:
        """Verify a provider callback and return the user identity.

        Args:
            params: Query parameters of the callback request

        Returns:
            UserIdentity with user information

        Raises:
            OpenIDError: If verification fails
        """
        pass
