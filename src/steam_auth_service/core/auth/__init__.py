"""Authentication provider abstraction layer.

Exposes the Steam OpenID engine as a pluggable provider:
- steam: Sign in through Steam (OpenID 2.0, stateless)
"""

from .provider import AuthProvider, UserIdentity
from .factory import get_auth_provider

__all__ = [
    "AuthProvider",
    "UserIdentity",
    "get_auth_provider",
]
