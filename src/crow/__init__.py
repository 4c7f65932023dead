"""
Crow: client for a minimal social network.

Architecture Overview:
- infrastructure.http: HTTP transport and the authenticated request client
  that refreshes an expired session once and retries
- infrastructure.session: Session model, provider protocol, stores and the
  Supabase (GoTrue) session provider
- api: Typed operations of the social backend (posts, likes, comments, follows)
- core: Configuration, constants and security helpers
- cli: Command-line interface
- Shared: logging and exceptions
"""

__version__ = "0.1.0"

from .api import SocialApi
from .exceptions import (
    ApiError,
    CrowError,
    CrowNetworkError,
    NoCredential,
    SessionExpired,
    SessionUnavailable,
)
from .infrastructure.http import AuthenticatedRequestClient, RequestOptions
from .infrastructure.session import Session, SessionProvider

__all__ = [
    "__version__",
    "AuthenticatedRequestClient",
    "RequestOptions",
    "Session",
    "SessionProvider",
    "SocialApi",
    "CrowError",
    "SessionUnavailable",
    "NoCredential",
    "SessionExpired",
    "CrowNetworkError",
    "ApiError",
]
