"""HTTP infrastructure components."""

from .client import AuthenticatedRequestClient, HttpClient, RequestOptions

__all__ = ["HttpClient", "AuthenticatedRequestClient", "RequestOptions"]
