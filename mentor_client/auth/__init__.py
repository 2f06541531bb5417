"""Client for the server-side auth endpoints."""

from .client import (
    AuthClient,
    AuthError,
    AuthProbeError,
    AuthenticationError,
    LogoutTransportError,
    api_url,
)

__all__ = [
    "AuthClient",
    "AuthError",
    "AuthProbeError",
    "AuthenticationError",
    "LogoutTransportError",
    "api_url",
]
