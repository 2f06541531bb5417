"""Session and locale state layer for the mentor-booking web client."""

from .auth import AuthClient, AuthError, AuthProbeError, AuthenticationError, LogoutTransportError
from .cache import ResourceCache
from .client import ClientApp, create_client_app
from .core import (
    ContextError,
    Credentials,
    Direction,
    Language,
    LocaleState,
    LocaleStore,
    SessionState,
    SessionStatus,
    SessionStore,
    User,
    use_locale,
    use_session,
)

__all__ = [
    "AuthClient",
    "AuthError",
    "AuthProbeError",
    "AuthenticationError",
    "ClientApp",
    "ContextError",
    "Credentials",
    "Direction",
    "Language",
    "LocaleState",
    "LocaleStore",
    "LogoutTransportError",
    "ResourceCache",
    "SessionState",
    "SessionStatus",
    "SessionStore",
    "User",
    "create_client_app",
    "use_locale",
    "use_session",
]
