"""Session and locale state stores."""

from .context import ContextError, locale_provider, session_provider, use_locale, use_session
from .locale import LANGUAGE_STORAGE_KEY, LocaleStore
from .models import (
    Credentials,
    Direction,
    Language,
    LocaleState,
    SessionState,
    SessionStatus,
    User,
    direction_for,
)
from .session import LOGIN_PATH, SESSION_QUERY_KEY, SESSION_STORAGE_KEYS, SessionStore

__all__ = [
    "ContextError",
    "Credentials",
    "Direction",
    "LANGUAGE_STORAGE_KEY",
    "LOGIN_PATH",
    "Language",
    "LocaleState",
    "LocaleStore",
    "SESSION_QUERY_KEY",
    "SESSION_STORAGE_KEYS",
    "SessionState",
    "SessionStatus",
    "SessionStore",
    "User",
    "direction_for",
    "locale_provider",
    "session_provider",
    "use_locale",
    "use_session",
]
