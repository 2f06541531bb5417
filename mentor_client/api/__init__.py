"""Reference HTTP implementation of the auth boundary."""

from .app import create_app
from .routes_auth import Account, AccountDirectory

__all__ = ["Account", "AccountDirectory", "create_app"]
