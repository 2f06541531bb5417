"""Scoped providers handing store instances to their consumers.

A provider binds a store for the duration of a ``with`` block (per task or
thread, via :mod:`contextvars`); the matching accessor fails fast when used
outside of one.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING, Iterator, Optional

if TYPE_CHECKING:  # pragma: no cover
    from mentor_client.core.locale import LocaleStore
    from mentor_client.core.session import SessionStore


class ContextError(RuntimeError):
    """Raised when a store is requested outside of its provider."""


_session_store: ContextVar[Optional["SessionStore"]] = ContextVar("session_store", default=None)
_locale_store: ContextVar[Optional["LocaleStore"]] = ContextVar("locale_store", default=None)


@contextmanager
def session_provider(store: "SessionStore") -> Iterator["SessionStore"]:
    token = _session_store.set(store)
    try:
        yield store
    finally:
        _session_store.reset(token)


@contextmanager
def locale_provider(store: "LocaleStore") -> Iterator["LocaleStore"]:
    token = _locale_store.set(store)
    try:
        yield store
    finally:
        _locale_store.reset(token)


def use_session() -> "SessionStore":
    store = _session_store.get()
    if store is None:
        raise ContextError("use_session must be used within a session_provider")
    return store


def use_locale() -> "LocaleStore":
    store = _locale_store.get()
    if store is None:
        raise ContextError("use_locale must be used within a locale_provider")
    return store


__all__ = [
    "ContextError",
    "locale_provider",
    "session_provider",
    "use_locale",
    "use_session",
]
