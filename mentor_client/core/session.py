"""Session cache state machine: probe, login, logout and invalidation."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Optional, Union

from pydantic import ValidationError

from mentor_client.core.log import get_logger
from mentor_client.core.models import Credentials, SessionState, User

if TYPE_CHECKING:  # pragma: no cover
    from mentor_client.auth.client import AuthClient
    from mentor_client.cache.resource_cache import ResourceCache
    from mentor_client.env.navigation import Navigator
    from mentor_client.storage.persistence import MemoryStorage


_LOGGER = get_logger(__name__)

SESSION_QUERY_KEY = "auth.me"
LOGIN_PATH = "/login"
DEFAULT_STALE_TIME = 5 * 60.0
USER_STORAGE_KEY = "user"
SESSION_STORAGE_KEYS = (
    USER_STORAGE_KEY,
    "mentorId",
    "menteeId",
    "mentorEmail",
    "menteeEmail",
    "menteeName",
)

_MISSING = object()


class SessionStore:
    """Single source of truth for the signed-in user.

    The user lives in the shared :class:`ResourceCache` under
    :data:`SESSION_QUERY_KEY`: a :class:`User` means authenticated, ``None``
    means anonymous and a missing entry means the probe has not resolved.

    Overlapping ``login``/``logout`` calls are not sequenced; the last write
    to the cache wins.
    """

    def __init__(
        self,
        auth_client: "AuthClient",
        cache: "ResourceCache",
        storage: "MemoryStorage",
        navigator: "Navigator",
        *,
        stale_time: float = DEFAULT_STALE_TIME,
    ) -> None:
        self._auth = auth_client
        self._cache = cache
        self._storage = storage
        self._navigator = navigator
        self._stale_time = stale_time
        self._probe: Optional["asyncio.Future[SessionState]"] = None
        # Set by logout(): the cache is empty afterwards but the session is known to be over.
        self._signed_out = False

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def current_user(self) -> SessionState:
        """Return the last known session state without any I/O."""

        value = self._cache.get_query_data(SESSION_QUERY_KEY, _MISSING)
        if value is _MISSING:
            return SessionState.anonymous() if self._signed_out else SessionState.unknown()
        if value is None:
            return SessionState.anonymous()
        return SessionState.authenticated(value)

    @property
    def is_loading(self) -> bool:
        return self.current_user().is_unknown and self._cache.is_fetching(SESSION_QUERY_KEY)

    # ------------------------------------------------------------------
    # Probe
    # ------------------------------------------------------------------
    async def start(self) -> SessionState:
        """Run the initialization probe once and return the current session state.

        Later calls wait for the same probe but report :meth:`current_user`
        at the time they return, so a logout or login after the probe is
        reflected. Raises :class:`AuthProbeError` when the identity check
        failed and nothing has resolved the session since.
        """

        if self._probe is None:
            _LOGGER.info("Starting session probe")
            self._probe = asyncio.ensure_future(self._fetch(force=True))
        try:
            await asyncio.shield(self._probe)
        except Exception:
            if self.current_user().is_unknown:
                raise
            _LOGGER.debug("Start-up probe failed earlier; session resolved since")
        return self.current_user()

    async def refresh(self) -> SessionState:
        """Return the cached session, re-probing only once it is stale."""

        return await self._fetch(force=False)

    async def invalidate(self) -> SessionState:
        """Mark the session entry stale and probe again."""

        self._cache.invalidate(SESSION_QUERY_KEY)
        return await self._fetch(force=True)

    async def _fetch(self, *, force: bool) -> SessionState:
        stale_time = 0.0 if force else self._stale_time
        await self._cache.fetch_query(
            SESSION_QUERY_KEY,
            self._auth.fetch_current_user,
            stale_time=stale_time,
            retry=0,
        )
        state = self.current_user()
        _LOGGER.debug("Session probe resolved to %s", state.status.value)
        return state

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    async def login(self, credentials: Union[Credentials, dict]) -> User:
        """Sign in and write the returned user straight into the cache.

        Raises :class:`AuthenticationError` on any rejected attempt, including
        malformed credentials, leaving the cache and persisted keys untouched.
        """

        if not isinstance(credentials, Credentials):
            try:
                credentials = Credentials.model_validate(credentials)
            except ValidationError as exc:
                from mentor_client.auth.client import AuthenticationError

                _LOGGER.info("Rejected malformed credentials: %d error(s)", exc.error_count())
                raise AuthenticationError("Email and password are required") from exc
        user = await self._auth.login(credentials)
        self._cache.set_query_data(SESSION_QUERY_KEY, user)
        self._storage.set_item(USER_STORAGE_KEY, user.model_dump_json())
        self._signed_out = False
        _LOGGER.info("Signed in user %s (%s)", user.id, user.user_type)
        return user

    async def logout(self) -> None:
        """Notify the server, then purge local session data and redirect.

        Cleanup runs even when the notification fails; in that case the
        :class:`LogoutTransportError` is re-raised once cleanup is done.
        """

        try:
            await self._auth.logout()
        except Exception as exc:
            _LOGGER.warning("Logout notification failed, cleaning up locally: %s", exc)
            raise
        finally:
            self._purge_local_state()
            self._navigator.navigate(LOGIN_PATH)

    def _purge_local_state(self) -> None:
        for key in SESSION_STORAGE_KEYS:
            self._storage.remove_item(key)
        self._cache.clear()
        self._signed_out = True
        _LOGGER.info("Local session state purged")


__all__ = [
    "DEFAULT_STALE_TIME",
    "LOGIN_PATH",
    "SESSION_QUERY_KEY",
    "SESSION_STORAGE_KEYS",
    "SessionStore",
]
