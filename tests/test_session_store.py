"""Tests for the SessionStore using a fake auth client."""

from __future__ import annotations

import asyncio
import unittest
from typing import List, Optional

from mentor_client.auth.client import AuthenticationError, AuthProbeError, LogoutTransportError
from mentor_client.cache.resource_cache import ResourceCache
from mentor_client.core.models import Credentials, SessionStatus, User
from mentor_client.core.session import (
    LOGIN_PATH,
    SESSION_QUERY_KEY,
    SESSION_STORAGE_KEYS,
    SessionStore,
)
from mentor_client.env.navigation import Navigator
from mentor_client.storage.persistence import MemoryStorage


MENTEE = User(id="u1", email="a@b.com", user_type="mentee")
MENTOR = User(id="m1", email="e@x.com", name="Eve", user_type="mentor")


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class FakeAuthClient:
    """In-memory auth boundary recording every call."""

    def __init__(self, me: Optional[User] = None) -> None:
        self.me = me
        self.probe_error: Optional[Exception] = None
        self.logout_error: Optional[Exception] = None
        self.accepted: dict[str, tuple[str, User]] = {}
        self.calls: List[str] = []
        self.probe_gate: Optional[asyncio.Event] = None

    async def fetch_current_user(self) -> Optional[User]:
        self.calls.append("me")
        # The answer reflects the server session when the request was sent.
        me, error = self.me, self.probe_error
        if self.probe_gate is not None:
            await self.probe_gate.wait()
        if error is not None:
            raise error
        return me

    async def login(self, credentials: Credentials) -> User:
        self.calls.append("login")
        entry = self.accepted.get(credentials.email)
        if entry is None or entry[0] != credentials.password.get_secret_value():
            raise AuthenticationError("401: Invalid email or password", 401)
        self.me = entry[1]
        return entry[1]

    async def logout(self) -> None:
        self.calls.append("logout")
        if self.logout_error is not None:
            raise self.logout_error
        self.me = None


class SessionStoreTests(unittest.IsolatedAsyncioTestCase):
    """Validate the session state machine without a network."""

    def setUp(self) -> None:
        self.clock = FakeClock()
        self.auth = FakeAuthClient()
        self.cache = ResourceCache(clock=self.clock)
        self.storage = MemoryStorage()
        self.navigator = Navigator("/dashboard")
        self.store = SessionStore(self.auth, self.cache, self.storage, self.navigator)

    async def _until_probed(self) -> None:
        while "me" not in self.auth.calls:
            await asyncio.sleep(0)

    async def test_initial_state_is_unknown(self) -> None:
        self.assertIs(self.store.current_user().status, SessionStatus.UNKNOWN)
        self.assertEqual(self.auth.calls, [])

    async def test_probe_without_session_then_login(self) -> None:
        """A 401 probe resolves to anonymous and login sets the user directly."""

        self.auth.accepted["a@b.com"] = ("x", MENTEE)
        state = await self.store.start()
        self.assertTrue(state.is_anonymous)
        self.assertTrue(self.store.current_user().is_anonymous)

        user = await self.store.login({"email": "a@b.com", "password": "x"})
        self.assertEqual(user, MENTEE)
        current = self.store.current_user()
        self.assertTrue(current.is_authenticated)
        self.assertEqual(current.user, MENTEE)
        self.assertEqual(self.auth.calls, ["me", "login"])
        self.assertEqual(User.model_validate_json(self.storage.get_item("user")), MENTEE)

    async def test_probe_with_session_is_authenticated(self) -> None:
        self.auth.me = MENTOR
        state = await self.store.start()
        self.assertTrue(state.is_authenticated)
        self.assertEqual(state.user, MENTOR)

    async def test_failed_login_leaves_cache_untouched(self) -> None:
        await self.store.start()
        with self.assertRaises(AuthenticationError):
            await self.store.login(Credentials(email="a@b.com", password="wrong"))
        self.assertTrue(self.store.current_user().is_anonymous)
        self.assertIsNone(self.storage.get_item("user"))
        self.assertIsNone(self.cache.get_query_data(SESSION_QUERY_KEY, "missing"))

    async def test_probe_failure_surfaces_error_without_retry(self) -> None:
        self.auth.probe_error = AuthProbeError("500: boom", 500)
        with self.assertRaises(AuthProbeError):
            await self.store.start()
        self.assertTrue(self.store.current_user().is_unknown)
        self.assertEqual(self.auth.calls, ["me"])

    async def test_start_runs_probe_once(self) -> None:
        """Concurrent and repeated starts share a single probe."""

        self.auth.probe_gate = asyncio.Event()
        first = asyncio.ensure_future(self.store.start())
        second = asyncio.ensure_future(self.store.start())
        await self._until_probed()
        self.assertTrue(self.store.is_loading)
        self.auth.probe_gate.set()
        results = await asyncio.gather(first, second)
        self.assertEqual(results[0], results[1])
        await self.store.start()
        self.assertEqual(self.auth.calls, ["me"])
        self.assertFalse(self.store.is_loading)

    async def test_refresh_respects_staleness_window(self) -> None:
        self.auth.me = MENTOR
        await self.store.start()
        self.clock.now = 299.0
        await self.store.refresh()
        self.assertEqual(self.auth.calls, ["me"])

        self.auth.me = None
        self.clock.now = 301.0
        state = await self.store.refresh()
        self.assertEqual(self.auth.calls, ["me", "me"])
        self.assertTrue(state.is_anonymous)

    async def test_invalidate_reprobes_inside_window(self) -> None:
        self.auth.me = MENTOR
        await self.store.start()
        self.auth.me = MENTEE
        state = await self.store.invalidate()
        self.assertEqual(state.user, MENTEE)
        self.assertEqual(self.auth.calls, ["me", "me"])

    async def test_logout_purges_keys_cache_and_redirects(self) -> None:
        """Persisted identifiers and every cache entry are gone after logout."""

        self.auth.me = MENTOR
        await self.store.start()
        self.storage.set_item("mentorId", "m1")
        self.storage.set_item("mentorEmail", "e@x.com")
        self.storage.set_item("language", "ar")
        self.cache.set_query_data("/api/mentors", ["m1"])
        redirect_seen_cache: list[int] = []
        self.navigator.subscribe(lambda _path: redirect_seen_cache.append(len(self.cache)))

        await self.store.logout()

        for key in SESSION_STORAGE_KEYS:
            self.assertNotIn(key, self.storage)
        self.assertEqual(self.storage.get_item("language"), "ar")
        self.assertEqual(len(self.cache), 0)
        self.assertEqual(self.navigator.location, LOGIN_PATH)
        self.assertEqual(redirect_seen_cache, [0])
        self.assertTrue(self.store.current_user().is_anonymous)

    async def test_logout_transport_error_still_cleans_up(self) -> None:
        self.auth.accepted["a@b.com"] = ("x", MENTEE)
        await self.store.login({"email": "a@b.com", "password": "x"})
        for key in SESSION_STORAGE_KEYS:
            self.storage.set_item(key, "value")
        self.auth.logout_error = LogoutTransportError("Logout request failed")

        with self.assertRaises(LogoutTransportError):
            await self.store.logout()

        for key in SESSION_STORAGE_KEYS:
            self.assertIsNone(self.storage.get_item(key))
        self.assertEqual(len(self.cache), 0)
        self.assertEqual(self.navigator.location, LOGIN_PATH)
        self.assertFalse(self.store.current_user().is_authenticated)

    async def test_probe_in_flight_during_logout_does_not_restore_user(self) -> None:
        self.auth.me = MENTOR
        self.auth.probe_gate = asyncio.Event()
        probe = asyncio.ensure_future(self.store.start())
        await self._until_probed()
        await self.store.logout()
        self.auth.me = MENTOR
        self.auth.probe_gate.set()
        await probe
        self.assertEqual(len(self.cache), 0)
        self.assertTrue(self.store.current_user().is_anonymous)

    async def test_start_after_logout_reports_anonymous(self) -> None:
        self.auth.me = MENTOR
        self.assertTrue((await self.store.start()).is_authenticated)
        await self.store.logout()

        state = await self.store.start()
        self.assertTrue(state.is_anonymous)
        self.assertEqual(state, self.store.current_user())
        self.assertEqual(self.auth.calls, ["me", "logout"])

    async def test_start_after_failed_probe_reflects_later_invalidate(self) -> None:
        self.auth.probe_error = AuthProbeError("503: unavailable", 503)
        with self.assertRaises(AuthProbeError):
            await self.store.start()

        self.auth.probe_error = None
        self.auth.me = MENTEE
        await self.store.invalidate()
        state = await self.store.start()
        self.assertEqual(state.user, MENTEE)

    async def test_login_during_startup_check_keeps_user(self) -> None:
        """A check sent before login resolves afterwards without undoing the login."""

        self.auth.accepted["a@b.com"] = ("x", MENTEE)
        self.auth.probe_gate = asyncio.Event()
        started = asyncio.ensure_future(self.store.start())
        await self._until_probed()

        await self.store.login({"email": "a@b.com", "password": "x"})
        self.auth.probe_gate.set()
        state = await started

        self.assertEqual(state.user, MENTEE)
        self.assertEqual(self.store.current_user().user, MENTEE)
        self.assertEqual(self.cache.get_query_data(SESSION_QUERY_KEY), MENTEE)

    async def test_malformed_credentials_raise_authentication_error(self) -> None:
        await self.store.start()
        for payload in ({"email": "", "password": "x"}, {"email": "a@b.com", "password": ""}, {}):
            with self.subTest(payload=payload):
                with self.assertRaises(AuthenticationError):
                    await self.store.login(payload)
        self.assertNotIn("login", self.auth.calls)
        self.assertTrue(self.store.current_user().is_anonymous)
        self.assertIsNone(self.storage.get_item("user"))


if __name__ == "__main__":
    unittest.main()
