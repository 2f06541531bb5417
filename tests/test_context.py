"""Tests for the scoped store providers."""

import asyncio
import unittest

from mentor_client.core.context import (
    ContextError,
    locale_provider,
    session_provider,
    use_locale,
    use_session,
)


class ContextProviderTests(unittest.TestCase):
    """Accessors must fail fast outside their provider."""

    def test_use_session_outside_provider_raises(self) -> None:
        with self.assertRaises(ContextError) as ctx:
            use_session()
        self.assertIn("session_provider", str(ctx.exception))

    def test_use_locale_outside_provider_raises(self) -> None:
        with self.assertRaises(ContextError):
            use_locale()

    def test_provider_binds_and_restores(self) -> None:
        outer, inner = object(), object()
        with session_provider(outer):  # type: ignore[arg-type]
            self.assertIs(use_session(), outer)
            with session_provider(inner):  # type: ignore[arg-type]
                self.assertIs(use_session(), inner)
            self.assertIs(use_session(), outer)
        with self.assertRaises(ContextError):
            use_session()

    def test_binding_is_visible_to_tasks_started_inside(self) -> None:
        store = object()

        async def consumer() -> object:
            return use_locale()

        async def main() -> object:
            with locale_provider(store):  # type: ignore[arg-type]
                return await asyncio.create_task(consumer())

        self.assertIs(asyncio.run(main()), store)


if __name__ == "__main__":
    unittest.main()
