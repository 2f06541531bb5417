"""Composition root wiring the stores to their collaborators."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

import httpx

from mentor_client.auth.client import AuthClient
from mentor_client.cache.resource_cache import ResourceCache
from mentor_client.config import Settings, get_settings
from mentor_client.core.context import locale_provider, session_provider
from mentor_client.core.locale import LocaleStore
from mentor_client.core.log import get_logger
from mentor_client.core.models import SessionState
from mentor_client.core.session import SessionStore
from mentor_client.env.document import DocumentEnvironment
from mentor_client.env.navigation import Navigator
from mentor_client.i18n.translator import Translator
from mentor_client.storage.persistence import FileStorage, MemoryStorage


_LOGGER = get_logger(__name__)


@dataclass
class ClientApp:
    """Process-lifetime collaborators and the two stores built on them."""

    settings: Settings
    storage: MemoryStorage
    cache: ResourceCache
    document: DocumentEnvironment
    navigator: Navigator
    translator: Translator
    auth_client: AuthClient
    session: SessionStore
    locale: LocaleStore

    @contextmanager
    def provide(self) -> Iterator["ClientApp"]:
        """Make both stores available to ``use_session``/``use_locale``."""

        with session_provider(self.session), locale_provider(self.locale):
            yield self

    async def start(self) -> SessionState:
        return await self.session.start()

    async def aclose(self) -> None:
        await self.auth_client.aclose()


def create_client_app(
    settings: Optional[Settings] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    storage: Optional[MemoryStorage] = None,
    clock: Optional[Callable[[], float]] = None,
) -> ClientApp:
    """Build a :class:`ClientApp`; the locale is applied before this returns."""

    settings = settings or get_settings()
    storage = storage if storage is not None else FileStorage(settings.storage_path)
    cache = ResourceCache(clock=clock)
    document = DocumentEnvironment()
    navigator = Navigator()
    translator = Translator()
    auth_client = AuthClient(
        settings.api_url,
        timeout=settings.request_timeout,
        transport=transport,
    )

    locale = LocaleStore(
        storage,
        document,
        translator,
        storage_key=settings.language_key,
        default_language=settings.default_language,
    )
    session = SessionStore(
        auth_client,
        cache,
        storage,
        navigator,
        stale_time=settings.session_stale_seconds,
    )
    _LOGGER.info("Client app created for %s", settings.api_url)
    return ClientApp(
        settings=settings,
        storage=storage,
        cache=cache,
        document=document,
        navigator=navigator,
        translator=translator,
        auth_client=auth_client,
        session=session,
        locale=locale,
    )


__all__ = ["ClientApp", "create_client_app"]
