"""Active UI language and the document direction derived from it."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Union

from mentor_client.core.log import get_logger
from mentor_client.core.models import Direction, Language, LocaleState

if TYPE_CHECKING:  # pragma: no cover
    from mentor_client.env.document import DocumentEnvironment
    from mentor_client.i18n.translator import Translator
    from mentor_client.storage.persistence import MemoryStorage


_LOGGER = get_logger(__name__)

LANGUAGE_STORAGE_KEY = "language"


def _coerce_language(value: Union[Language, str]) -> Language:
    """Validate ``value`` at the store boundary."""

    if isinstance(value, Language):
        return value
    if not isinstance(value, str):
        raise TypeError(f"language must be a Language or str, got {type(value).__name__}")
    return Language(value)


class LocaleStore:
    """Lock-protected holder of the current :class:`LocaleState`.

    Every change runs the same propagation step: derive the direction,
    write ``dir`` and ``lang`` to the document, persist the language code and
    switch the translator. The step runs once on construction so a saved
    preference is applied before anything renders.
    """

    def __init__(
        self,
        storage: "MemoryStorage",
        document: "DocumentEnvironment",
        translator: "Translator",
        *,
        storage_key: str = LANGUAGE_STORAGE_KEY,
        default_language: Language = Language.EN,
    ) -> None:
        self._lock = threading.RLock()
        self._storage = storage
        self._document = document
        self._translator = translator
        self._storage_key = storage_key
        self._default = _coerce_language(default_language)

        with self._lock:
            self._state = self._apply(self._load_persisted())
        _LOGGER.info("LocaleStore initialised with language=%s", self._state.language.value)

    def _load_persisted(self) -> Language:
        saved = self._storage.get_item(self._storage_key)
        try:
            return Language(saved) if saved is not None else self._default
        except ValueError:
            _LOGGER.warning("Ignoring unknown persisted language %r", saved)
            return self._default

    def _apply(self, language: Language) -> LocaleState:
        """Propagate ``language`` to every sink; caller holds the lock."""

        state = LocaleState.for_language(language)
        self._document.set_attributes(state.direction, state.language)
        self._storage.set_item(self._storage_key, state.language.value)
        self._translator.change_language(state.language.value)
        return state

    def current_state(self) -> LocaleState:
        with self._lock:
            return self._state

    def current_language(self) -> Language:
        return self.current_state().language

    def current_direction(self) -> Direction:
        return self.current_state().direction

    def is_rtl(self) -> bool:
        return self.current_direction() is Direction.RTL

    def set_language(self, language: Union[Language, str]) -> LocaleState:
        """Switch to ``language``; setting the current language again is a no-op in effect."""

        target = _coerce_language(language)
        with self._lock:
            self._state = self._apply(target)
            state = self._state
        _LOGGER.debug("Language set to %s", state.language.value)
        return state

    def toggle_language(self) -> LocaleState:
        """Flip between the primary and secondary language."""

        with self._lock:
            target = Language.AR if self._state.language is Language.EN else Language.EN
            self._state = self._apply(target)
            state = self._state
        _LOGGER.debug("Language toggled to %s", state.language.value)
        return state


__all__ = ["LANGUAGE_STORAGE_KEY", "LocaleStore"]
