"""Document-level text direction and language attributes."""

from __future__ import annotations

import threading
from typing import Callable, List, Tuple

from mentor_client.core.log import get_logger
from mentor_client.core.models import Direction, Language


_LOGGER = get_logger(__name__)

AttributeListener = Callable[[Direction, Language], None]


class DocumentEnvironment:
    """Global ``dir``/``lang`` sink; both attributes always change together."""

    def __init__(
        self,
        direction: Direction = Direction.LTR,
        lang: Language = Language.EN,
    ) -> None:
        self._lock = threading.RLock()
        self._direction = direction
        self._lang = lang
        self._listeners: List[AttributeListener] = []

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def lang(self) -> Language:
        return self._lang

    def snapshot(self) -> Tuple[Direction, Language]:
        with self._lock:
            return self._direction, self._lang

    def set_attributes(self, direction: Direction, lang: Language) -> None:
        """Overwrite both attributes and notify listeners."""

        applied_direction = Direction(direction)
        applied_lang = Language(lang)
        with self._lock:
            self._direction = applied_direction
            self._lang = applied_lang
            listeners = list(self._listeners)
        _LOGGER.debug("Document attributes set: dir=%s lang=%s", applied_direction.value, applied_lang.value)
        for listener in listeners:
            listener(applied_direction, applied_lang)

    def subscribe(self, listener: AttributeListener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""

        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe


__all__ = ["AttributeListener", "DocumentEnvironment"]
