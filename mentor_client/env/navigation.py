"""Minimal client-side location holder used for redirects."""

from __future__ import annotations

from typing import Callable, List

from mentor_client.core.log import get_logger


_LOGGER = get_logger(__name__)

LocationListener = Callable[[str], None]


class Navigator:
    """Track the current view path and notify subscribers on change."""

    def __init__(self, initial: str = "/") -> None:
        self._history: List[str] = [self._normalize(initial)]
        self._listeners: List[LocationListener] = []

    @staticmethod
    def _normalize(path: str) -> str:
        path = path.strip()
        return path if path.startswith("/") else f"/{path}"

    @property
    def location(self) -> str:
        return self._history[-1]

    @property
    def history(self) -> List[str]:
        return list(self._history)

    def navigate(self, path: str) -> None:
        target = self._normalize(path)
        self._history.append(target)
        _LOGGER.info("Navigating to %s", target)
        for listener in list(self._listeners):
            listener(target)

    def subscribe(self, listener: LocationListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe


__all__ = ["LocationListener", "Navigator"]
