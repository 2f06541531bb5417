"""Translation bundle lookup for the two supported UI languages."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from mentor_client.core.log import get_logger


_LOGGER = get_logger(__name__)

LOCALES_DIR = Path(__file__).resolve().parent / "locales"
SUPPORTED_LANGUAGES = ("en", "ar")
FALLBACK_LANGUAGE = "en"
RTL_LANGUAGES = ("ar", "he", "fa", "ur")

_PLACEHOLDER_RE = re.compile(r"\{\{\s*(\w+)\s*\}\}")


def is_rtl(code: str) -> bool:
    """Return True when ``code`` is written right-to-left."""

    return code.split("-", 1)[0].lower() in RTL_LANGUAGES


def load_bundle(code: str, locales_dir: Path = LOCALES_DIR) -> Dict[str, Any]:
    path = locales_dir / f"{code}.json"
    with path.open(encoding="utf-8") as handle:
        bundle = json.load(handle)
    if not isinstance(bundle, dict):
        raise ValueError(f"Translation bundle {path} must be a JSON object")
    return bundle


def _lookup(bundle: Mapping[str, Any], key: str) -> Optional[str]:
    node: Any = bundle
    for part in key.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return None
        node = node[part]
    return node if isinstance(node, str) else None


class Translator:
    """Resolve dotted keys against the active language's bundle.

    Missing keys fall back to the ``en`` bundle, then to ``default``, then to
    the key itself. ``{{name}}`` placeholders are filled from keyword values.
    """

    def __init__(
        self,
        bundles: Optional[Mapping[str, Mapping[str, Any]]] = None,
        language: str = FALLBACK_LANGUAGE,
    ) -> None:
        if bundles is None:
            bundles = {code: load_bundle(code) for code in SUPPORTED_LANGUAGES}
        missing = [code for code in SUPPORTED_LANGUAGES if code not in bundles]
        if missing:
            raise ValueError(f"Missing translation bundles: {', '.join(missing)}")
        self._bundles: Dict[str, Mapping[str, Any]] = dict(bundles)
        self._language = self._check_language(language)

    @staticmethod
    def _check_language(code: str) -> str:
        code = str(getattr(code, "value", code))
        if code not in SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language: {code!r}")
        return code

    @property
    def language(self) -> str:
        return self._language

    def change_language(self, code: str) -> None:
        """Switch the active bundle used by :meth:`t`."""

        checked = self._check_language(code)
        if checked != self._language:
            _LOGGER.debug("Translator language changed %s -> %s", self._language, checked)
        self._language = checked

    def t(self, key: str, default: Optional[str] = None, **values: Any) -> str:
        text = _lookup(self._bundles[self._language], key)
        if text is None and self._language != FALLBACK_LANGUAGE:
            text = _lookup(self._bundles[FALLBACK_LANGUAGE], key)
        if text is None:
            text = default if default is not None else key
        if values:
            text = _PLACEHOLDER_RE.sub(
                lambda match: str(values.get(match.group(1), match.group(0))),
                text,
            )
        return text


__all__ = [
    "FALLBACK_LANGUAGE",
    "RTL_LANGUAGES",
    "SUPPORTED_LANGUAGES",
    "Translator",
    "is_rtl",
    "load_bundle",
]
