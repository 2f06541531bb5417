"""Translation bundles and lookup."""

from .translator import RTL_LANGUAGES, SUPPORTED_LANGUAGES, Translator, is_rtl

__all__ = ["RTL_LANGUAGES", "SUPPORTED_LANGUAGES", "Translator", "is_rtl"]
