"""Shared client-side resource cache."""

from .resource_cache import ResourceCache, retry_delay

__all__ = ["ResourceCache", "retry_delay"]
