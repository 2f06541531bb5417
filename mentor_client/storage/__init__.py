"""Local key/value persistence."""

from .persistence import FileStorage, MemoryStorage

__all__ = ["FileStorage", "MemoryStorage"]
