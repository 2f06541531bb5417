"""Side-effecting sinks for the rendering surface."""

from .document import DocumentEnvironment
from .navigation import Navigator

__all__ = ["DocumentEnvironment", "Navigator"]
