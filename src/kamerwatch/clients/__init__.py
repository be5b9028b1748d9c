"""Access to the chamber website and the local source cache."""

from .cache import SourceCache
from .kamer import DocumentNotFoundError, KamerClient, KamerClientError

__all__ = ["DocumentNotFoundError", "KamerClient", "KamerClientError", "SourceCache"]
