"""Time-boxed caching of remote lookups."""

from .simple_cache import SimpleCache

__all__ = ["SimpleCache"]
