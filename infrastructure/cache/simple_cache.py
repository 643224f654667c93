"""
Simple get-or-add cache on top of Django's cache framework.

Entries expire after their timeout and are never invalidated on write: a
value changed upstream is served stale until its entry expires. Callers
that cache remote records accept that window explicitly.
"""

import logging
from typing import Callable, Optional, TypeVar

from django.core.cache import BaseCache, caches

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SimpleCache:
    """Read-through cache keyed by string with a per-call timeout in seconds."""

    def __init__(self, backend: Optional[BaseCache] = None, alias: str = "default"):
        self.backend = backend or caches[alias]

    def get_or_add(self, key: str, timeout: int, factory: Callable[[], T]) -> T:
        """
        Return the cached value for ``key`` or compute and store it.

        Exceptions raised by ``factory`` propagate and nothing is stored, so a
        failed lookup is retried on the next call instead of being cached.
        """
        cached = self.backend.get(key)
        if cached is not None:
            logger.debug(f"[CACHE] hit {key}")
            return cached

        logger.debug(f"[CACHE] miss {key}")
        value = factory()
        if value is not None:
            self.backend.set(key, value, timeout)
        return value

    def delete(self, key: str) -> None:
        self.backend.delete(key)
