import logging
from collections import OrderedDict
from typing import Any, Awaitable, Callable

from fastapi import Request

from app.config import settings

logger = logging.getLogger(__name__)


class ViewCache:
    """Rendered list/detail payloads keyed by request path (plus query string).

    Least recently used entries are evicted past ``max_entries``. ``generation``
    advances on every revalidation so a build that started before a write can
    tell its payload is stale.
    """

    def __init__(self, max_entries: int = 256) -> None:
        self.max_entries = max_entries
        self.generation = 0
        self._entries: OrderedDict[str, Any] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Any | None:
        value = self._entries.get(key)
        if value is not None:
            self._entries.move_to_end(key)
        return value

    def set(self, key: str, value: Any, generation: int | None = None) -> bool:
        if generation is not None and generation != self.generation:
            return False
        self._entries[key] = value
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
        return True

    def revalidate_path(self, path: str) -> int:
        """Drop ``path``, its query-string variants and every path nested under it."""
        self.generation += 1
        path = path.rstrip("/")
        stale = [
            key for key in self._entries
            if key == path or key.startswith(path + "?") or key.startswith(path + "/")
        ]
        for key in stale:
            del self._entries[key]
        if stale:
            logger.debug("Revalidated %s (%d cached views)", path, len(stale))
        return len(stale)

    def clear(self) -> None:
        self.generation += 1
        self._entries.clear()


view_cache = ViewCache(max_entries=settings.view_cache_size)


def revalidate_path(*paths: str) -> None:
    for path in paths:
        view_cache.revalidate_path(path)


def view_key(request: Request) -> str:
    path = request.url.path
    if path.startswith(settings.api_prefix):
        path = path[len(settings.api_prefix):]
    return f"{path}?{request.url.query}" if request.url.query else path


async def cached_view(request: Request, build: Callable[[], Awaitable[Any]]) -> Any:
    """Serve the cached payload for this request path, building it on a miss."""
    key = view_key(request)
    data = view_cache.get(key)
    if data is None:
        generation = view_cache.generation
        data = await build()
        # a write landed while building; serve it but don't keep it
        if not view_cache.set(key, data, generation):
            logger.debug("Skipped caching %s after concurrent revalidation", key)
    return data
