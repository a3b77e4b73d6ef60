"""
In-process cache of rendered read responses, keyed by view path.

A view path is the page a response belongs to (`/plots`,
`/dashboard/contacts`, ...). One path can hold several variants, e.g. the
plot list for different search terms. Mutations invalidate whole paths;
invalidating a path that holds nothing is a no-op.
"""
import time
from typing import Any, Dict, Optional, Tuple

from plotdesk.core.config import settings
from plotdesk.core.logging_config import logger


class ViewCache:
    """TTL cache of view responses"""

    def __init__(self, ttl_seconds: Optional[int] = None):
        self.ttl_seconds = settings.VIEW_CACHE_TTL_SECONDS if ttl_seconds is None else ttl_seconds
        # path -> variant -> (expires_at, value)
        self._views: Dict[str, Dict[str, Tuple[float, Any]]] = {}

    def get(self, path: str, variant: str = "") -> Optional[Any]:
        entry = self._views.get(path, {}).get(variant)
        if entry is None:
            logger.debug(f"View cache MISS: {path} [{variant}]")
            return None

        expires_at, value = entry
        if expires_at < time.monotonic():
            del self._views[path][variant]
            logger.debug(f"View cache EXPIRED: {path} [{variant}]")
            return None

        logger.debug(f"View cache HIT: {path} [{variant}]")
        return value

    def set(self, path: str, value: Any, variant: str = "") -> None:
        if self.ttl_seconds <= 0:
            return
        self._views.setdefault(path, {})[variant] = (time.monotonic() + self.ttl_seconds, value)

    def invalidate(self, *paths: str, layout: bool = False) -> int:
        """
        Drop cached views for each path.

        With layout=True every view nested under the path goes too, the way
        a dashboard layout change touches all dashboard pages.
        """
        removed = 0
        for path in paths:
            targets = [path]
            if layout:
                prefix = path.rstrip("/") + "/"
                targets += [p for p in self._views if p.startswith(prefix)]
            for target in targets:
                variants = self._views.pop(target, None)
                if variants:
                    removed += len(variants)

        if removed:
            logger.debug(f"View cache invalidated {removed} entries for {', '.join(paths)}")
        return removed

    def clear(self) -> None:
        self._views.clear()

    def __len__(self) -> int:
        return sum(len(variants) for variants in self._views.values())


view_cache = ViewCache()
