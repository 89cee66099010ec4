# =============================================================================
# core/services/effects.py - Presentation Side Effects
# =============================================================================
# Services never talk to the web framework directly. After a successful
# mutation they ask an ActionEffects implementation to:
# - revalidate_path(path): drop cached output for a route
# - redirect(path): send the user to a route once the action returns
#
# The FastAPI layer supplies RequestEffects (one per request). Tests supply
# their own recorder.
# =============================================================================

import logging
from typing import Protocol

from lib.route_cache import RouteCache

logger = logging.getLogger(__name__)


class ActionEffects(Protocol):
    """Capabilities a form action needs from the presentation layer."""

    def revalidate_path(self, path: str) -> None: ...

    def redirect(self, path: str) -> None: ...


class RequestEffects:
    """
    ActionEffects for a single HTTP request.

    Invalidation goes straight to the route cache. The redirect is recorded
    and turned into a 303 response by the router once the action returns.
    """

    def __init__(self, route_cache: RouteCache | None = None):
        self.route_cache = route_cache
        self.revalidated: list[str] = []
        self.location: str | None = None

    def revalidate_path(self, path: str) -> None:
        self.revalidated.append(path)
        if self.route_cache is not None:
            self.route_cache.revalidate_path(path)

    def redirect(self, path: str) -> None:
        logger.debug(f"Redirect requested to {path}")
        self.location = path
