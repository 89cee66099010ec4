# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from app.config import settings
from core.services import AuthService, InvoiceService, RequestEffects
from lib.route_cache import RouteCache
from lib.supabase_client import SupabaseClient


def get_supabase_client() -> type[SupabaseClient]:
    """
    Get Supabase client wrapper.

    Returns the singleton client wrapper.
    """
    return SupabaseClient


@lru_cache
def get_route_cache() -> RouteCache:
    """Route cache shared by every request (Redis connects lazily)."""
    return RouteCache.from_url(
        settings.REDIS_URL,
        ttl_seconds=settings.ROUTE_CACHE_TTL_SECONDS,
    )


def get_request_effects(
    route_cache: Annotated[RouteCache, Depends(get_route_cache)],
) -> RequestEffects:
    """Fresh revalidate/redirect recorder for the current request."""
    return RequestEffects(route_cache)


def get_invoice_service(
    effects: Annotated[RequestEffects, Depends(get_request_effects)],
) -> InvoiceService:
    return InvoiceService(effects=effects)


def get_auth_service() -> AuthService:
    return AuthService()


async def read_form(request: Request) -> dict[str, str]:
    """
    Read a submitted form as plain strings.

    File parts are dropped; every field this API accepts is text.
    """
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


# Type aliases for dependency injection
SupabaseDep = Annotated[type[SupabaseClient], Depends(get_supabase_client)]
RouteCacheDep = Annotated[RouteCache, Depends(get_route_cache)]
InvoiceServiceDep = Annotated[InvoiceService, Depends(get_invoice_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
FormDep = Annotated[dict[str, str], Depends(read_form)]
