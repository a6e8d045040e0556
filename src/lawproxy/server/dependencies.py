"""
Dependency injection for FastAPI.

Settings and the shared upstream client live on `app.state`; they are
created once by the application lifespan.
"""

from fastapi import Request

from ..config import Settings
from ..proxy import LawProxyService, UpstreamClient


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_upstream_client(request: Request) -> UpstreamClient:
    """Get the shared upstream client."""
    return request.app.state.upstream


def get_proxy_service(request: Request) -> LawProxyService:
    """
    Build the per-request proxy service.

    This is the main dependency for proxy endpoints. It holds no state of
    its own beyond references to the shared settings and client.
    """
    return LawProxyService(get_app_settings(request), get_upstream_client(request))
