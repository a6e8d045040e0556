"""
API route definitions for the Law Proxy server.

Search routes are declared before their `/{id}` siblings so that
`/api/<collection>/search` is never captured as an identifier.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..config import Settings
from ..models import TargetCollection
from ..proxy import LawProxyService
from .adapter import to_response
from .dependencies import get_app_settings, get_proxy_service
from .schemas import ErrorResponse, HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter()

Service = Annotated[LawProxyService, Depends(get_proxy_service)]

ERROR_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Upstream rejected the OC credential or caller IP"},
    500: {"model": ErrorResponse, "description": "Upstream unreachable or returned malformed content"},
}


# ============================================================================
# HEALTH
# ============================================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Liveness check; also reports whether the OC credential is configured.",
    tags=["Health"],
)
async def health_check(
    settings: Annotated[Settings, Depends(get_app_settings)]
) -> HealthResponse:
    """Check service health status."""
    return HealthResponse(
        status="ok",
        oc="set" if settings.credential_configured else "not set",
        version=settings.app_version,
    )


# ============================================================================
# LAW (법령)
# ============================================================================

@router.get(
    "/api/law/search",
    responses=ERROR_RESPONSES,
    summary="Search Statutes",
    tags=["Law"],
)
async def search_law(
    service: Service,
    query: Optional[str] = None,
    page: Optional[str] = None,
) -> JSONResponse:
    """Keyword search over statutes."""
    return to_response(await service.search(TargetCollection.LAW, query=query, page=page))


@router.get(
    "/api/law/{id}",
    responses=ERROR_RESPONSES,
    summary="Statute Detail",
    tags=["Law"],
)
async def get_law(id: str, service: Service) -> JSONResponse:
    """Fetch a single statute by its upstream ID."""
    return to_response(await service.detail(TargetCollection.LAW, id))


# ============================================================================
# PRECEDENT (판례)
# ============================================================================

@router.get(
    "/api/precedent/search",
    responses=ERROR_RESPONSES,
    summary="Search Court Decisions",
    tags=["Precedent"],
)
async def search_precedent(
    service: Service,
    query: Optional[str] = None,
    page: Optional[str] = None,
) -> JSONResponse:
    """Keyword search over court decisions (Supreme Court organization code)."""
    return to_response(await service.search(TargetCollection.PRECEDENT, query=query, page=page))


@router.get(
    "/api/precedent/{id}",
    responses=ERROR_RESPONSES,
    summary="Court Decision Detail",
    tags=["Precedent"],
)
async def get_precedent(id: str, service: Service) -> JSONResponse:
    return to_response(await service.detail(TargetCollection.PRECEDENT, id))


# ============================================================================
# INTERPRETATION (법령해석례)
# ============================================================================

@router.get(
    "/api/interpretation/search",
    responses=ERROR_RESPONSES,
    summary="Search Interpretations",
    tags=["Interpretation"],
)
async def search_interpretation(
    service: Service,
    query: Optional[str] = None,
    page: Optional[str] = None,
) -> JSONResponse:
    """Keyword search over administrative interpretations."""
    return to_response(await service.search(TargetCollection.INTERPRETATION, query=query, page=page))


@router.get(
    "/api/interpretation/{id}",
    responses=ERROR_RESPONSES,
    summary="Interpretation Detail",
    tags=["Interpretation"],
)
async def get_interpretation(id: str, service: Service) -> JSONResponse:
    return to_response(await service.detail(TargetCollection.INTERPRETATION, id))
