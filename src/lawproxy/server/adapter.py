"""
Outcome Adapter Layer.

The single place where a ClassifiedOutcome becomes an HTTP response:
- Success          -> 200, upstream payload as-is
- AuthFailure      -> 401
- FormatFailure    -> 500
- TransportFailure -> 500
"""

import logging

from fastapi.responses import JSONResponse

from ..models import (
    AuthFailure,
    ClassifiedOutcome,
    FormatFailure,
    Success,
    TransportFailure,
)
from .schemas import ErrorResponse

logger = logging.getLogger(__name__)

STATUS_BY_OUTCOME = {
    Success: 200,
    AuthFailure: 401,
    FormatFailure: 500,
    TransportFailure: 500,
}


def _oc_key(configured: bool) -> str:
    return "present" if configured else "missing"


def status_for(outcome: ClassifiedOutcome) -> int:
    """HTTP status for an outcome."""
    try:
        return STATUS_BY_OUTCOME[type(outcome)]
    except KeyError:
        raise TypeError(f"Unknown outcome type: {type(outcome).__name__}") from None


def build_error(outcome: ClassifiedOutcome) -> ErrorResponse:
    """Build the error envelope for a failure outcome."""
    if isinstance(outcome, AuthFailure):
        return ErrorResponse(
            error="API Authentication failed",
            message=outcome.message,
            oc_key=_oc_key(outcome.credential_configured),
            reason=outcome.reason.value,
            details=outcome.excerpt,
            outbound_address=outcome.outbound_address,
        )

    if isinstance(outcome, FormatFailure):
        return ErrorResponse(
            error="Invalid upstream response",
            message=outcome.reason,
            oc_key=_oc_key(outcome.credential_configured),
            reason="invalid_format",
            details=outcome.excerpt,
        )

    if isinstance(outcome, TransportFailure):
        return ErrorResponse(
            error="Internal server error",
            message=outcome.error,
            oc_key=_oc_key(outcome.credential_configured),
            reason="transport_error",
            details=outcome.excerpt,
            upstream_status=outcome.status_code,
            attempts=outcome.attempts,
        )

    raise TypeError(f"Not a failure outcome: {type(outcome).__name__}")


def to_response(outcome: ClassifiedOutcome) -> JSONResponse:
    """Map an outcome onto the HTTP response returned to the caller."""
    status_code = status_for(outcome)

    if isinstance(outcome, Success):
        return JSONResponse(status_code=status_code, content=outcome.payload)

    error = build_error(outcome)
    logger.info(f"[ADAPTER] {status_code} {error.error}: {error.reason}")
    return JSONResponse(
        status_code=status_code,
        content=error.model_dump(exclude_none=True),
    )
