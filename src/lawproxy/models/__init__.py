"""
Core data models for the proxy.

Exports:
    - Upstream request descriptors and raw responses
    - Classified outcomes (Success / AuthFailure / FormatFailure / TransportFailure)
"""

from .upstream import (
    TargetCollection,
    UpstreamEndpoint,
    UpstreamRequest,
    RawText,
    Decoded,
    ResponseBody,
    UpstreamResponse,
    CREDENTIAL_PARAM,
    strip_bom,
)
from .outcomes import (
    Success,
    AuthFailure,
    AuthFailureReason,
    FormatFailure,
    TransportFailure,
    ClassifiedOutcome,
    EXCERPT_LIMIT,
    excerpt,
)

__all__ = [
    "TargetCollection",
    "UpstreamEndpoint",
    "UpstreamRequest",
    "RawText",
    "Decoded",
    "ResponseBody",
    "UpstreamResponse",
    "CREDENTIAL_PARAM",
    "strip_bom",
    "Success",
    "AuthFailure",
    "AuthFailureReason",
    "FormatFailure",
    "TransportFailure",
    "ClassifiedOutcome",
    "EXCERPT_LIMIT",
    "excerpt",
]
