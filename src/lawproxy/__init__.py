"""
Law Proxy - Korean legal-information API proxy

A thin HTTP proxy in front of the National Law Information Center
open API (law.go.kr DRF). It injects the shared OC credential and
normalizes the upstream's inconsistent response shapes.

Packages:
    - models: Upstream request/response values and classified outcomes
    - proxy: Request translation, transport, response classification
    - server: FastAPI application and routes
"""

__version__ = "1.0.0"
__author__ = "Law Proxy"

from .models import (
    TargetCollection,
    UpstreamEndpoint,
    UpstreamRequest,
    RawText,
    Decoded,
    UpstreamResponse,
    Success,
    AuthFailure,
    AuthFailureReason,
    FormatFailure,
    TransportFailure,
    ClassifiedOutcome,
)

__all__ = [
    "TargetCollection",
    "UpstreamEndpoint",
    "UpstreamRequest",
    "RawText",
    "Decoded",
    "UpstreamResponse",
    "Success",
    "AuthFailure",
    "AuthFailureReason",
    "FormatFailure",
    "TransportFailure",
    "ClassifiedOutcome",
]
