"""
Proxy pipeline: translation, transport, classification.
"""

from .translator import RequestTranslator
from .classifier import (
    ResponseClassifier,
    AUTH_FAILURE_SENTENCES,
    contains_failure_sentence,
    looks_like_markup,
)
from .transport import UpstreamClient, UpstreamError, build_async_client, shape_body
from .service import LawProxyService

__all__ = [
    "RequestTranslator",
    "ResponseClassifier",
    "AUTH_FAILURE_SENTENCES",
    "contains_failure_sentence",
    "looks_like_markup",
    "UpstreamClient",
    "UpstreamError",
    "build_async_client",
    "shape_body",
    "LawProxyService",
]
