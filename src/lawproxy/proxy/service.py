"""
Proxy service.

Composes translator, transport and classifier for one request:
translate -> send -> classify, plus outbound-address enrichment of
credential rejections.
"""

import dataclasses
import logging
from typing import Optional

from ..config import Settings
from ..models import (
    AuthFailure,
    ClassifiedOutcome,
    Success,
    TargetCollection,
    UpstreamRequest,
)
from .classifier import ResponseClassifier
from .translator import RequestTranslator
from .transport import UpstreamClient, UpstreamError

logger = logging.getLogger(__name__)


class LawProxyService:
    """Per-request entry point used by routes and the CLI."""

    def __init__(self, settings: Settings, client: UpstreamClient):
        self.settings = settings
        self.client = client
        self.translator = RequestTranslator(settings)
        self.classifier = ResponseClassifier(settings)

    async def search(
        self,
        target: TargetCollection,
        query: Optional[str] = None,
        page: Optional[str] = None,
    ) -> ClassifiedOutcome:
        logger.info(f"[PROXY] Searching {target.value} with query={query!r} page={page!r}")
        return await self._dispatch(self.translator.search(target, query=query, page=page))

    async def detail(self, target: TargetCollection, identifier: str) -> ClassifiedOutcome:
        logger.info(f"[PROXY] Getting {target.value} details with id={identifier!r}")
        return await self._dispatch(self.translator.detail(target, identifier))

    async def _dispatch(self, request: UpstreamRequest) -> ClassifiedOutcome:
        try:
            response = await self.client.send(request)
        except UpstreamError as e:
            logger.error(
                f"[PROXY] Upstream call failed: {e} "
                f"(OC {'present' if self.classifier.credential_configured else 'missing'})"
            )
            return self.classifier.classify_error(e)

        outcome = self.classifier.classify(response)

        if isinstance(outcome, AuthFailure):
            address = await self.client.outbound_address()
            if address:
                outcome = dataclasses.replace(outcome, outbound_address=address)
            logger.error(f"[PROXY] API authentication failed: {outcome.reason.value} (outbound address: {address or 'unknown'})")
        elif isinstance(outcome, Success):
            logger.info(f"[PROXY] ✓ {request.target.value}/{request.endpoint.value} relayed")

        return outcome
