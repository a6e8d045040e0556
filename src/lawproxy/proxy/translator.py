"""
Request Translator.

Maps a logical proxy operation (search or detail against one of the
three target collections) onto an upstream request descriptor.

Query values are passed through unencoded; the transport's query-string
encoder percent-encodes them exactly once.
"""

import logging
from typing import Optional

from ..config import ConfigurationError, Settings
from ..models import (
    CREDENTIAL_PARAM,
    TargetCollection,
    UpstreamEndpoint,
    UpstreamRequest,
)

logger = logging.getLogger(__name__)

# Response-type hint sent on every call
RESPONSE_TYPE = "JSON"


class RequestTranslator:
    """Builds UpstreamRequest descriptors from proxy parameters."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def _credential(self) -> str:
        # Read on every call so a replaced Settings object is honoured
        credential = self.settings.oc
        if not credential:
            raise ConfigurationError("OC credential is not configured")
        return credential

    def _headers(self) -> dict[str, str]:
        return {"User-Agent": self.settings.user_agent}

    def search(
        self,
        target: TargetCollection,
        query: Optional[str] = None,
        page: Optional[str] = None,
    ) -> UpstreamRequest:
        """
        Build a keyword search request.

        Args:
            target: Collection to search
            query: Free-text query, forwarded as-is (omitted when None)
            page: Page number, forwarded verbatim (omitted when None)
        """
        params: dict[str, str] = {
            "target": target.value,
            "display": str(self.settings.display_count),
        }
        if target == TargetCollection.PRECEDENT:
            params["org"] = self.settings.precedent_org_code
        if query is not None:
            params["query"] = query
        if page is not None:
            params["page"] = str(page)
        params[CREDENTIAL_PARAM] = self._credential()
        params["type"] = RESPONSE_TYPE

        request = UpstreamRequest(
            endpoint=UpstreamEndpoint.SEARCH,
            target=target,
            params=params,
            headers=self._headers(),
        )
        logger.debug(f"[TRANSLATE] search {target.value}: {request.masked_params()}")
        return request

    def detail(self, target: TargetCollection, identifier: str) -> UpstreamRequest:
        """Build a single-entity lookup; the identifier is not validated."""
        params: dict[str, str] = {
            "target": target.value,
            "ID": str(identifier),
            CREDENTIAL_PARAM: self._credential(),
            "type": RESPONSE_TYPE,
        }
        request = UpstreamRequest(
            endpoint=UpstreamEndpoint.DETAIL,
            target=target,
            params=params,
            headers=self._headers(),
        )
        logger.debug(f"[TRANSLATE] detail {target.value}: {request.masked_params()}")
        return request
