"""
Upstream request and response models.

This module defines the values exchanged with the law.go.kr DRF API:
- TargetCollection / UpstreamEndpoint: the upstream's fixed codes
- UpstreamRequest: a fully built outbound request descriptor
- RawText / Decoded: the two shapes an upstream body can arrive in
- UpstreamResponse: one upstream reply, produced once per call
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


# Query parameter carrying the shared credential
CREDENTIAL_PARAM = "OC"


class TargetCollection(str, Enum):
    """Upstream data domains and their `target` codes."""
    LAW = "law"              # statutes (법령)
    PRECEDENT = "prec"       # court decisions (판례)
    INTERPRETATION = "expc"  # administrative interpretations (법령해석례)


class UpstreamEndpoint(str, Enum):
    """Upstream endpoints, relative to the DRF base URL."""
    SEARCH = "lawSearch.do"
    DETAIL = "lawService.do"


@dataclass(frozen=True)
class UpstreamRequest:
    """Describes one outbound call to the upstream API."""
    endpoint: UpstreamEndpoint
    target: TargetCollection
    params: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)

    def masked_params(self) -> dict[str, str]:
        """Params safe to log: the credential value is replaced."""
        masked = dict(self.params)
        if CREDENTIAL_PARAM in masked:
            masked[CREDENTIAL_PARAM] = "***"
        return masked


def strip_bom(text: str) -> str:
    """Drop one leading UTF-8 byte order mark; json.loads rejects it."""
    return text[1:] if text.startswith("\ufeff") else text


@dataclass(frozen=True)
class RawText:
    """Body that still needs inspection and a JSON decoding attempt."""
    text: str


@dataclass(frozen=True)
class Decoded:
    """Body the transport already decoded into a structured value."""
    value: Any


ResponseBody = Union[RawText, Decoded]


@dataclass(frozen=True)
class UpstreamResponse:
    """A single upstream reply."""
    status_code: int
    body: ResponseBody
    headers: dict[str, str] = field(default_factory=dict)
