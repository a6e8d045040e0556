"""
Classified outcomes.

Every proxied request ends in exactly one of these values. They are
returned, not raised, and mapped to HTTP by a single function in the
server layer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


# Upper bound on any upstream text echoed back in diagnostics
EXCERPT_LIMIT = 200


def excerpt(text: str, limit: int = EXCERPT_LIMIT) -> str:
    """Return a prefix of `text` no longer than `limit` characters."""
    return text[:limit]


class AuthFailureReason(str, Enum):
    """Why the upstream is considered to have rejected us."""
    CREDENTIAL_REJECTED = "credential_rejected"
    IP_RESTRICTED = "possible_ip_restriction"


@dataclass(frozen=True)
class Success:
    """Upstream payload to relay unchanged."""
    payload: Any


@dataclass(frozen=True)
class AuthFailure:
    """
    Upstream refused the credential or the caller's address.

    The upstream answers HTTP 200 for these, so they are recognised from
    the body alone.
    """
    reason: AuthFailureReason
    credential_configured: bool
    excerpt: Optional[str] = None
    outbound_address: Optional[str] = None

    @property
    def message(self) -> str:
        if self.reason == AuthFailureReason.IP_RESTRICTED:
            return "Possible IP restriction: IP-based authentication may be required"
        return "Invalid OC key or API access denied"


@dataclass(frozen=True)
class FormatFailure:
    """Upstream returned text that is neither an error page nor JSON."""
    reason: str
    excerpt: str
    credential_configured: bool


@dataclass(frozen=True)
class TransportFailure:
    """The upstream call itself failed (network error or HTTP error status)."""
    error: str
    credential_configured: bool
    status_code: Optional[int] = None
    excerpt: Optional[str] = None
    attempts: int = 1


ClassifiedOutcome = Union[Success, AuthFailure, FormatFailure, TransportFailure]
