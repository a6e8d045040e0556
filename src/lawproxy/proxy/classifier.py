"""
Response Classifier.

Turns an upstream reply into exactly one ClassifiedOutcome.

The upstream answers HTTP 200 even when it rejects us, and signals the
rejection inconsistently:
- a plain-text/JSON-ish body containing a localized failure sentence
- an HTML page (typical of IP allowlist rejection)
- otherwise a JSON document, sometimes wrapped in a JSON string

Checks run in order and the first match wins:
1. failure sentence  -> AuthFailure (credential_rejected)
2. markup document   -> AuthFailure (possible_ip_restriction)
3. JSON decode       -> Success, else FormatFailure
Already-decoded bodies are always Success.

The markup check is a heuristic inferred from response shape only; keep
it behind this module so it can be refined without touching callers.
"""

import json
import logging

from ..config import Settings
from ..models import (
    AuthFailure,
    AuthFailureReason,
    ClassifiedOutcome,
    Decoded,
    FormatFailure,
    RawText,
    Success,
    TransportFailure,
    UpstreamResponse,
    excerpt,
    strip_bom,
)

logger = logging.getLogger(__name__)

# "User authentication failed" / "Page access failed"
AUTH_FAILURE_SENTENCES = (
    "사용자인증에 실패하였습니다",
    "페이지 접속에 실패하였습니다",
)

# Lowercased prefixes that mark an HTML document rather than data
MARKUP_PREFIXES = ("<!doctype html", "<html")


def contains_failure_sentence(text: str) -> bool:
    return any(sentence in text for sentence in AUTH_FAILURE_SENTENCES)


def looks_like_markup(text: str) -> bool:
    head = text.lstrip("\ufeff \t\r\n")[:32].lower()
    return head.startswith(MARKUP_PREFIXES)


class ResponseClassifier:
    """Classifies upstream replies and transport errors."""

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def credential_configured(self) -> bool:
        return self.settings.credential_configured

    def classify(self, response: UpstreamResponse) -> ClassifiedOutcome:
        """
        Classify an upstream reply.

        Args:
            response: The upstream reply

        Returns:
            Exactly one of Success, AuthFailure or FormatFailure
        """
        body = response.body

        if isinstance(body, Decoded):
            return Success(payload=body.value)

        if not isinstance(body, RawText):
            raise TypeError(f"Unsupported response body: {type(body).__name__}")

        text = body.text

        if contains_failure_sentence(text):
            logger.error("[CLASSIFY] Upstream rejected the credential")
            return AuthFailure(
                reason=AuthFailureReason.CREDENTIAL_REJECTED,
                credential_configured=self.credential_configured,
            )

        if looks_like_markup(text):
            logger.error(f"[CLASSIFY] Received HTML response: {excerpt(text)!r}")
            return AuthFailure(
                reason=AuthFailureReason.IP_RESTRICTED,
                credential_configured=self.credential_configured,
                excerpt=excerpt(text),
            )

        try:
            payload = json.loads(strip_bom(text))
        except ValueError as e:
            logger.error(f"[CLASSIFY] Upstream body is not JSON: {e}")
            return FormatFailure(
                reason=f"Upstream response is not valid JSON: {e}",
                excerpt=excerpt(text),
                credential_configured=self.credential_configured,
            )

        return Success(payload=payload)

    def classify_error(self, error: Exception) -> TransportFailure:
        """Classify an exception raised while calling the upstream."""
        return TransportFailure(
            error=str(error) or type(error).__name__,
            credential_configured=self.credential_configured,
            status_code=getattr(error, "status_code", None),
            excerpt=getattr(error, "excerpt", None),
            attempts=getattr(error, "attempts", 1),
        )
