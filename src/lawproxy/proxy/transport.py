"""
Upstream transport.

Wraps `httpx.AsyncClient` for calls to the DRF API:
- bounded timeout, browser-like User-Agent
- one bounded retry on network-level errors only
- shapes each body into RawText or Decoded for the classifier
"""

import json
import logging
from typing import Optional

import httpx

from ..config import Settings
from ..models import (
    Decoded,
    RawText,
    ResponseBody,
    strip_bom,
    UpstreamRequest,
    UpstreamResponse,
    excerpt,
)

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """The upstream call failed before a usable reply was received."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        excerpt: Optional[str] = None,
        attempts: int = 1,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.excerpt = excerpt
        self.attempts = attempts


def build_async_client(
    settings: Settings,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Create the shared `httpx.AsyncClient` for upstream calls."""
    return httpx.AsyncClient(
        base_url=settings.upstream_base_url.rstrip("/") + "/",
        timeout=httpx.Timeout(settings.upstream_timeout_seconds),
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
        transport=transport,
    )


def shape_body(response: httpx.Response) -> ResponseBody:
    """
    Decide whether a reply body is already structured.

    JSON content is decoded here. A decoded value that is itself a string
    is JSON text wrapped in a JSON string and goes back as RawText for a
    second decoding pass. Everything else is RawText.
    """
    content_type = response.headers.get("content-type", "").lower()
    text = response.text

    if "json" not in content_type:
        return RawText(text)

    try:
        value = json.loads(strip_bom(text))
    except ValueError:
        return RawText(text)

    if isinstance(value, str):
        return RawText(value)
    return Decoded(value)


class UpstreamClient:
    """Executes UpstreamRequest descriptors against the DRF API."""

    def __init__(
        self,
        settings: Settings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings
        self._client = client or build_async_client(settings, transport=transport)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def send(self, request: UpstreamRequest) -> UpstreamResponse:
        """
        Execute one upstream call.

        Network-level errors are retried `upstream_max_retries` times.
        Other request errors (redirect loops, bad content encoding) and
        HTTP error statuses are not retried.

        Raises:
            UpstreamError: on any request failure or a non-2xx status
        """
        max_attempts = self.settings.upstream_max_retries + 1
        attempt = 0

        while True:
            attempt += 1
            try:
                logger.info(
                    f"[UPSTREAM] GET {request.endpoint.value} "
                    f"(attempt {attempt}/{max_attempts}) params={request.masked_params()}"
                )
                response = await self._client.get(
                    request.endpoint.value,
                    params=request.params,
                    headers=request.headers,
                )
                break
            except httpx.TransportError as e:
                logger.warning(f"[UPSTREAM] Transport error on attempt {attempt}: {e!r}")
                if attempt >= max_attempts:
                    raise UpstreamError(
                        f"{type(e).__name__}: {e}" if str(e) else type(e).__name__,
                        attempts=attempt,
                    ) from e
            except httpx.RequestError as e:
                # Redirect loops and undecodable bodies are not retried
                logger.error(f"[UPSTREAM] Request error on attempt {attempt}: {e!r}")
                raise UpstreamError(
                    f"{type(e).__name__}: {e}" if str(e) else type(e).__name__,
                    attempts=attempt,
                ) from e

        if response.is_error:
            logger.error(f"[UPSTREAM] HTTP {response.status_code} from {request.endpoint.value}")
            raise UpstreamError(
                f"Request failed with status code {response.status_code}",
                status_code=response.status_code,
                excerpt=excerpt(response.text),
                attempts=attempt,
            )

        return UpstreamResponse(
            status_code=response.status_code,
            body=shape_body(response),
            headers=dict(response.headers),
        )

    async def outbound_address(self) -> Optional[str]:
        """Ask the configured echo service for our public IP; None if unknown."""
        url = self.settings.outbound_ip_echo_url
        if not url:
            return None
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"[UPSTREAM] Could not determine outbound address: {e!r}")
            return None
        return excerpt(response.text.strip()) or None
