"""REST Forwarder — proxies requests to the downstream REST API.

Invariants:
    - One implementation for every lookup: routes supply segment + query parameter
    - The caller's bearer token is forwarded exactly as received
    - Upstream body returned unmodified; any 2xx maps to 200
    - Transport errors, timeouts and non-2xx statuses become UpstreamError (500)
    - Single attempt, bounded by the configured timeout
"""

import logging
import time
from dataclasses import dataclass
from typing import Any

import httpx

from gateway.core.domain_types import ForwardedBearer, RestLookup, UpstreamKind
from gateway.core.errors import UpstreamError

logger = logging.getLogger(__name__)

_JSON_HEADERS = {"Content-Type": "application/json"}


@dataclass(frozen=True)
class ForwardedResponse:
    """Upstream body and content type, passed through to the caller."""
    content: bytes
    media_type: str | None


class RestForwarder:
    """Forwards GET lookups and JSON posts to one base URL."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def lookup(
        self, lookup: RestLookup, value: str, bearer: ForwardedBearer,
    ) -> ForwardedResponse:
        """GET <base>/<segment>?<param>=<value> with the caller's bearer token."""
        headers = {**_JSON_HEADERS, "Authorization": bearer.header}
        return await self._send(
            "GET", lookup.segment,
            params={lookup.param: value}, headers=headers,
        )

    async def post_json(self, segment: str, body: Any) -> ForwardedResponse:
        """POST a JSON body to <base>/<segment> without credentials."""
        return await self._send("POST", segment, json=body, headers=_JSON_HEADERS)

    async def _send(self, method: str, segment: str, **kwargs) -> ForwardedResponse:
        url = f"{self.base_url}/{segment}"
        upstream = UpstreamKind.MOCI_REST.value
        started = time.monotonic()
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport,
            ) as client:
                response = await client.request(method, url, **kwargs)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(
                f"Forward to {segment} failed: {e}",
                extra={"upstream": upstream, "operation": segment},
            )
            raise UpstreamError.wrap(e, upstream, segment) from e

        logger.info(
            "Forward succeeded",
            extra={
                "upstream": upstream,
                "operation": segment,
                "status_code": response.status_code,
                "duration_ms": int((time.monotonic() - started) * 1000),
            },
        )
        return ForwardedResponse(
            response.content, response.headers.get("content-type"),
        )
