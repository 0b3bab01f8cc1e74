"""SOAP Client Factory — opens a zeep async client against a WSDL with bounded timeouts.

Invariants:
    - WSDL fetch + parse is bounded by the same timeout as the operation call
    - Transport (async and WSDL http clients) is closed on exit, success or failure
    - The WSDL http client is closed only once the loading thread has finished
    - Construction failures propagate unchanged; the adapter maps them to UpstreamError

Design Decisions:
    - zeep loads WSDLs synchronously, so construction runs in a worker thread
      (asyncio.to_thread) to keep the event loop free
    - A worker thread cannot be cancelled: on timeout the caller gets its error
      immediately and the WSDL client is closed when the thread returns
    - One client per call: nothing is shared across requests
    - Optional httpx transport for the operation client (tests use MockTransport)
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

import httpx
from zeep import AsyncClient
from zeep.transports import AsyncTransport

logger = logging.getLogger(__name__)

SoapClientFactory = Callable[[str], AbstractAsyncContextManager[AsyncClient]]


def zeep_client_factory(
    timeout_seconds: float,
    http_transport: httpx.AsyncBaseTransport | None = None,
) -> SoapClientFactory:
    """Build a factory that opens zeep clients with the given timeout."""

    @asynccontextmanager
    async def open_client(wsdl_url: str) -> AsyncIterator[AsyncClient]:
        operation_client = None
        if http_transport is not None:
            operation_client = httpx.AsyncClient(
                transport=http_transport, timeout=timeout_seconds,
            )
        transport = AsyncTransport(
            client=operation_client,
            timeout=timeout_seconds,
            operation_timeout=timeout_seconds,
        )
        loading = asyncio.ensure_future(
            asyncio.to_thread(AsyncClient, wsdl_url, transport=transport),
        )
        try:
            client = await asyncio.wait_for(
                asyncio.shield(loading), timeout=timeout_seconds,
            )
            logger.debug("SOAP client ready", extra={"upstream": wsdl_url})
            yield client
        finally:
            await transport.aclose()
            _close_wsdl_client_when_loaded(loading, transport, wsdl_url)

    return open_client


def _close_wsdl_client_when_loaded(
    loading: asyncio.Future, transport: AsyncTransport, wsdl_url: str,
) -> None:
    def close(done: asyncio.Future) -> None:
        if not done.cancelled() and done.exception() is not None:
            logger.debug(
                f"WSDL load failed: {done.exception()!r}",
                extra={"upstream": wsdl_url},
            )
        transport.wsdl_client.close()

    if loading.done():
        close(loading)
    else:
        loading.add_done_callback(close)
