"""Route test fixtures — FastAPI test client with every upstream stubbed.

Invariants:
    - SOAP calls go to FakeSoapService, REST and mail calls to httpx.MockTransport
    - OAuth2 exchanges go to FakeCredential
    - upstream["rest"] / upstream["mail"] record every request that left the gateway
    - Handlers in upstream["rest_handler"] / upstream["mail_handler"] decide responses
"""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from gateway.api.dependencies import (
    get_credential_resolver, get_email_composer, get_rest_forwarder,
    get_soap_adapter,
)
from gateway.config import get_settings
from gateway.main import app
from gateway.services.credential_resolver import CredentialResolver
from gateway.services.email_composer import EmailComposer
from gateway.services.rest_forwarder import RestForwarder
from gateway.services.soap_adapter import SoapAdapter

MOCI_BASE = "https://moci.test/InspectionMobile"
GRAPH_BASE = "https://graph.test/v1.0"


@pytest.fixture
def upstream():
    """Recorded outbound HTTP requests and configurable responders."""
    state = {
        "rest": [],
        "mail": [],
        "rest_handler": lambda request: httpx.Response(200, json={"ok": True}),
        "mail_handler": lambda request: httpx.Response(202),
    }
    return state


@pytest.fixture
async def client(fake_soap, fake_credential, upstream):
    """FastAPI test client with upstream dependencies overridden."""
    settings = get_settings()
    resolver = CredentialResolver(settings, credential_factory=fake_credential)

    def rest_transport(request: httpx.Request) -> httpx.Response:
        upstream["rest"].append(request)
        return upstream["rest_handler"](request)

    def mail_transport(request: httpx.Request) -> httpx.Response:
        upstream["mail"].append(request)
        return upstream["mail_handler"](request)

    app.dependency_overrides[get_credential_resolver] = lambda: resolver
    app.dependency_overrides[get_soap_adapter] = lambda: SoapAdapter(
        fake_soap.factory, timeout_seconds=5,
    )
    app.dependency_overrides[get_rest_forwarder] = lambda: RestForwarder(
        MOCI_BASE, 5, transport=httpx.MockTransport(rest_transport),
    )
    app.dependency_overrides[get_email_composer] = lambda: EmailComposer(
        resolver,
        sender=settings.email_sender,
        graph_base_url=GRAPH_BASE,
        timeout_seconds=5,
        transport=httpx.MockTransport(mail_transport),
    )

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
