"""Root conftest — fake secrets plus SOAP and OAuth2 test doubles.

Invariants:
    - Required secrets are set before gateway.main is imported (it loads settings)
    - Fakes record every outbound call so tests can assert "never reached upstream"
"""

import inspect
import os
from contextlib import asynccontextmanager
from types import SimpleNamespace

import pytest
from azure.core.credentials import AccessToken

# Ensure tests never use real credentials
os.environ.setdefault("ROP_SERVICE_PASSWORD", "rop-test-password")
os.environ.setdefault("SMS_USERNAME", "sms-test-user")
os.environ.setdefault("SMS_PASSWORD", "sms-test-password")
os.environ.setdefault("EMAIL_TENANT_ID", "tenant-test")
os.environ.setdefault("EMAIL_CLIENT_ID", "client-test")
os.environ.setdefault("EMAIL_CLIENT_SECRET", "secret-test")
os.environ.setdefault("LOG_FORMAT", "text")


class FakeSoapService:
    """Stands in for zeep: records opened WSDLs and operation calls.

    results maps operation name → return value, exception, or callable(**args).
    Single-child responses are given as the bare value, the way zeep returns
    them; dicts stand for multi-field result records.
    """

    def __init__(self):
        self.opened: list[str] = []
        self.calls: list[dict] = []
        self.results: dict = {}
        self.construction_error: Exception | None = None
        self.closed = 0

    @asynccontextmanager
    async def factory(self, wsdl_url: str):
        self.opened.append(wsdl_url)
        if self.construction_error is not None:
            raise self.construction_error
        try:
            yield SimpleNamespace(service=_FakeServiceProxy(self))
        finally:
            self.closed += 1

    @property
    def invoked(self) -> bool:
        return bool(self.opened)


class _FakeServiceProxy:
    def __init__(self, fake: FakeSoapService):
        self._fake = fake

    def __getitem__(self, operation: str):
        async def invoke(**kwargs):
            self._fake.calls.append({"operation": operation, "args": kwargs})
            result = self._fake.results.get(operation)
            if isinstance(result, Exception):
                raise result
            if callable(result):
                result = result(**kwargs)
                if inspect.isawaitable(result):
                    result = await result
            return result
        return invoke


class FakeCredential:
    """Async token credential double; class attributes configure behavior."""

    instances: list["FakeCredential"] = []
    error: Exception | None = None
    token = "graph-access-token"

    def __init__(self, tenant_id: str, client_id: str, client_secret: str):
        self.tenant_id = tenant_id
        self.client_id = client_id
        self.client_secret = client_secret
        self.scopes: list[str] = []
        self.closed = False
        FakeCredential.instances.append(self)

    async def get_token(self, *scopes, **kwargs):
        self.scopes.extend(scopes)
        if FakeCredential.error is not None:
            raise FakeCredential.error
        return AccessToken(FakeCredential.token, 1_900_000_000)

    async def close(self):
        self.closed = True

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()


@pytest.fixture
def fake_soap():
    return FakeSoapService()


@pytest.fixture
def fake_credential():
    FakeCredential.instances = []
    FakeCredential.error = None
    FakeCredential.token = "graph-access-token"
    yield FakeCredential
    FakeCredential.instances = []
    FakeCredential.error = None
