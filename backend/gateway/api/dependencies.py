"""Dependencies — FastAPI providers for settings-backed gateway components.

Invariants:
    - Components are built from the Settings object, never from os.environ
    - Each provider is overridable via app.dependency_overrides (tests stub upstreams)
"""

from fastapi import Depends

from gateway.config import Settings, get_settings
from gateway.infrastructure.soap_client import zeep_client_factory
from gateway.services.credential_resolver import CredentialResolver
from gateway.services.email_composer import EmailComposer
from gateway.services.rest_forwarder import RestForwarder
from gateway.services.soap_adapter import SoapAdapter


def get_credential_resolver(
    settings: Settings = Depends(get_settings),
) -> CredentialResolver:
    return CredentialResolver(settings)


def get_soap_adapter(settings: Settings = Depends(get_settings)) -> SoapAdapter:
    timeout = settings.upstream_timeout_seconds
    return SoapAdapter(zeep_client_factory(timeout), timeout)


def get_rest_forwarder(settings: Settings = Depends(get_settings)) -> RestForwarder:
    return RestForwarder(settings.moci_base_url, settings.upstream_timeout_seconds)


def get_email_composer(
    settings: Settings = Depends(get_settings),
    resolver: CredentialResolver = Depends(get_credential_resolver),
) -> EmailComposer:
    return EmailComposer(
        resolver,
        sender=settings.email_sender,
        graph_base_url=settings.graph_base_url,
        timeout_seconds=settings.upstream_timeout_seconds,
    )
