"""Credential Resolver — supplies the auth artifact each upstream kind expects.

Invariants:
    - Static secrets come from the Settings object built once at startup
    - OAuth2 tokens are acquired per call: a new credential per exchange, nothing cached
    - Token-exchange failure (including timeout) is an UpstreamError for that request only
    - Forwarded bearer tokens must be "Bearer <token>"; anything else is an AuthError
      raised before any outbound call
    - Token values never appear in logs
"""

import asyncio
import logging
from collections.abc import Callable

from azure.core.credentials_async import AsyncTokenCredential
from azure.identity.aio import ClientSecretCredential

from gateway.config import Settings
from gateway.core.domain_types import (
    ForwardedBearer, OAuth2Token, StaticSecret, UpstreamKind,
)
from gateway.core.errors import AuthError, UpstreamError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

CredentialFactory = Callable[[str, str, str], AsyncTokenCredential]


def parse_bearer(authorization: str | None) -> ForwardedBearer:
    """Extract the token from an Authorization header value."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthError()
    token = authorization[len(BEARER_PREFIX):]
    if not token or any(c.isspace() for c in token):
        raise AuthError()
    return ForwardedBearer(token)


class CredentialResolver:
    """Resolves credentials per upstream kind from explicit settings."""

    def __init__(
        self,
        settings: Settings,
        credential_factory: CredentialFactory = ClientSecretCredential,
    ):
        self.settings = settings
        self.credential_factory = credential_factory

    def static_secret(self, kind: UpstreamKind) -> StaticSecret:
        """Service secret for a static-secret upstream."""
        if kind is UpstreamKind.ROP_SOAP:
            return StaticSecret(self.settings.rop_service_password)
        if kind is UpstreamKind.SMS_SOAP:
            return StaticSecret(
                self.settings.sms_password, username=self.settings.sms_username,
            )
        raise ValueError(f"{kind.value} does not use a static secret")

    async def oauth2_token(self) -> OAuth2Token:
        """Client-credentials exchange for the mail API scope."""
        s = self.settings
        upstream = UpstreamKind.MAIL_API.value
        credential = self.credential_factory(
            s.email_tenant_id, s.email_client_id, s.email_client_secret,
        )
        try:
            async with credential:
                access = await asyncio.wait_for(
                    credential.get_token(s.graph_scope),
                    timeout=s.upstream_timeout_seconds,
                )
        except Exception as e:
            logger.error(
                f"OAuth2 token exchange failed: {type(e).__name__}",
                extra={"upstream": upstream, "operation": "get_token"},
            )
            raise UpstreamError.wrap(e, upstream, "get_token") from e

        logger.info(
            "OAuth2 token acquired",
            extra={"upstream": upstream, "operation": "get_token"},
        )
        return OAuth2Token(access.token, access.expires_on)

    def forwarded_bearer(self, authorization: str | None) -> ForwardedBearer:
        """Caller's bearer token for pass-through upstreams."""
        return parse_bearer(authorization)
