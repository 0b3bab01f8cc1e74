"""MOCI Inspection API — login proxy and bearer pass-through lookups.

Invariants:
    - Lookup routes are generated from MOCI_LOOKUPS: one handler factory, no copies
    - The Authorization header is checked before the forwarder is touched (401, no call)
    - Upstream bodies are returned unmodified
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Header
from fastapi.responses import Response

from gateway.api.dependencies import get_credential_resolver, get_rest_forwarder
from gateway.api.responses import passthrough_response
from gateway.core.domain_types import RestLookup
from gateway.core.route_table import (
    API_PREFIX, LOGIN_SEGMENT, MOCI_LOGIN, MOCI_LOOKUPS, moci_lookup_route,
)
from gateway.services.credential_resolver import CredentialResolver
from gateway.services.rest_forwarder import RestForwarder

logger = logging.getLogger(__name__)
router = APIRouter(prefix=API_PREFIX, tags=["moci"])


@router.post(MOCI_LOGIN.path)
async def moci_login(
    body: Any = Body(default=None),
    forwarder: RestForwarder = Depends(get_rest_forwarder),
) -> Response:
    """Forward login credentials to MOCI."""
    forwarded = await forwarder.post_json(
        LOGIN_SEGMENT, body if body is not None else {},
    )
    return passthrough_response(forwarded)


def _lookup_endpoint(lookup: RestLookup):
    """Build the GET handler for one lookup."""

    async def endpoint(
        cr_number: str,
        authorization: str | None = Header(default=None),
        resolver: CredentialResolver = Depends(get_credential_resolver),
        forwarder: RestForwarder = Depends(get_rest_forwarder),
    ) -> Response:
        bearer = resolver.forwarded_bearer(authorization)
        forwarded = await forwarder.lookup(lookup, cr_number, bearer)
        return passthrough_response(forwarded)

    endpoint.__doc__ = f"Forward {lookup.segment} lookup with the caller's bearer token."
    return endpoint


for _name, _lookup in MOCI_LOOKUPS.items():
    router.add_api_route(
        moci_lookup_route(_name).path,
        _lookup_endpoint(_lookup),
        methods=["GET"],
        name=_name,
    )
