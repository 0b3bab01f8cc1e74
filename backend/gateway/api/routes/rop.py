"""ROP Civil Registry — civil information lookup over SOAP.

Invariants:
    - civilId then expiryDate are checked before the secret is resolved
    - Result shape (raw or xml_json) comes from settings, not from the caller
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from gateway.api.dependencies import get_credential_resolver, get_soap_adapter
from gateway.api.responses import soap_response
from gateway.config import Settings, get_settings
from gateway.core.route_table import API_PREFIX, FETCH_CIVIL_INFO
from gateway.core.validate_request import validate_required_fields
from gateway.schemas.requests import CivilInfoRequest
from gateway.services.credential_resolver import CredentialResolver
from gateway.services.soap_adapter import SoapAdapter
from gateway.services.soap_operations import civil_info_call

logger = logging.getLogger(__name__)
router = APIRouter(prefix=API_PREFIX, tags=["rop"])


@router.post(FETCH_CIVIL_INFO.path)
async def fetch_civil_info(
    body: CivilInfoRequest,
    settings: Settings = Depends(get_settings),
    resolver: CredentialResolver = Depends(get_credential_resolver),
    adapter: SoapAdapter = Depends(get_soap_adapter),
) -> Response:
    """Fetch civil information from ROP."""
    validate_required_fields(FETCH_CIVIL_INFO, body.model_dump())
    secret = resolver.static_secret(FETCH_CIVIL_INFO.upstream)
    call = civil_info_call(
        body, secret, settings.rop_wsdl_url, settings.rop_response_shape,
    )
    result = await adapter.call(call)
    return soap_response(result)
