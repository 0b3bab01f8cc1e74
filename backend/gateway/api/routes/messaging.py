"""Messaging — bulk SMS over SOAP and email over the OAuth2 mail API.

Invariants:
    - Required fields checked in declared order before any credential or upstream work
    - SMS result returned as the serialized SOAP result record
    - Email success returns a fixed confirmation status
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from gateway.api.dependencies import (
    get_credential_resolver, get_email_composer, get_soap_adapter,
)
from gateway.api.responses import soap_response
from gateway.config import Settings, get_settings
from gateway.core.route_table import API_PREFIX, SEND_EMAIL, SEND_SMS
from gateway.core.validate_request import validate_required_fields
from gateway.schemas.requests import SendEmailRequest, SendSmsRequest
from gateway.services.credential_resolver import CredentialResolver
from gateway.services.email_composer import EmailComposer
from gateway.services.soap_adapter import SoapAdapter
from gateway.services.soap_operations import send_sms_call

logger = logging.getLogger(__name__)
router = APIRouter(prefix=API_PREFIX, tags=["messaging"])


@router.post(SEND_SMS.path)
async def send_sms(
    body: SendSmsRequest,
    settings: Settings = Depends(get_settings),
    resolver: CredentialResolver = Depends(get_credential_resolver),
    adapter: SoapAdapter = Depends(get_soap_adapter),
) -> Response:
    """Send an SMS to one or more mobiles through BulkPush."""
    validate_required_fields(SEND_SMS, body.model_dump())
    secret = resolver.static_secret(SEND_SMS.upstream)
    result = await adapter.call(send_sms_call(body, secret, settings.sms_wsdl_url))
    logger.info(
        f"SMS pushed to {len(body.mobiles or [])} mobile(s)",
        extra={"route": SEND_SMS.path},
    )
    return soap_response(result)


@router.post(SEND_EMAIL.path)
async def send_email(
    body: SendEmailRequest,
    composer: EmailComposer = Depends(get_email_composer),
) -> dict:
    """Send an email as the system sender."""
    validate_required_fields(SEND_EMAIL, body.model_dump())
    return await composer.send(body)
