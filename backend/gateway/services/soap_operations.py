"""SOAP Operations — argument records for the SOAP-backed routes.

Invariants:
    - Builders are pure: request + secret + target → UpstreamCall
    - SMS Priority/Sender/SourceRef are fixed literals, never taken from the caller
    - Secrets enter the argument record here and nowhere else
"""

from gateway.core.domain_types import ResponseShape, StaticSecret, UpstreamCall
from gateway.schemas.requests import CivilInfoRequest, SendSmsRequest

CIVIL_INFO_OPERATION = "GetByCivilIDFromROP"
SEND_SMS_OPERATION = "SendSMS"

SMS_PRIORITY = "2"
SMS_SENDER = "CPA"
SMS_SOURCE_REF = "value2"


def civil_info_call(
    request: CivilInfoRequest,
    secret: StaticSecret,
    wsdl_url: str,
    shape: ResponseShape = ResponseShape.RAW,
) -> UpstreamCall:
    return UpstreamCall(
        target=wsdl_url,
        operation=CIVIL_INFO_OPERATION,
        arguments={
            "ServicePassword": secret.value,
            "CivilID": str(request.civilId),
            "ExpiryDate": request.expiryDate,
        },
        shape=shape,
    )


def send_sms_call(
    request: SendSmsRequest, secret: StaticSecret, wsdl_url: str,
) -> UpstreamCall:
    # BulkPush takes MSISDNs as one comma-separated string
    return UpstreamCall(
        target=wsdl_url,
        operation=SEND_SMS_OPERATION,
        arguments={
            "UserName": secret.username,
            "Password": secret.value,
            "Message": request.message,
            "Priority": SMS_PRIORITY,
            "Sender": SMS_SENDER,
            "SourceRef": SMS_SOURCE_REF,
            "MSISDNs": ",".join(request.mobiles or []),
        },
        shape=ResponseShape.SERIALIZED,
    )
