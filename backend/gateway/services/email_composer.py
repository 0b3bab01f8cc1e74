"""Email Composer — maps a send-email request onto the mail API message schema.

Invariants:
    - compose() is pure: same request → same message record
    - Absent cc/bcc/attachments map to empty arrays
    - Sender is the fixed system address from settings, never caller-controlled
    - send() acquires a fresh OAuth2 token, then issues exactly one sendMail call
    - Token, transport and API failures all surface as UpstreamError (500)
    - API failures carry the mail API's own error.message when the body has one
"""

import logging
import time
from typing import Any

import httpx

from gateway.core.domain_types import UpstreamKind
from gateway.core.errors import ErrorContext, UpstreamError
from gateway.schemas.requests import Attachment, SendEmailRequest
from gateway.services.credential_resolver import CredentialResolver

logger = logging.getLogger(__name__)

FILE_ATTACHMENT_TYPE = "#microsoft.graph.fileAttachment"
SENT_STATUS = "Email was sent Successfully !"


def recipient_list(addresses: list[str]) -> list[dict]:
    return [{"emailAddress": {"address": address}} for address in addresses]


def file_attachment(attachment: Attachment) -> dict:
    record = {
        "@odata.type": FILE_ATTACHMENT_TYPE,
        "name": attachment.name,
        "contentBytes": attachment.contentBytes,
    }
    if attachment.contentType:
        record["contentType"] = attachment.contentType
    return record


def compose_message(request: SendEmailRequest) -> dict[str, Any]:
    """Build the mail API message record."""
    return {
        "subject": request.subject,
        "body": {
            "contentType": request.contentType,
            "content": request.content,
        },
        "toRecipients": recipient_list(request.recipients or []),
        "ccRecipients": recipient_list(request.cc or []),
        "bccRecipients": recipient_list(request.bcc or []),
        "attachments": [file_attachment(a) for a in request.attachments or []],
    }


class EmailComposer:
    """Sends composed messages as the system sender."""

    def __init__(
        self,
        resolver: CredentialResolver,
        sender: str,
        graph_base_url: str,
        timeout_seconds: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.resolver = resolver
        self.sender = sender
        self.graph_base_url = graph_base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @property
    def send_mail_url(self) -> str:
        return f"{self.graph_base_url}/users/{self.sender}/sendMail"

    async def send(self, request: SendEmailRequest) -> dict:
        """Compose, authorize and send one message."""
        message = compose_message(request)
        token = await self.resolver.oauth2_token()
        upstream = UpstreamKind.MAIL_API.value
        started = time.monotonic()
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport,
            ) as client:
                response = await client.post(
                    self.send_mail_url,
                    json={"message": message},
                    headers={"Authorization": f"Bearer {token.value}"},
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            detail = graph_error_message(e.response) or str(e)
            logger.error(
                f"sendMail failed: {detail}",
                extra={
                    "upstream": upstream,
                    "operation": "sendMail",
                    "status_code": e.response.status_code,
                },
            )
            raise UpstreamError(
                f"Error : {detail}", upstream,
                context=ErrorContext(operation="sendMail"),
            ) from e
        except httpx.HTTPError as e:
            logger.error(
                f"sendMail failed: {e}",
                extra={"upstream": upstream, "operation": "sendMail"},
            )
            raise UpstreamError.wrap(e, upstream, "sendMail") from e

        logger.info(
            "Email sent",
            extra={
                "upstream": upstream,
                "operation": "sendMail",
                "status_code": response.status_code,
                "duration_ms": int((time.monotonic() - started) * 1000),
            },
        )
        return {"status": SENT_STATUS}


def graph_error_message(response: httpx.Response) -> str | None:
    """error.message from a mail API error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return None
    error = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error, dict) or not error.get("message"):
        return None
    return str(error["message"])
