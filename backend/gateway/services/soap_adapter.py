"""SOAP Adapter — invokes a named WSDL operation and shapes its result.

Invariants:
    - One client per call; the operation is awaited exactly once (no retries)
    - Client construction, invocation and result shaping failures all become
      UpstreamError (HTTP 500) with the underlying message preserved
    - Every wait is bounded by the configured upstream timeout
    - The argument record is passed through as built by the caller
    - The serialized shape is always a record keyed by field name

Design Decisions:
    - Routes supply only an UpstreamCall (target, operation, arguments, shape);
      the adapter is shared by every SOAP-backed route
    - Client factory injected: tests open fake clients without a WSDL
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any
from xml.etree import ElementTree

from zeep.exceptions import Fault
from zeep.helpers import serialize_object

from gateway.core.domain_types import ResponseShape, UpstreamCall
from gateway.core.errors import UpstreamError
from gateway.core.xml_tree import xml_to_tree
from gateway.infrastructure.soap_client import SoapClientFactory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SoapResult:
    """Shaped SOAP result: JSON-ready payload or raw text."""
    payload: Any
    is_text: bool = False


class SoapAdapter:
    """Invokes SOAP operations through an injected client factory."""

    def __init__(self, client_factory: SoapClientFactory, timeout_seconds: float):
        self.client_factory = client_factory
        self.timeout_seconds = timeout_seconds

    async def call(self, call: UpstreamCall) -> SoapResult:
        """Invoke call.operation on call.target and shape the result."""
        started = time.monotonic()
        try:
            async with self.client_factory(call.target) as client:
                operation = client.service[call.operation]
                result = await asyncio.wait_for(
                    operation(**call.arguments), timeout=self.timeout_seconds,
                )
        except Fault as e:
            logger.warning(
                f"SOAP fault from {call.operation}: {e.message}",
                extra={"upstream": call.target, "operation": call.operation},
            )
            raise UpstreamError(
                f"Error : {e.message}", call.target,
            ) from e
        except Exception as e:
            logger.error(
                f"SOAP call {call.operation} failed: {e!r}",
                extra={"upstream": call.target, "operation": call.operation},
            )
            raise UpstreamError.wrap(e, call.target, call.operation) from e

        logger.info(
            "SOAP call succeeded",
            extra={
                "upstream": call.target,
                "operation": call.operation,
                "duration_ms": int((time.monotonic() - started) * 1000),
            },
        )
        return self.shape(call, result)

    def shape(self, call: UpstreamCall, result: Any) -> SoapResult:
        """Apply the call's response shape to a raw operation result."""
        plain = serialize_object(result, target_cls=dict)
        if call.shape is ResponseShape.SERIALIZED:
            return SoapResult(result_record(plain, call.result_field))

        field = extract_result_field(plain, call.result_field)
        if call.shape is ResponseShape.RAW:
            return SoapResult(field, is_text=isinstance(field, str))

        if not isinstance(field, str):
            raise UpstreamError(
                f"Error : {call.result_field} is not an XML document",
                call.target,
            )
        try:
            return SoapResult(xml_to_tree(field))
        except ElementTree.ParseError as e:
            logger.warning(
                f"Unparseable XML in {call.result_field}: {e}",
                extra={"upstream": call.target, "operation": call.operation},
            )
            raise UpstreamError.wrap(e, call.target, call.operation) from e


def extract_result_field(result: Any, field: str) -> Any:
    """Return result[field] for wrapped records, else the result itself."""
    if isinstance(result, dict) and field in result:
        return result[field]
    return result


def result_record(result: Any, field: str) -> dict:
    """Return result as a record, re-wrapping a single unwrapped result value.

    zeep unwraps responses whose body holds one child element, so
    SendSMSResponse/SendSMSResult arrives as the bare value.
    """
    if isinstance(result, dict):
        return result
    return {field: result}
