"""Domain Types — credential contexts, call descriptors and route shapes.

Invariants:
    - Credential contexts are frozen: built once, never mutated after resolution
    - UpstreamCall is constructed fresh per request and never shared
    - All valid upstream kinds and response shapes encoded as Enums

Design Decisions:
    - str Enums: values double as config strings and log fields
    - __repr__ of secret-bearing contexts hides the value so they are safe to log
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ─── Enums ───────────────────────────────────────────────────────

class UpstreamKind(str, Enum):
    """Upstream integration styles, one credential policy each."""
    ROP_SOAP = "rop_soap"
    SMS_SOAP = "sms_soap"
    MAIL_API = "mail_api"
    MOCI_REST = "moci_rest"


class ResponseShape(str, Enum):
    """How a SOAP result is handed back to the caller."""
    RAW = "raw"                 # <Operation>Result field, unmodified
    XML_JSON = "xml_json"       # <Operation>Result parsed from XML to a JSON tree
    SERIALIZED = "serialized"   # whole result record as plain JSON


# ─── Credential Contexts ─────────────────────────────────────────

@dataclass(frozen=True)
class StaticSecret:
    """Process-wide service secret loaded at startup."""
    value: str = field(repr=False)
    username: str | None = None


@dataclass(frozen=True)
class OAuth2Token:
    """Client-credentials access token, acquired per send."""
    value: str = field(repr=False)
    expires_on: int


@dataclass(frozen=True)
class ForwardedBearer:
    """Caller-supplied bearer token, valid for one request."""
    value: str = field(repr=False)

    @property
    def header(self) -> str:
        return f"Bearer {self.value}"


CredentialContext = StaticSecret | OAuth2Token | ForwardedBearer


# ─── Descriptors ─────────────────────────────────────────────────

@dataclass(frozen=True)
class RequiredField:
    """One required request field and the message reported when it is missing."""
    name: str
    message: str


@dataclass(frozen=True)
class RouteDefinition:
    """Declarative route contract: required fields are checked in order."""
    path: str
    method: str
    upstream: UpstreamKind
    required: tuple[RequiredField, ...] = ()


@dataclass(frozen=True)
class UpstreamCall:
    """One SOAP operation invocation."""
    target: str
    operation: str
    arguments: dict[str, Any] = field(repr=False)
    shape: ResponseShape = ResponseShape.RAW

    @property
    def result_field(self) -> str:
        return f"{self.operation}Result"


@dataclass(frozen=True)
class RestLookup:
    """Downstream REST lookup: path segment plus the query parameter it takes."""
    segment: str
    param: str
