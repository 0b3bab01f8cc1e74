"""Route Table — declarative contracts for every gateway route.

Invariants:
    - Required fields are listed in the order they are checked
    - Messages are the exact text returned to callers on a 400
    - REST lookups differ only by path segment and query parameter name
"""

from gateway.core.domain_types import (
    RequiredField, RestLookup, RouteDefinition, UpstreamKind,
)

API_PREFIX = "/api/v1"


FETCH_CIVIL_INFO = RouteDefinition(
    path="/rop/fetch-civil-info",
    method="POST",
    upstream=UpstreamKind.ROP_SOAP,
    required=(
        RequiredField("civilId", "Invalid Civil Id"),
        RequiredField("expiryDate", "Invalid Expiry Date"),
    ),
)

SEND_SMS = RouteDefinition(
    path="/send-sms",
    method="POST",
    upstream=UpstreamKind.SMS_SOAP,
    required=(
        RequiredField("message", "Invalid Message"),
        RequiredField("mobiles", "Invalid Mobile Numbers"),
    ),
)

SEND_EMAIL = RouteDefinition(
    path="/send-email",
    method="POST",
    upstream=UpstreamKind.MAIL_API,
    required=(
        RequiredField("recipients", "Invalid recipients email addresses"),
        RequiredField("subject", "Invalid email subject"),
        RequiredField("content", "Invalid email content"),
    ),
)

MOCI_LOGIN = RouteDefinition(
    path="/moci/login", method="POST", upstream=UpstreamKind.MOCI_REST,
)

LOGIN_SEGMENT = "Login"


# ─── MOCI lookups (GET, bearer pass-through) ─────────────────────

MOCI_LOOKUPS: dict[str, RestLookup] = {
    "search-company": RestLookup("SearchCompany", "CRNumber"),
    "get-company-data": RestLookup("getCompanyData", "CRNumber"),
    "get-declared-activities": RestLookup("getDeclaredActivities", "CRNumber"),
    "get-places-of-activities": RestLookup("getPlacesOfActivities", "CRNumber"),
}


def moci_lookup_route(name: str) -> RouteDefinition:
    """Route contract for one MOCI lookup; the path parameter is always cr_number."""
    return RouteDefinition(
        path=f"/moci/{name}/{{cr_number}}",
        method="GET",
        upstream=UpstreamKind.MOCI_REST,
    )
