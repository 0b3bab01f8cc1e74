"""Request Validation — per-route required-field presence checks.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - Fields are checked in the route's declared order, first violation wins
    - A field is missing when absent or falsy (None, 0, False, blank string,
      empty collection)
    - Runs before credential resolution, so a 400 never reaches an upstream
"""

from collections.abc import Mapping
from typing import Any

from gateway.core.domain_types import RequiredField, RouteDefinition
from gateway.core.errors import ErrorContext, ValidationError


def is_missing(value: Any) -> bool:
    """True for absent or falsy values, including blank strings and zero."""
    if isinstance(value, str):
        return not value.strip()
    return not value


def first_missing_field(
    route: RouteDefinition, body: Mapping[str, Any],
) -> RequiredField | None:
    """Return the first required field missing from body, or None when valid."""
    for required in route.required:
        if is_missing(body.get(required.name)):
            return required
    return None


def validate_required_fields(
    route: RouteDefinition, body: Mapping[str, Any],
) -> None:
    """Raise ValidationError naming the first missing required field."""
    missing = first_missing_field(route, body)
    if missing is not None:
        raise ValidationError(
            missing.message, missing.name, ErrorContext(route=route.path),
        )
