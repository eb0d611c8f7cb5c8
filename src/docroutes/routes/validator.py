"""Strict schema validation for route annotations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from docroutes.models import RouteAnnotation, ValidationIssue
from docroutes.utils.text import prettify_validation_error

ROUTE_SCHEMA_PARSE = "route-schema-parse"


@dataclass(frozen=True, slots=True)
class RouteValidation:
    """Either a validated route or the issue explaining why it is not one.

    The result is falsy when invalid::

        result = validate_route(candidate)
        if not result:
            register_issue(result.issue)
    """

    route: RouteAnnotation | None = None
    issue: ValidationIssue | None = None

    @property
    def is_valid(self) -> bool:
        return self.issue is None

    def __bool__(self) -> bool:
        return self.is_valid


def validate_route(candidate: Any) -> RouteValidation:
    """Check ``candidate`` against the route schema without raising.

    The returned issue has no provenance or line span; callers that know where
    the candidate came from attach it with ``ValidationIssue.located``.
    """
    try:
        route = RouteAnnotation.model_validate(candidate)
    except ValidationError as exc:
        return RouteValidation(
            issue=ValidationIssue(
                kind=ROUTE_SCHEMA_PARSE,
                disposition="error",
                error=exc,
                message=f"Schema error parsing route: {prettify_validation_error(exc)}",
            )
        )
    return RouteValidation(route=route)
