"""Per-cell route enrichment: default, derive, validate, report."""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any, Callable

from docroutes.models import CodeCell, Notebook, RouteAnnotation, ValidationIssue
from docroutes.routes.validator import validate_route
from docroutes.utils.paths import PATH_DELIM, derive_path_parts, path_dirname

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class EnrichContext:
    notebook: Notebook
    register_issue: Callable[[ValidationIssue], None]
    path_delim: str = PATH_DELIM


def route_of(cell: Any) -> MutableMapping[str, Any] | None:
    """Return the cell's route record, or ``None`` when it declares none.

    A cell offers a route only when its ``attrs`` mapping holds a mutable
    mapping under ``"route"``.
    """
    attrs = getattr(cell, "attrs", None)
    if not isinstance(attrs, Mapping):
        return None
    route = attrs.get("route")
    if not isinstance(route, MutableMapping):
        return None
    return route


def enrich_route(cell: CodeCell, context: EnrichContext) -> RouteAnnotation | None:
    """Enrich the route declared by ``cell`` in place.

    Derived ``path*`` fields are always recomputed from ``path``; whatever the
    author supplied for them is overwritten. Schema problems are reported to
    ``context.register_issue`` once and never raised. Returns the validated
    route, or ``None`` when the cell declares no route or validation failed.
    """
    route = route_of(cell)
    if route is None:
        return None

    if not route.get("path") and cell.info:
        route["path"] = cell.info

    path = route.get("path")
    if not isinstance(path, str):
        path = ""
    parts = derive_path_parts(path, context.path_delim)
    route["pathBasename"] = parts.basename
    route["pathBasenameNoExtn"] = parts.stem
    route["pathDirname"] = path_dirname(path, context.path_delim)
    route["pathExtnTerminal"] = parts.terminal
    route["pathExtns"] = list(parts.extensions)

    result = validate_route(dict(route))
    if not result:
        context.register_issue(
            result.issue.located(
                context.notebook.provenance, cell.start_line, cell.end_line
            )
        )
        return None

    LOGGER.debug("Enriched route %s from %s", path, context.notebook.provenance)
    return result.route
