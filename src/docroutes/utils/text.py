"""Text helpers for turning validation failures into readable messages."""

from __future__ import annotations

from typing import Sequence

from pydantic import ValidationError


def format_location(loc: Sequence[str | int]) -> str:
    """Render a pydantic error location like ``children[0].path``."""
    rendered = ""
    for part in loc:
        if isinstance(part, int):
            rendered += f"[{part}]"
        else:
            rendered += f".{part}" if rendered else str(part)
    return rendered


def prettify_validation_error(error: ValidationError) -> str:
    """Render every error as a marker line followed by its location."""
    lines: list[str] = []
    for detail in error.errors(include_url=False):
        lines.append(f"✖ {detail['msg']}")
        location = format_location(detail.get("loc", ()))
        if location:
            lines.append(f"  → at {location}")
    return "\n".join(lines)

