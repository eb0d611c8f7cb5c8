"""Core docroutes data models."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field, JsonValue


class ChildRoute(BaseModel):
    """Reference to a child route, filled in by tree computation."""

    path: str = Field(description="Child path")


class RouteAnnotation(BaseModel):
    """Navigation route annotation, supports hierarchy and ordered siblings."""

    # wire names only; optional fields default to None, yet only elaboration accepts an explicit null
    model_config = ConfigDict(extra="forbid", strict=True)

    path: str = Field(
        frozen=True,
        description="Logical route path; the primary key within a namespace.",
    )
    path_basename: str = Field(
        default=None,
        alias="pathBasename",
        description="The path's basename without any directory path (usually computed from path)",
    )
    path_basename_no_extn: str = Field(
        default=None,
        alias="pathBasenameNoExtn",
        description="The path's basename without any directory path or extension (usually computed from path)",
    )
    path_dirname: str = Field(
        default=None,
        alias="pathDirname",
        description="The path's dirname without any name (usually computed from path)",
    )
    path_extn_terminal: str = Field(
        default=None,
        alias="pathExtnTerminal",
        description="The path's terminal (last) extension (usually computed from path)",
    )
    path_extns: List[str] = Field(
        default=None,
        alias="pathExtns",
        description="The path's full set of extensions if there are several (usually computed from path)",
    )
    caption: str = Field(description="Human-friendly general-purpose name for display.")
    sibling_order: float = Field(
        default=None,
        alias="siblingOrder",
        description="Optional number to order children within the same parent.",
    )
    url: str = Field(
        default=None,
        description="Optional external or alternate link target; defaults to `path` when omitted.",
    )
    title: str = Field(
        default=None,
        description="Full/long title for detailed contexts; defaults to `caption` when omitted.",
    )
    abbreviated_caption: str = Field(
        default=None,
        alias="abbreviatedCaption",
        description="Short label for breadcrumbs or compact UIs; defaults to `caption` when omitted.",
    )
    description: str = Field(
        default=None,
        description="Long-form explanation or summary of the route.",
    )
    elaboration: JsonValue = Field(
        default=None,
        description='Optional structured attributes (e.g. {"target": "_blank", "lang": {"fr": {"caption": "..."}}}).',
    )
    children: List[ChildRoute] = Field(
        default=None,
        description="Child paths filled out by path-tree computing.",
    )

    @property
    def effective_title(self) -> str:
        return self.title or self.caption

    @property
    def effective_abbreviated_caption(self) -> str:
        return self.abbreviated_caption or self.caption

    @property
    def effective_description(self) -> str:
        return self.description or self.caption

    @property
    def href(self) -> str:
        return self.url or self.path

    def to_record(self) -> Dict[str, Any]:
        """Dump using wire (camelCase) names, leaving out unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True)


@dataclass(frozen=True, slots=True)
class DerivedPathParts:
    """Structural parts of a route path; copied into a route, then discarded."""

    basename: str
    stem: str
    extensions: tuple[str, ...]
    terminal: str
    auto_materialized_path: str | Literal[False]


@dataclass(slots=True)
class ValidationIssue:
    """A non-fatal problem found while processing a document."""

    kind: str
    disposition: str
    error: Exception
    message: str
    provenance: str | None = None
    start_line: int | None = None
    end_line: int | None = None

    def located(
        self, provenance: str | None, start_line: int | None, end_line: int | None
    ) -> ValidationIssue:
        return replace(
            self, provenance=provenance, start_line=start_line, end_line=end_line
        )


@dataclass(slots=True)
class CodeCell:
    """Fenced code block of a notebook, with its fence metadata."""

    language: str
    source: str
    info: str | None = None
    attrs: Dict[str, Any] | None = None
    start_line: int = 0
    end_line: int = 0


@dataclass(slots=True)
class Notebook:
    """Parsed document and the code cells it contains."""

    provenance: str
    cells: List[CodeCell] = field(default_factory=list)
