"""Markdown notebook loading.

Every fenced code block becomes a ``CodeCell``. The opening fence line carries
the cell metadata::

    ```sql docs/report.sql {"route": {"caption": "Report"}}

``sql`` is the language, ``docs/report.sql`` the info string and the trailing
JSON object the cell attributes.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Tuple

from docroutes.models import CodeCell, Notebook, ValidationIssue

LOGGER = logging.getLogger(__name__)

FENCE_ATTRS_JSON_PARSE = "fence-attrs-json-parse"

_FENCE_OPEN = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})(?P<meta>[^`]*)$")

IssueCallback = Callable[[ValidationIssue], None]


def split_fence_meta(meta: str) -> Tuple[str, str | None, str | None]:
    """Split fence metadata into language, info string and raw attributes."""
    meta = meta.strip()
    attrs_text = None
    brace = meta.find("{")
    if brace >= 0:
        attrs_text = meta[brace:].strip()
        meta = meta[:brace].strip()
    words = meta.split()
    language = words[0] if words else ""
    info = " ".join(words[1:]) or None
    return language, info, attrs_text


def _is_closing(line: str, fence: str) -> bool:
    stripped = line.strip()
    return (
        len(stripped) >= len(fence)
        and set(stripped) == {fence[0]}
        and len(line) - len(line.lstrip(" ")) <= 3
    )


def iter_fenced_blocks(lines: List[str]) -> Iterator[Tuple[str, str, int, int]]:
    """Yield ``(meta, body, start_line, end_line)`` for each fenced block.

    Line numbers are 1-based and point at the fences. An unterminated block
    runs to the end of the document.
    """
    index = 0
    while index < len(lines):
        match = _FENCE_OPEN.match(lines[index])
        if match is None:
            index += 1
            continue
        fence = match.group("fence")
        start = index
        body: List[str] = []
        index += 1
        while index < len(lines) and not _is_closing(lines[index], fence):
            body.append(lines[index])
            index += 1
        end = min(index, len(lines) - 1)
        yield match.group("meta"), "\n".join(body), start + 1, end + 1
        index += 1


def parse_attrs(
    attrs_text: str | None,
    *,
    provenance: str,
    start_line: int,
    end_line: int,
    register_issue: IssueCallback | None = None,
) -> Dict[str, Any] | None:
    """Decode the JSON object that ends a fence line; report and drop it when malformed."""
    if attrs_text is None:
        return None
    try:
        attrs = json.loads(attrs_text)
    except json.JSONDecodeError as exc:
        issue = ValidationIssue(
            kind=FENCE_ATTRS_JSON_PARSE,
            disposition="error",
            error=exc,
            message=f"Invalid cell attributes: {exc}",
            provenance=provenance,
            start_line=start_line,
            end_line=end_line,
        )
        if register_issue is None:
            LOGGER.warning("%s at %s:%s: %s", issue.kind, provenance, start_line, exc)
        else:
            register_issue(issue)
        return None
    return attrs


def parse_notebook(
    text: str, provenance: str, register_issue: IssueCallback | None = None
) -> Notebook:
    notebook = Notebook(provenance=provenance)
    for meta, body, start_line, end_line in iter_fenced_blocks(text.splitlines()):
        language, info, attrs_text = split_fence_meta(meta)
        notebook.cells.append(
            CodeCell(
                language=language,
                source=body,
                info=info,
                attrs=parse_attrs(
                    attrs_text,
                    provenance=provenance,
                    start_line=start_line,
                    end_line=end_line,
                    register_issue=register_issue,
                ),
                start_line=start_line,
                end_line=end_line,
            )
        )
    LOGGER.debug("Parsed %d cells from %s", len(notebook.cells), provenance)
    return notebook


def load_notebook(path: Path, register_issue: IssueCallback | None = None) -> Notebook:
    """Read and parse a markdown file; I/O errors propagate to the caller."""
    return parse_notebook(path.read_text(encoding="utf-8"), str(path), register_issue)
