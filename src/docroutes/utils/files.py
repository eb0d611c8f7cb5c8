"""Utility helpers for working with files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator

MARKDOWN_SUFFIXES = (".md", ".markdown")


def iter_markdown_paths(
    inputs: Iterable[Path], suffixes: Iterable[str] = MARKDOWN_SUFFIXES
) -> Iterator[Path]:
    """Yield markdown paths from input paths, descending into directories."""
    wanted = {suffix.lower() for suffix in suffixes}
    for item in inputs:
        if item.is_dir():
            yield from iter_markdown_paths(
                sorted(child for child in item.rglob("*") if child.is_file()), wanted
            )
        elif item.is_file() and item.suffix.lower() in wanted:
            yield item
