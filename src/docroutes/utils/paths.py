"""Helpers for splitting logical route paths into their parts."""

from __future__ import annotations

from typing import Literal

from docroutes.models import DerivedPathParts

PATH_DELIM = "/"


def path_basename(path: str, delim: str = PATH_DELIM) -> str:
    """Return the final segment of ``path``, ignoring trailing delimiters."""
    return path.rstrip(delim).rpartition(delim)[2]


def path_dirname(path: str, delim: str = PATH_DELIM) -> str:
    """Return everything before the final segment of ``path``.

    Mirrors POSIX ``dirname``: a bare name lives in ``"."`` and the parent of a
    top-level segment is the delimiter itself.
    """
    if not path:
        return "."
    stripped = path.rstrip(delim)
    if not stripped:
        return delim
    head, sep, _ = stripped.rpartition(delim)
    if not sep:
        return "."
    return head.rstrip(delim) or delim


def path_join(directory: str, name: str, delim: str = PATH_DELIM) -> str:
    if directory in ("", "."):
        return name
    return directory.rstrip(delim) + delim + name


def derive_path_parts(path: str, delim: str = PATH_DELIM) -> DerivedPathParts:
    """Split ``path`` into basename, stem and extension chain.

    The chain keeps a leading dot on every extension except the last one,
    so ``report.sql.ts`` yields ``(".sql", "ts")`` with terminal ``"ts"``.

    A basename with at least two extensions (``<stem>.<intermediate>.<terminal>``)
    gets an auto-materialized sibling path ``<stem>.auto.<intermediate>``;
    otherwise the auto path is ``False``.
    """
    basename = path_basename(path, delim)
    parts = basename.split(".")
    stem = parts[0]
    raw_extensions = parts[1:]
    extensions = tuple(
        f".{ext}" if index < len(raw_extensions) - 1 else ext
        for index, ext in enumerate(raw_extensions)
    )
    terminal = extensions[-1] if extensions else ""

    auto_materialized_path: str | Literal[False] = False
    if len(extensions) >= 2:
        # parts come from a dot split, so the intermediate never holds a dot
        intermediate = parts[-2]
        auto_materialized_path = path_join(
            path_dirname(path, delim), f"{stem}.auto.{intermediate}", delim
        )

    return DerivedPathParts(
        basename=basename,
        stem=stem,
        extensions=extensions,
        terminal=terminal,
        auto_materialized_path=auto_materialized_path,
    )
