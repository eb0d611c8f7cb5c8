"""Route collection pipeline over markdown documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence

from docroutes.config import AppConfig
from docroutes.ingestion.markdown_loader import load_notebook
from docroutes.models import Notebook, RouteAnnotation
from docroutes.routes.enricher import EnrichContext, enrich_route
from docroutes.routes.issues import IssueCollector
from docroutes.utils.files import iter_markdown_paths

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class CollectStats:
    documents: int = 0
    cells: int = 0
    routes: int = 0
    issues: int = 0
    failed: int = 0
    processed_files: list[Path] = field(default_factory=list)
    collected: list[RouteAnnotation] = field(default_factory=list)


class RouteCollector:
    """Coordinates notebook loading, route enrichment and issue collection."""

    def __init__(
        self, *, sink: IssueCollector | None = None, config: AppConfig | None = None
    ) -> None:
        self.sink = sink if sink is not None else IssueCollector()
        self.config = config or AppConfig()

    def collect_notebook(self, notebook: Notebook) -> List[RouteAnnotation]:
        """Enrich every route-bearing cell and return the routes that validated."""
        context = EnrichContext(
            notebook=notebook,
            register_issue=self.sink.register_issue,
            path_delim=self.config.path_delim,
        )
        routes: List[RouteAnnotation] = []
        for cell in notebook.cells:
            route = enrich_route(cell, context)
            if route is not None:
                routes.append(route)
        return routes

    def collect(self, paths: Sequence[Path]) -> CollectStats:
        """Collect routes from all markdown documents found under ``paths``."""
        documents = list(iter_markdown_paths(paths, self.config.markdown_suffixes))
        stats = CollectStats()
        if not documents:
            LOGGER.warning("No markdown documents found")
            return stats

        issues_before = len(self.sink)
        for path in documents:
            try:
                LOGGER.info("Processing: %s", path)
                notebook = load_notebook(path, self.sink.register_issue)
            except (OSError, UnicodeDecodeError) as exc:
                LOGGER.error("Failed to read %s: %s", path, exc)
                stats.failed += 1
                stats.processed_files.append(path)
                continue

            routes = self.collect_notebook(notebook)
            stats.documents += 1
            stats.cells += len(notebook.cells)
            stats.routes += len(routes)
            stats.collected.extend(routes)
            stats.processed_files.append(path)

        stats.issues = len(self.sink) - issues_before
        return stats
