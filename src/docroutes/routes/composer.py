"""Route tree population and breadcrumb composition."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List

from pydantic import TypeAdapter

from docroutes.config import AppConfig
from docroutes.models import RouteAnnotation
from docroutes.pathtree.export import Edge, ForestSerializers, forest_to_edges, serializers
from docroutes.pathtree.forest import Forest, TreeNode, build_forest
from docroutes.pathtree.navigation import ForestNavigation, navigation

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class Breadcrumbs:
    """Root-first ancestor routes keyed by each route's own path."""

    crumbs: Dict[str, List[RouteAnnotation]]
    schema: TypeAdapter[Any]

    def to_dict(self) -> Dict[str, Any]:
        return self.schema.dump_python(
            self.crumbs, mode="json", by_alias=True, exclude_none=True
        )

    def to_json(self, indent: int | None = None) -> str:
        return self.schema.dump_json(
            self.crumbs, indent=indent, by_alias=True, exclude_none=True
        ).decode()


@dataclass(slots=True)
class PopulatedRoutes:
    forest: Forest[RouteAnnotation]
    tree: List[TreeNode[RouteAnnotation]]
    breadcrumbs: Breadcrumbs
    serializers: ForestSerializers[RouteAnnotation]
    edges: List[Edge]


def compose_breadcrumbs(
    forest: Forest[RouteAnnotation], nav: ForestNavigation[RouteAnnotation]
) -> Breadcrumbs:
    """Compute the ancestor chain of every payload held by ``forest``.

    Each entry is computed independently, so node iteration order does not
    matter and repeated calls on the same forest give the same result.
    """
    crumbs: Dict[str, List[RouteAnnotation]] = {}
    for node in forest.tree_by_path.values():
        if node.payloads:
            for payload in node.payloads:
                crumbs[payload.path] = nav.ancestors(payload)
    return Breadcrumbs(crumbs=crumbs, schema=nav.schemas.breadcrumbs_map)


class Routes:
    """A closed collection of validated route annotations."""

    def __init__(
        self, route_anns: Iterable[RouteAnnotation], config: AppConfig | None = None
    ) -> None:
        self.route_anns = tuple(route_anns)
        self.config = config or AppConfig()
        for route in self.route_anns:
            if not isinstance(route, RouteAnnotation):
                raise TypeError(
                    f"Routes accepts validated RouteAnnotation records, got {type(route).__name__}"
                )

    async def populate(self) -> PopulatedRoutes:
        forest = await build_forest(self.route_anns, self.config.forest_options())
        nav = navigation(forest, RouteAnnotation)
        breadcrumbs = compose_breadcrumbs(forest, nav)
        LOGGER.info(
            "Populated %d routes into %d nodes", len(self.route_anns), len(forest.tree_by_path)
        )
        return PopulatedRoutes(
            forest=forest,
            tree=forest.roots,
            breadcrumbs=breadcrumbs,
            serializers=serializers(forest),
            edges=forest_to_edges(forest),
        )
