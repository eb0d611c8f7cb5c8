"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass

from docroutes.models import RouteAnnotation
from docroutes.pathtree.forest import ForestOptions
from docroutes.utils.files import MARKDOWN_SUFFIXES
from docroutes.utils.paths import PATH_DELIM

DEFAULT_INDEX_BASENAMES = ("index.sql",)


def _route_path(route: RouteAnnotation) -> str:
    return route.path


def _route_sibling_order(route: RouteAnnotation) -> float | None:
    return route.sibling_order


@dataclass(slots=True)
class AppConfig:
    path_delim: str = PATH_DELIM
    index_basenames: tuple[str, ...] = DEFAULT_INDEX_BASENAMES
    synthesize_containers: bool = True
    folder_first: bool = False
    markdown_suffixes: tuple[str, ...] = MARKDOWN_SUFFIXES

    def __post_init__(self) -> None:
        if not self.path_delim:
            raise ValueError("path_delim must not be empty")
        self.index_basenames = tuple(self.index_basenames)
        self.markdown_suffixes = tuple(self.markdown_suffixes)

    def forest_options(self) -> ForestOptions[RouteAnnotation]:
        """Options for building a forest of route annotations."""
        return ForestOptions(
            node_path=_route_path,
            path_delim=self.path_delim,
            synthesize_containers=self.synthesize_containers,
            folder_first=self.folder_first,
            index_basenames=self.index_basenames,
            sibling_order=_route_sibling_order,
        )
