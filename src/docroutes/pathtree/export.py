"""Flattened and serialized views of a forest."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Generic, List

from pydantic_core import to_jsonable_python

from docroutes.pathtree.forest import Forest, T, TreeNode


@dataclass(frozen=True, slots=True)
class Edge:
    parent: str
    child: str


def forest_to_edges(forest: Forest[Any]) -> List[Edge]:
    """Flatten the forest into parent/child path pairs, parents first."""
    return [
        Edge(parent=node.parent.path, child=node.path)
        for node in forest.walk()
        if node.parent is not None
    ]


class ForestSerializers(Generic[T]):
    """Alternate export formats for a forest."""

    def __init__(self, forest: Forest[T]) -> None:
        self.forest = forest

    def _node_dict(self, node: TreeNode[T]) -> Dict[str, Any]:
        return {
            "path": node.path,
            "basename": node.basename,
            "virtual": node.virtual,
            "payloads": to_jsonable_python(
                node.payloads or [], by_alias=True, exclude_none=True
            ),
            "children": [self._node_dict(child) for child in node.children],
        }

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [self._node_dict(root) for root in self.forest.roots]

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dicts(), indent=indent)

    def to_text(self) -> str:
        """Indented outline; containers end with the path delimiter."""
        delim = self.forest.options.path_delim
        lines: List[str] = []
        for node in self.forest.walk():
            label = node.basename or delim
            if node.children and label != delim:
                label += delim
            lines.append("  " * node.depth + label)
        return "\n".join(lines)


def serializers(forest: Forest[T]) -> ForestSerializers[T]:
    return ForestSerializers(forest)
