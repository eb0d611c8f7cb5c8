"""Ancestor lookups over a built forest."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, List

from pydantic import TypeAdapter

from docroutes.pathtree.forest import Forest, T, TreeNode


@dataclass(frozen=True, slots=True)
class NavigationSchemas:
    breadcrumbs_map: TypeAdapter[Any]


class ForestNavigation(Generic[T]):
    """Navigation primitives for the payloads held by ``forest``."""

    def __init__(self, forest: Forest[T], payload_type: Any = Any) -> None:
        self.forest = forest
        self.schemas = NavigationSchemas(
            breadcrumbs_map=TypeAdapter(Dict[str, List[payload_type]]),
        )

    def _node(self, payload: T) -> TreeNode[T]:
        node = self.forest.node_of(payload)
        if node is None:
            raise KeyError(f"Payload is not part of this forest: {payload!r}")
        return node

    def ancestors(self, payload: T) -> List[T]:
        """Return ancestor payloads root-first, excluding the payload's own node.

        Synthesized containers carry no payload and are skipped; an ancestor
        holding several payloads is represented by its first one.
        """
        chain: List[T] = []
        node = self._node(payload).parent
        while node is not None:
            if not node.virtual and node.payloads:
                chain.append(node.payloads[0])
            node = node.parent
        chain.reverse()
        return chain

    def children(self, payload: T) -> List[T]:
        """Return the first payload of each non-virtual child node, in sibling order."""
        return [
            child.payloads[0]
            for child in self._node(payload).children
            if not child.virtual and child.payloads
        ]


def navigation(forest: Forest[T], payload_type: Any = Any) -> ForestNavigation[T]:
    return ForestNavigation(forest, payload_type)
