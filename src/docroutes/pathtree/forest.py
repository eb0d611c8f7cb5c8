"""Hierarchical forest built from path-keyed records."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Collection, Dict, Generic, Iterable, Iterator, List, TypeVar

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True)
class ForestOptions(Generic[T]):
    """How records are placed into the forest.

    ``index_basenames`` lists record basenames that stand for their containing
    directory rather than a distinct child (``docs/index.sql`` is ``docs``).
    """

    node_path: Callable[[T], str]
    path_delim: str = "/"
    synthesize_containers: bool = True
    folder_first: bool = False
    index_basenames: Collection[str] = ()
    sibling_order: Callable[[T], float | None] | None = None


@dataclass(eq=False)
class TreeNode(Generic[T]):
    path: str
    basename: str
    segments: tuple[str, ...]
    virtual: bool = False
    payloads: List[T] | None = None
    children: List["TreeNode[T]"] = field(default_factory=list)
    parent: "TreeNode[T] | None" = field(default=None, repr=False)

    @property
    def depth(self) -> int:
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth


@dataclass(eq=False)
class Forest(Generic[T]):
    roots: List[TreeNode[T]]
    tree_by_path: Dict[str, TreeNode[T]]
    options: ForestOptions[T]
    _payload_nodes: Dict[int, TreeNode[T]] = field(default_factory=dict, repr=False)

    def walk(self) -> Iterator[TreeNode[T]]:
        """Yield every node depth-first, parents before their children."""
        stack = list(reversed(self.roots))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def node_of(self, payload: T) -> TreeNode[T] | None:
        return self._payload_nodes.get(id(payload))


def split_segments(path: str, delim: str) -> tuple[str, ...]:
    return tuple(seg for seg in path.split(delim) if seg and seg != ".")


def _node_key(segments: tuple[str, ...], absolute: bool, delim: str) -> str:
    if not segments:
        return delim
    joined = delim.join(segments)
    return delim + joined if absolute else joined


async def build_forest(records: Iterable[T], options: ForestOptions[T]) -> Forest[T]:
    """Place ``records`` into a forest keyed by normalized path."""
    delim = options.path_delim
    index_basenames = set(options.index_basenames)
    tree_by_path: Dict[str, TreeNode[T]] = {}
    payload_nodes: Dict[int, TreeNode[T]] = {}
    absolute_by_key: Dict[str, bool] = {}

    for record in records:
        raw_path = options.node_path(record)
        absolute = raw_path.startswith(delim)
        segments = split_segments(raw_path, delim)
        if segments and segments[-1] in index_basenames:
            segments = segments[:-1]
        key = _node_key(segments, absolute, delim)
        node = tree_by_path.get(key)
        if node is None:
            node = TreeNode(
                path=key, basename=segments[-1] if segments else "", segments=segments
            )
            tree_by_path[key] = node
            absolute_by_key[key] = absolute
        if node.payloads is None:
            node.payloads = []
        node.payloads.append(record)
        payload_nodes[id(record)] = node

    if options.synthesize_containers:
        for key, node in list(tree_by_path.items()):
            absolute = absolute_by_key[key]
            for size in range(1, len(node.segments)):
                prefix = node.segments[:size]
                prefix_key = _node_key(prefix, absolute, delim)
                if prefix_key not in tree_by_path:
                    tree_by_path[prefix_key] = TreeNode(
                        path=prefix_key, basename=prefix[-1], segments=prefix, virtual=True
                    )
                    absolute_by_key[prefix_key] = absolute

    roots: List[TreeNode[T]] = []
    for key, node in tree_by_path.items():
        if not node.segments:
            roots.append(node)
            continue
        parent = _nearest_ancestor(node, tree_by_path, absolute_by_key[key], delim)
        if parent is None:
            roots.append(node)
        else:
            node.parent = parent
            parent.children.append(node)

    _sort_siblings(roots, options)
    LOGGER.debug(
        "Built forest with %d nodes (%d synthesized) and %d roots",
        len(tree_by_path),
        sum(1 for node in tree_by_path.values() if node.virtual),
        len(roots),
    )
    return Forest(
        roots=roots,
        tree_by_path=tree_by_path,
        options=options,
        _payload_nodes=payload_nodes,
    )


def _nearest_ancestor(
    node: TreeNode[T],
    tree_by_path: Dict[str, TreeNode[T]],
    absolute: bool,
    delim: str,
) -> TreeNode[T] | None:
    for size in range(len(node.segments) - 1, -1, -1):
        candidate = tree_by_path.get(_node_key(node.segments[:size], absolute, delim))
        if candidate is not None and candidate is not node:
            return candidate
    return None


def _sort_siblings(nodes: List[TreeNode[T]], options: ForestOptions[T]) -> None:
    def order_of(node: TreeNode[T]) -> float:
        if options.sibling_order is None or not node.payloads:
            return math.inf
        value = options.sibling_order(node.payloads[0])
        return math.inf if value is None else value

    def sort_key(node: TreeNode[T]) -> tuple[bool, float, str]:
        leaf_last = options.folder_first and not node.children
        return (leaf_last, order_of(node), node.basename)

    nodes.sort(key=sort_key)
    for node in nodes:
        _sort_siblings(node.children, options)
