"""
factor_graph/topology/tree.py

Breadth-first spanning trees over a factor graph.

The walk alternates naturally between variables and factors, since every
edge of the graph joins one of each. A tree is a snapshot: it copies the
names and kinds it needs and does not follow later graph mutation.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Deque, Dict, FrozenSet, Iterator, List, Optional, Tuple

import networkx as nx

from factor_graph.core.errors import InternalInconsistency, UnknownRoot
from factor_graph.render.contract import Shape
from factor_graph.render.dot import DotOptions, render_dot

if TYPE_CHECKING:
    from factor_graph.topology.graph import FactorGraph

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class TreeNode:
    """
    A node of a spanning tree.

    Attributes:
        source_id: Graph ID this node stands for
        name: Variable name or factor label at build time
        is_factor: Kind of the underlying item
        index: Position in discovery order
        depth: Hops from the root
        parent: Parent node (None for the root)
        children: Child nodes in discovery order
    """
    source_id: int
    name: str
    is_factor: bool
    index: int
    depth: int = 0
    parent: Optional["TreeNode"] = field(default=None, repr=False)
    children: List["TreeNode"] = field(default_factory=list, repr=False)

    def add_child(self, node: "TreeNode") -> None:
        node.parent = self
        node.depth = self.depth + 1
        self.children.append(node)

    @property
    def is_root(self) -> bool:
        return self.parent is None


class SpanningTree:
    """
    Spanning tree of the component reachable from a root variable.

    Attributes:
        root: Root node
        nodes: All nodes in first-discovery order
    """

    def __init__(self, root: TreeNode):
        self.root = root
        self.nodes: List[TreeNode] = [root]
        self._by_source: Dict[int, TreeNode] = {root.source_id: root}

    def _attach(self, parent: TreeNode, source_id: int, name: str, is_factor: bool) -> TreeNode:
        node = TreeNode(source_id=source_id, name=name, is_factor=is_factor, index=len(self.nodes))
        parent.add_child(node)
        self.nodes.append(node)
        self._by_source[source_id] = node
        return node

    def node_for(self, source_id: int) -> TreeNode:
        """Get the tree node standing for a graph ID."""
        try:
            return self._by_source[source_id]
        except KeyError:
            raise InternalInconsistency(f"Id {source_id} is not part of this spanning tree") from None

    def source_ids(self) -> List[int]:
        """Graph IDs in discovery order."""
        return [n.source_id for n in self.nodes]

    def parent_of(self, source_id: int) -> Optional[int]:
        parent = self.node_for(source_id).parent
        return None if parent is None else parent.source_id

    def children_of(self, source_id: int) -> List[int]:
        return [c.source_id for c in self.node_for(source_id).children]

    def depth_of(self, source_id: int) -> int:
        return self.node_for(source_id).depth

    def preorder(self) -> List[int]:
        """Root-to-leaves order (parents before children)."""
        out: List[int] = []
        stack = [self.root]
        while stack:
            u = stack.pop()
            out.append(u.source_id)
            stack.extend(reversed(u.children))
        return out

    def postorder(self) -> List[int]:
        """Leaves-to-root order (children before parents)."""
        out: List[int] = []
        stack: List[Tuple[TreeNode, bool]] = [(self.root, False)]
        while stack:
            u, expanded = stack.pop()
            if expanded:
                out.append(u.source_id)
                continue
            stack.append((u, True))
            for c in reversed(u.children):
                stack.append((c, False))
        return out

    # Render contract

    def node_ids(self) -> FrozenSet[int]:
        return frozenset(self._by_source)

    def edges(self) -> List[Tuple[int, int]]:
        """Parent -> child edges in discovery order of the child."""
        return [(n.parent.source_id, n.source_id) for n in self.nodes if n.parent is not None]

    def label(self, nid: int) -> str:
        return self.node_for(nid).name

    def shape(self, nid: int) -> Shape:
        return Shape.BOX if self.node_for(nid).is_factor else Shape.CIRCLE

    def render_dot(self, options: Optional[DotOptions] = None) -> str:
        """Render this tree as Graphviz DOT text."""
        if options is None:
            options = DotOptions(graph_id="spanning_tree")
        return render_dot(self, options)

    def to_networkx(self) -> nx.DiGraph:
        """Export as a NetworkX digraph with parent -> child edges."""
        g = nx.DiGraph()
        for n in self.nodes:
            g.add_node(n.source_id, label=n.name, shape=self.shape(n.source_id).value, depth=n.depth)
        g.add_edges_from(self.edges())
        return g

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[TreeNode]:
        return iter(self.nodes)

    def __contains__(self, source_id: object) -> bool:
        return source_id in self._by_source

    def __repr__(self) -> str:
        return f"SpanningTree(root={self.root.name!r}, nodes={len(self.nodes)})"


def build_spanning_tree(graph: "FactorGraph", root_name: str) -> SpanningTree:
    """
    Build a breadth-first spanning tree rooted at a variable.

    Neighbors are expanded in their natural order (incident factors in
    insertion order, scope variables in scope order), so the first node
    to reach an unvisited neighbor becomes its parent.

    Args:
        graph: Factor graph to walk
        root_name: Name of the root variable

    Returns:
        SpanningTree covering every ID reachable from the root

    Raises:
        UnknownRoot: If no variable has this name
        InternalInconsistency: If a neighbor ID has no registered item
    """
    root_var = graph.variable_by_name(root_name)
    if root_var is None:
        raise UnknownRoot(root_name)

    tree = SpanningTree(TreeNode(source_id=root_var.id, name=root_var.name, is_factor=False, index=0))
    visited = {root_var.id}
    queue: Deque[TreeNode] = deque([tree.root])

    while queue:
        u = queue.popleft()
        item = graph.item_by_id(u.source_id)
        for nid in graph.neighbor_ids(item):
            if nid in visited:
                continue
            nb = graph.item_by_id(nid)
            visited.add(nid)
            queue.append(tree._attach(u, nid, nb.label, nb.is_factor))

    logger.debug(f"Spanning tree from {root_name!r}: {len(tree)} of {len(graph)} nodes reached")
    return tree
