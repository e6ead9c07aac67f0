"""
factor_graph/topology/graph.py

Factor graph builder and read-only query surface.

A factor graph consists of:
- Variables with domains, keyed by unique name
- Factors with ordered scopes over existing variables

Every edge joins one variable and one factor. Factors are validated in
full before anything is committed, so a rejected insertion leaves the
graph untouched.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Tuple, Union

import networkx as nx

from factor_graph.core.errors import (
    DuplicateName,
    InternalInconsistency,
    InvalidScope,
    UnknownVariable,
)
from factor_graph.core.registry import NodeRegistry
from factor_graph.render.contract import Shape
from factor_graph.render.dot import DotOptions, render_dot
from factor_graph.topology.items import Factor, GraphItem, Potential, Variable
from factor_graph.topology.tree import SpanningTree, build_spanning_tree

logger = logging.getLogger(__name__)


class FactorGraph:
    """
    Bipartite graph of variables and factors.

    Maintains:
    - Variable name -> Variable
    - Factors in insertion order
    - ID registry covering both kinds
    """

    def __init__(self):
        self.registry = NodeRegistry()
        self._variables: Dict[str, Variable] = {}
        self._factors: List[Factor] = []

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_variable(self, name: str, domain: Sequence[Any]) -> int:
        """
        Add a variable with the given domain.

        Args:
            name: Unique variable name
            domain: Admissible value labels

        Returns:
            ID of the new variable

        Raises:
            DuplicateName: If a variable with this name exists
        """
        if name in self._variables:
            raise DuplicateName(name)

        vid = self.registry.allocate_id()
        var = Variable(id=vid, name=name, domain=tuple(domain))
        self._variables[name] = var
        self.registry.register(vid, var)
        logger.debug(f"Added variable {name!r} (id={vid}, |domain|={var.cardinality})")
        return vid

    def add_factor(self, scope: Sequence[str], potential: Potential) -> int:
        """
        Add a factor over the given scope.

        The scope is checked completely before any state changes.

        Args:
            scope: Ordered variable names
            potential: Scoring callable (stored, never evaluated)

        Returns:
            ID of the new factor

        Raises:
            InvalidScope: If the scope is a bare string, is empty, or repeats a name
            UnknownVariable: For the first scope name with no variable
        """
        if isinstance(scope, str):
            raise InvalidScope((scope,), "scope must be a sequence of names, not a single string")
        scope_t = tuple(scope)
        if not scope_t:
            raise InvalidScope(scope_t, "scope must name at least one variable")
        if len(set(scope_t)) != len(scope_t):
            raise InvalidScope(scope_t, "scope lists a variable more than once")
        members = []
        for v in scope_t:
            var = self._variables.get(v)
            if var is None:
                raise UnknownVariable(v)
            members.append(var)

        fid = self.registry.allocate_id()
        factor = Factor(id=fid, scope=scope_t, potential=potential)
        self._factors.append(factor)
        self.registry.register(fid, factor)
        for var in members:
            var.incident_factor_ids.append(fid)
        logger.debug(f"Added {factor.label} (id={fid})")
        return fid

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def variable_by_name(self, name: str) -> Optional[Variable]:
        """
        Get a variable by name, or None.

        The returned Variable is the live graph node. Its name and id are
        read-only; its incident_factor_ids belong to the graph and must not
        be edited by callers.
        """
        return self._variables.get(name)

    def item_by_id(self, nid: int) -> GraphItem:
        """Get a variable or factor by ID."""
        return self.registry.lookup_by_id(nid)

    def all_ids(self) -> range:
        """Get every allocated ID, in order."""
        return self.registry.ids()

    def neighbor_ids(self, item: Union[GraphItem, int]) -> Tuple[int, ...]:
        """
        Get the IDs adjacent to an item.

        Variables yield incident factors in insertion order; factors yield
        their scope variables in scope order.
        """
        if isinstance(item, int):
            item = self.item_by_id(item)
        if isinstance(item, Variable):
            return tuple(item.incident_factor_ids)
        if isinstance(item, Factor):
            out = []
            for v in item.scope:
                var = self._variables.get(v)
                if var is None:
                    raise InternalInconsistency(
                        f"Factor {item.id} references missing variable {v!r}"
                    )
                out.append(var.id)
            return tuple(out)
        raise TypeError(f"Not a graph item: {item!r}")

    @property
    def variables(self) -> List[Variable]:
        """All variables in ID order."""
        return sorted(self._variables.values(), key=lambda v: v.id)

    @property
    def factors(self) -> List[Factor]:
        """All factors in ID order."""
        return list(self._factors)

    @property
    def num_variables(self) -> int:
        return len(self._variables)

    @property
    def num_factors(self) -> int:
        return len(self._factors)

    def spanning_tree(self, root_name: str) -> SpanningTree:
        """Breadth-first spanning tree rooted at the named variable."""
        return build_spanning_tree(self, root_name)

    # ------------------------------------------------------------------
    # Render contract
    # ------------------------------------------------------------------

    def node_ids(self) -> FrozenSet[int]:
        return frozenset(self.all_ids())

    def edges(self) -> List[Tuple[int, int]]:
        """Variable -> factor edges, variables in ID order."""
        return [
            (var.id, fid)
            for var in self.variables
            for fid in var.incident_factor_ids
        ]

    def label(self, nid: int) -> str:
        return self.item_by_id(nid).label

    def shape(self, nid: int) -> Shape:
        return Shape.BOX if self.item_by_id(nid).is_factor else Shape.CIRCLE

    def render_dot(self, options: Optional[DotOptions] = None) -> str:
        """Render this graph as Graphviz DOT text."""
        return render_dot(self, options)

    def to_networkx(self) -> nx.Graph:
        """
        Export to an undirected NetworkX graph.

        Node attributes: label, shape, kind ("variable"/"factor"),
        bipartite (0 for variables, 1 for factors).
        """
        g = nx.Graph()
        for item in self.registry:
            g.add_node(
                item.id,
                label=item.label,
                shape=self.shape(item.id).value,
                kind="factor" if item.is_factor else "variable",
                bipartite=1 if item.is_factor else 0,
            )
        g.add_edges_from(self.edges())
        return g

    def __len__(self) -> int:
        return len(self.registry)

    def __contains__(self, name: object) -> bool:
        return name in self._variables

    def __repr__(self) -> str:
        return f"FactorGraph(vars={self.num_variables}, factors={self.num_factors})"
