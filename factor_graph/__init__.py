"""
factor_graph: probabilistic factor graphs

Incremental construction of bipartite variable/factor graphs, breadth-first
spanning trees rooted at any variable, and Graphviz DOT export.

Key components:
- core: ID registry and error types
- topology: Variables, factors, the factor graph, and spanning trees
- render: Render contract and DOT output
- models: Table potentials and an Ising grid generator
"""

__version__ = "1.0.0"
__author__ = "factor_graph contributors"

from factor_graph.core.errors import (
    FactorGraphError,
    DuplicateName,
    InvalidScope,
    UnknownVariable,
    UnknownRoot,
    InternalInconsistency,
)
from factor_graph.core.registry import NodeRegistry
from factor_graph.topology.items import Variable, Factor, GraphItem, Potential
from factor_graph.topology.graph import FactorGraph
from factor_graph.topology.tree import TreeNode, SpanningTree, build_spanning_tree
from factor_graph.render.contract import Shape, Renderable
from factor_graph.render.dot import DotOptions, render_dot, write_dot
from factor_graph.models.potentials import TablePotential
from factor_graph.models.ising import build_ising_grid

__all__ = [
    # Errors
    "FactorGraphError",
    "DuplicateName",
    "InvalidScope",
    "UnknownVariable",
    "UnknownRoot",
    "InternalInconsistency",
    # Graph
    "NodeRegistry",
    "Variable",
    "Factor",
    "GraphItem",
    "Potential",
    "FactorGraph",
    # Trees
    "TreeNode",
    "SpanningTree",
    "build_spanning_tree",
    # Rendering
    "Shape",
    "Renderable",
    "DotOptions",
    "render_dot",
    "write_dot",
    # Models
    "TablePotential",
    "build_ising_grid",
]
