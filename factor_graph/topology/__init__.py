"""
Topology module: graph items, factor graph structure, and spanning trees.
"""

from factor_graph.topology.items import Variable, Factor, GraphItem, Potential
from factor_graph.topology.tree import TreeNode, SpanningTree, build_spanning_tree
from factor_graph.topology.graph import FactorGraph

__all__ = [
    "Variable",
    "Factor",
    "GraphItem",
    "Potential",
    "TreeNode",
    "SpanningTree",
    "build_spanning_tree",
    "FactorGraph",
]
