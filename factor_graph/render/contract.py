"""
factor_graph/render/contract.py

Render contract: the minimal node/edge enumeration an external renderer
needs, independent of how a graph or tree stores its nodes.
"""

from __future__ import annotations

from enum import Enum
from typing import FrozenSet, List, Protocol, Tuple, runtime_checkable


class Shape(Enum):
    """Node shape in a rendered graph."""
    CIRCLE = "circle"  # Variables
    BOX = "box"        # Factors


@runtime_checkable
class Renderable(Protocol):
    """
    Anything that can be drawn as a node/edge diagram.

    Implemented by FactorGraph (all items, variable -> factor edges) and
    SpanningTree (visited items, parent -> child edges).
    """

    def node_ids(self) -> FrozenSet[int]:
        ...

    def edges(self) -> List[Tuple[int, int]]:
        ...

    def label(self, nid: int) -> str:
        ...

    def shape(self, nid: int) -> Shape:
        ...
