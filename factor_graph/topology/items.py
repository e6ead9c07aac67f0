"""
factor_graph/topology/items.py

Graph items: the two node kinds of a factor graph.

- Variable: an entity with a domain of admissible values
- Factor: an opaque potential defined over an ordered scope of variables

GraphItem is the closed union of the two. Code that needs uniform node
behavior matches on the concrete type.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Sequence, Tuple, Union

# Assignment (one value index per scope variable) -> score
Potential = Callable[[Sequence[int]], float]


@dataclass(frozen=True)
class Variable:
    """
    A variable node.

    Attributes:
        id: Graph-wide identifier
        name: Unique external handle
        domain: Admissible value labels
        incident_factor_ids: IDs of factors over this variable, in insertion order
            (appended to by the owning graph only)
    """
    id: int
    name: str
    domain: Tuple[Any, ...]
    incident_factor_ids: List[int] = field(default_factory=list)

    is_factor = False

    @property
    def cardinality(self) -> int:
        """Number of admissible values."""
        return len(self.domain)

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True)
class Factor:
    """
    A factor node.

    Attributes:
        id: Graph-wide identifier
        scope: Variable names the factor is defined over, in order
        potential: Scoring callable, stored but never evaluated here
    """
    id: int
    scope: Tuple[str, ...]
    potential: Potential = field(repr=False, compare=False)

    is_factor = True

    @property
    def name(self) -> str:
        return self.label

    @property
    def label(self) -> str:
        """Synthesized label, e.g. ``factor<[A, B]>``."""
        return "factor<[" + ", ".join(self.scope) + "]>"

    @property
    def arity(self) -> int:
        return len(self.scope)


GraphItem = Union[Variable, Factor]
