"""
factor_graph/models/potentials.py

Table-backed potentials.

A TablePotential wraps a dense array with one axis per scope variable and
is called with one value index per axis.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from factor_graph.core.errors import UnknownVariable
from factor_graph.topology.graph import FactorGraph


class TablePotential:
    """
    Potential looked up from a dense table.

    Attributes:
        table: Array with one axis per scope variable
    """

    def __init__(self, table):
        self.table = np.asarray(table, dtype=np.float64)

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.table.shape

    def __call__(self, assignment: Sequence[int]) -> float:
        idx = tuple(int(a) for a in assignment)
        if len(idx) != self.table.ndim:
            raise ValueError(
                f"Assignment has {len(idx)} values, table has {self.table.ndim} axes"
            )
        return float(self.table[idx])

    def check_scope(self, graph: FactorGraph, scope: Sequence[str]) -> None:
        """
        Check the table shape against the domains of the scope variables.

        Raises:
            UnknownVariable: If a scope variable does not exist
            ValueError: If the shape does not match the cardinalities
        """
        expected = []
        for v in scope:
            var = graph.variable_by_name(v)
            if var is None:
                raise UnknownVariable(v)
            expected.append(var.cardinality)
        if tuple(expected) != self.shape:
            raise ValueError(
                f"factor over {list(scope)}: table shape {self.shape} != domains {tuple(expected)}"
            )

    def __repr__(self) -> str:
        return f"TablePotential(shape={self.shape})"
