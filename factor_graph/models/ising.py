"""
factor_graph/models/ising.py

Ising-model generator on a rectangular grid.

  X0_0 -- X0_1 -- X0_2
   |       |       |
  X1_0 -- X1_1 -- X1_2

Each site is a spin variable; each grid edge carries a pairwise coupling
factor, and a non-zero external field adds one unary factor per site.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from factor_graph.models.potentials import TablePotential
from factor_graph.topology.graph import FactorGraph

logger = logging.getLogger(__name__)


def site_name(i: int, j: int) -> str:
    """Variable name of grid site (i, j)."""
    return f"X{i}_{j}"


def ising_potential(J: float = 1.0, spins: Sequence[float] = (-1, 1)) -> np.ndarray:
    """Create Ising pairwise potential exp(J * s_a * s_b)."""
    s = np.asarray(spins, dtype=np.float64)
    return np.exp(J * np.outer(s, s))


def field_potential(h: float, spins: Sequence[float] = (-1, 1)) -> np.ndarray:
    """Create unary field potential exp(h * s)."""
    return np.exp(h * np.asarray(spins, dtype=np.float64))


def build_ising_grid(
    rows: int,
    cols: int,
    *,
    coupling: float = 1.0,
    field: float = 0.0,
    spins: Sequence[float] = (-1, 1),
    periodic: bool = False,
) -> FactorGraph:
    """
    Build a rows x cols Ising grid.

    Variables are added row by row, then horizontal couplings row by row,
    then vertical couplings, then (if field != 0) unary field factors.

    Args:
        rows: Number of grid rows
        cols: Number of grid columns
        coupling: Pairwise coupling strength J
        field: External field strength h
        spins: Spin value of each domain index
        periodic: Wrap edges around (only along dimensions longer than 2)

    Returns:
        FactorGraph of the model
    """
    if rows < 1 or cols < 1:
        raise ValueError(f"Grid must be at least 1x1, got {rows}x{cols}")

    graph = FactorGraph()
    for i in range(rows):
        for j in range(cols):
            graph.add_variable(site_name(i, j), list(spins))

    psi = TablePotential(ising_potential(coupling, spins))
    wrap_cols = periodic and cols > 2
    wrap_rows = periodic and rows > 2

    for i in range(rows):
        for j in range(cols - 1):
            graph.add_factor([site_name(i, j), site_name(i, j + 1)], psi)
        if wrap_cols:
            graph.add_factor([site_name(i, cols - 1), site_name(i, 0)], psi)
    for j in range(cols):
        for i in range(rows - 1):
            graph.add_factor([site_name(i, j), site_name(i + 1, j)], psi)
        if wrap_rows:
            graph.add_factor([site_name(rows - 1, j), site_name(0, j)], psi)

    if field != 0.0:
        phi = TablePotential(field_potential(field, spins))
        for i in range(rows):
            for j in range(cols):
                graph.add_factor([site_name(i, j)], phi)

    logger.debug(f"Built {rows}x{cols} Ising grid: {graph!r}")
    return graph
