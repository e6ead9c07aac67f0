"""
Models module: table potentials and model generators.
"""

from factor_graph.models.potentials import TablePotential
from factor_graph.models.ising import build_ising_grid, ising_potential, field_potential, site_name

__all__ = [
    "TablePotential",
    "build_ising_grid",
    "ising_potential",
    "field_potential",
    "site_name",
]
