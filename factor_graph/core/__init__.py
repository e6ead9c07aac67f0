"""
Core module: ID registry and error types.
"""

from factor_graph.core.errors import (
    FactorGraphError,
    DuplicateName,
    InvalidScope,
    UnknownVariable,
    UnknownRoot,
    InternalInconsistency,
)
from factor_graph.core.registry import NodeRegistry

__all__ = [
    "FactorGraphError",
    "DuplicateName",
    "InvalidScope",
    "UnknownVariable",
    "UnknownRoot",
    "InternalInconsistency",
    "NodeRegistry",
]
