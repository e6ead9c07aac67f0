"""
factor_graph/core/errors.py

Exception hierarchy for graph construction and traversal.

Caller-input errors (DuplicateName, InvalidScope, UnknownVariable,
UnknownRoot) are recoverable. InternalInconsistency signals that the
registry and the incidence lists have gone out of sync.
"""

from __future__ import annotations

from typing import Sequence


class FactorGraphError(Exception):
    """Base class for all factor graph errors."""


class DuplicateName(FactorGraphError, ValueError):
    """A variable with this name is already registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Variable '{name}' already exists in the factor graph")


class InvalidScope(FactorGraphError, ValueError):
    """A factor scope is empty or lists a variable more than once."""

    def __init__(self, scope: Sequence[str], reason: str):
        self.scope = tuple(scope)
        self.reason = reason
        super().__init__(f"Invalid factor scope {list(self.scope)}: {reason}")


class _MissingName(FactorGraphError, KeyError):
    # KeyError.__str__ quotes its argument; keep the plain message instead
    def __init__(self, name: str, message: str):
        self.name = name
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class UnknownVariable(_MissingName):
    """A factor scope references a variable that does not exist."""

    def __init__(self, name: str):
        super().__init__(name, f"The variable '{name}' was not found in the factor graph")


class UnknownRoot(_MissingName):
    """A spanning tree was requested from a variable that does not exist."""

    def __init__(self, name: str):
        super().__init__(name, f"Root variable '{name}' not found in the factor graph")


class InternalInconsistency(FactorGraphError, RuntimeError):
    """A registry lookup failed despite earlier validation."""
