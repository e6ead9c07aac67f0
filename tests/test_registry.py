"""
Tests for the ID registry and error types.
"""

import pytest

from factor_graph.core.errors import (
    DuplicateName,
    FactorGraphError,
    InternalInconsistency,
    InvalidScope,
    UnknownRoot,
    UnknownVariable,
)
from factor_graph.core.registry import NodeRegistry
from factor_graph.topology.items import Factor, Variable


def dummy_potential(args):
    return len(args)


class TestNodeRegistry:
    def test_ids_are_sequential(self):
        reg = NodeRegistry()

        assert [reg.allocate_id() for _ in range(4)] == [0, 1, 2, 3]
        assert reg.next_id == 4
        assert list(reg.ids()) == [0, 1, 2, 3]

    def test_register_and_lookup(self):
        reg = NodeRegistry()
        vid = reg.allocate_id()
        var = Variable(id=vid, name="X", domain=(0, 1))
        reg.register(vid, var)

        assert reg.lookup_by_id(vid) is var
        assert vid in reg
        assert list(reg) == [var]

    def test_lookup_out_of_range(self):
        reg = NodeRegistry()
        reg.allocate_id()

        with pytest.raises(InternalInconsistency):
            reg.lookup_by_id(1)
        with pytest.raises(InternalInconsistency):
            reg.lookup_by_id(-1)

    def test_lookup_uncommitted_slot(self):
        reg = NodeRegistry()
        nid = reg.allocate_id()

        assert nid not in reg
        with pytest.raises(InternalInconsistency):
            reg.lookup_by_id(nid)

    def test_register_unallocated(self):
        reg = NodeRegistry()
        var = Variable(id=0, name="X", domain=(0, 1))

        with pytest.raises(InternalInconsistency):
            reg.register(0, var)

    def test_register_twice(self):
        reg = NodeRegistry()
        nid = reg.allocate_id()
        reg.register(nid, Factor(id=nid, scope=("X",), potential=dummy_potential))

        with pytest.raises(InternalInconsistency):
            reg.register(nid, Factor(id=nid, scope=("Y",), potential=dummy_potential))


class TestErrors:
    def test_hierarchy(self):
        assert issubclass(DuplicateName, ValueError)
        assert issubclass(InvalidScope, ValueError)
        assert issubclass(UnknownVariable, KeyError)
        assert issubclass(UnknownRoot, KeyError)
        assert issubclass(InternalInconsistency, RuntimeError)
        for exc in (DuplicateName, InvalidScope, UnknownVariable, UnknownRoot, InternalInconsistency):
            assert issubclass(exc, FactorGraphError)

    def test_messages_carry_name(self):
        err = UnknownVariable("Z")

        assert err.name == "Z"
        assert str(err) == "The variable 'Z' was not found in the factor graph"
        assert "Q" in str(UnknownRoot("Q"))
        assert DuplicateName("A").name == "A"
        assert InvalidScope(["A", "A"], "repeated").scope == ("A", "A")
