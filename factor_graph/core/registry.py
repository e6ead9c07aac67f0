"""
factor_graph/core/registry.py

ID registry for graph items.

Variables and factors share a single dense integer space. IDs are handed
out in insertion order and never reused.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, List, Optional

from factor_graph.core.errors import InternalInconsistency

if TYPE_CHECKING:
    from factor_graph.topology.items import GraphItem


@dataclass
class NodeRegistry:
    """
    Arena mapping IDs to graph items.

    Attributes:
        items: Slot per allocated ID (None until the item is committed)
        next_id: Next ID to be allocated
    """
    items: List[Optional["GraphItem"]] = field(default_factory=list)
    next_id: int = 0

    def allocate_id(self) -> int:
        """Allocate a new ID."""
        nid = self.next_id
        self.items.append(None)
        self.next_id += 1
        return nid

    def register(self, nid: int, item: "GraphItem") -> None:
        """Commit an item to a previously allocated ID."""
        if not 0 <= nid < self.next_id:
            raise InternalInconsistency(f"Cannot register item at unallocated id {nid}")
        if self.items[nid] is not None:
            raise InternalInconsistency(f"Id {nid} is already registered")
        self.items[nid] = item

    def lookup_by_id(self, nid: int) -> "GraphItem":
        """Get item by ID."""
        if not 0 <= nid < self.next_id:
            raise InternalInconsistency(f"Id {nid} out of range (next id is {self.next_id})")
        item = self.items[nid]
        if item is None:
            raise InternalInconsistency(f"Id {nid} was allocated but never committed")
        return item

    def ids(self) -> range:
        """Get all allocated IDs in order."""
        return range(self.next_id)

    def __len__(self) -> int:
        return self.next_id

    def __contains__(self, nid: object) -> bool:
        return isinstance(nid, int) and 0 <= nid < self.next_id and self.items[nid] is not None

    def __iter__(self) -> Iterator["GraphItem"]:
        return (item for item in self.items if item is not None)
