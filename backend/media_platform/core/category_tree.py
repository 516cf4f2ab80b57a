"""Category Tree Walk — bounded ancestor traversal over a snapshot of parent links.

Invariants:
    - All functions are PURE: they read a {category_id: parent_id} mapping, nothing else
    - Every walk terminates: a visited set stops it on the first repeated node,
      so data already corrupted by a cycle cannot loop forever
    - has_circular_reference(a, b) is True iff a appears in the chain starting at b

Design Decisions:
    - Snapshot mapping over per-step queries: the shell loads all links once,
      row-locked, inside the transaction that performs the write
    - Dangling parent pointers (parent row missing) end the chain like a root
"""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass
class AncestorTrace:
    """Result of walking parent pointers upward from one node."""
    chain: list[int] = field(default_factory=list)
    revisited: int | None = None
    dangling: int | None = None

    @property
    def corrupted(self) -> bool:
        """True when the walk ended on a cycle instead of a root."""
        return self.revisited is not None

    @property
    def reached_root(self) -> bool:
        return self.revisited is None and self.dangling is None


def trace_ancestors(
    start_id: int | None, parent_links: Mapping[int, int | None],
) -> AncestorTrace:
    """Walk start_id -> parent -> ... until a null parent, a missing row, or a repeat."""
    trace = AncestorTrace()
    visited: set[int] = set()
    current = start_id

    while current is not None:
        if current in visited:
            trace.revisited = current
            break
        if current not in parent_links:
            trace.dangling = current
            break
        visited.add(current)
        trace.chain.append(current)
        current = parent_links[current]

    return trace


def has_circular_reference(
    category_id: int,
    candidate_parent_id: int | None,
    parent_links: Mapping[int, int | None],
) -> bool:
    """Would making candidate_parent_id the parent of category_id close a cycle?"""
    if candidate_parent_id is None:
        return False
    if candidate_parent_id == category_id:
        return True
    return category_id in trace_ancestors(candidate_parent_id, parent_links).chain


def find_cyclic_nodes(parent_links: Mapping[int, int | None]) -> set[int]:
    """Return every node whose ancestor chain never reaches a root (integrity audit)."""
    cyclic: set[int] = set()
    for node in parent_links:
        if trace_ancestors(node, parent_links).corrupted:
            cyclic.add(node)
    return cyclic
