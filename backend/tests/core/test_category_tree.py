"""Category Tree — tests for the bounded ancestor walk and cycle detection.

Tests cover:
    - trace_ancestors stops at a root, a missing row, or a revisited node
    - has_circular_reference: None candidate, self, ancestor, unrelated branch
    - Pre-existing cycles elsewhere never hang the walk
    - find_cyclic_nodes reports only nodes whose chain never reaches a root
"""

from media_platform.core.category_tree import (
    trace_ancestors, has_circular_reference, find_cyclic_nodes,
)

# Movies(1) -> Action(2) -> Heist(3); Music(4) is a separate root
FOREST = {1: None, 2: 1, 3: 2, 4: None}


# ─── trace_ancestors ─────────────────────────────────────────────

def test_trace_ancestors_walks_to_root():
    trace = trace_ancestors(3, FOREST)
    assert trace.chain == [3, 2, 1]
    assert trace.reached_root
    assert not trace.corrupted


def test_trace_ancestors_from_none_is_empty():
    trace = trace_ancestors(None, FOREST)
    assert trace.chain == []
    assert trace.reached_root


def test_trace_ancestors_marks_dangling_parent():
    trace = trace_ancestors(5, {5: 99})
    assert trace.chain == [5]
    assert trace.dangling == 99
    assert not trace.reached_root
    assert not trace.corrupted


def test_trace_ancestors_stops_on_revisit():
    trace = trace_ancestors(1, {1: 2, 2: 1})
    assert trace.chain == [1, 2]
    assert trace.revisited == 1
    assert trace.corrupted


# ─── has_circular_reference ──────────────────────────────────────

def test_none_candidate_is_never_circular():
    assert has_circular_reference(1, None, FOREST) is False


def test_self_candidate_is_circular():
    assert has_circular_reference(2, 2, FOREST) is True


def test_descendant_candidate_is_circular():
    # Movies under Action: Movies is an ancestor of Action
    assert has_circular_reference(1, 2, FOREST) is True
    assert has_circular_reference(1, 3, FOREST) is True


def test_ancestor_candidate_is_not_circular():
    assert has_circular_reference(3, 1, FOREST) is False


def test_other_branch_is_not_circular():
    assert has_circular_reference(2, 4, FOREST) is False


def test_existing_cycle_elsewhere_terminates():
    corrupted = {**FOREST, 10: 11, 11: 10}
    assert has_circular_reference(1, 10, corrupted) is False


def test_candidate_missing_from_links_is_not_circular():
    assert has_circular_reference(1, 99, FOREST) is False


# ─── find_cyclic_nodes ───────────────────────────────────────────

def test_find_cyclic_nodes_empty_on_healthy_forest():
    assert find_cyclic_nodes(FOREST) == set()


def test_find_cyclic_nodes_includes_tails_into_cycle():
    links = {**FOREST, 10: 11, 11: 10, 12: 10}
    assert find_cyclic_nodes(links) == {10, 11, 12}
