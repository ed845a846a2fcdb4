"""Tests for turning reference maps into graph edges."""

from classdep_cli.linker import link
from classdep_cli.models import ClassEntity, EntityGraph


def _graph(*names):
    return EntityGraph(ClassEntity(n) for n in names)


def test_unresolved_reference_is_dropped():
    graph = _graph("X")

    created = link(graph, {"X": {"Y"}})

    assert created == 0
    assert graph["X"].dependencies == set()
    assert "Y" not in graph


def test_self_reference_is_dropped():
    graph = _graph("X", "Y")

    link(graph, {"X": {"X", "Y"}})

    assert graph["X"].dependencies == {"Y"}
    assert "X" not in graph["X"].dependents


def test_unknown_source_is_skipped():
    graph = _graph("Y")

    assert link(graph, {"Ghost": {"Y"}}) == 0
    assert graph["Y"].dependents == set()


def test_edges_are_mirrored_and_deduplicated():
    graph = _graph("A", "B", "C")

    created = link(graph, {"A": ["B", "B", "C"], "B": ["C"]})

    assert created == 3
    assert graph["A"].dependencies == {"B", "C"}
    assert graph["C"].dependents == {"A", "B"}
    assert graph["B"].dependents == {"A"}


def test_linking_twice_is_idempotent():
    graph = _graph("A", "B")
    refs = {"A": {"B"}, "B": {"A"}}

    assert link(graph, refs) == 2
    assert link(graph, refs) == 0
    assert graph["A"].dependencies == {"B"}
    assert graph["A"].dependents == {"B"}


def test_sample_graph_is_symmetric_without_self_loops(sample_graph):
    for entity in sample_graph.entities():
        assert entity.name not in entity.dependencies
        assert entity.name not in entity.dependents
        for dep in entity.dependencies:
            assert entity.name in sample_graph[dep].dependents
        for dependent in entity.dependents:
            assert entity.name in sample_graph[dependent].dependencies
