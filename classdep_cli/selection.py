"""Compute which classes a diagram should display."""

from __future__ import annotations

from collections import deque
from typing import Callable, Iterable, Set

from .errors import EmptySelectionError, UnresolvedRootError
from .models import DisplayPolicy, DistanceSelection, EntityGraph, ExplicitSelection


def select_explicit(graph: EntityGraph, names: Iterable[str]) -> Set[str]:
    selected = {name for name in names if name in graph}
    if not selected:
        raise EmptySelectionError("No valid class selected.")
    return selected


def select_by_distance(graph: EntityGraph, root: str, forward: int, backward: int) -> Set[str]:
    """Return ``root`` plus classes within ``forward`` / ``backward`` hops.

    Each direction is walked independently with its own visited set; a
    distance of 0 adds nothing in that direction.
    """
    if root not in graph:
        raise UnresolvedRootError(root)

    selected = {root}
    if forward > 0:
        selected |= expand_dependencies(graph, root, forward)
    if backward > 0:
        selected |= expand_dependents(graph, root, backward)
    return selected


def expand_dependencies(graph: EntityGraph, root: str, distance: int) -> Set[str]:
    return _bounded_walk(root, distance, graph.dependencies_of)


def expand_dependents(graph: EntityGraph, root: str, distance: int) -> Set[str]:
    return _bounded_walk(root, distance, graph.dependents_of)


def _bounded_walk(root: str, distance: int, neighbours: Callable[[str], Set[str]]) -> Set[str]:
    # Breadth-first, so every node is first reached at its minimum hop count.
    seen = {root}
    frontier = deque([(root, 0)])
    while frontier:
        current, hops = frontier.popleft()
        if hops >= distance:
            continue
        for nxt in sorted(neighbours(current)):
            if nxt in seen:
                continue
            seen.add(nxt)
            frontier.append((nxt, hops + 1))
    return seen


def resolve_display_names(graph: EntityGraph, policy: DisplayPolicy) -> Set[str]:
    if isinstance(policy, ExplicitSelection):
        return select_explicit(graph, policy.names)
    if isinstance(policy, DistanceSelection):
        return select_by_distance(
            graph,
            policy.root,
            policy.forward_distance,
            policy.backward_distance,
        )
    raise TypeError(f"Unsupported display policy: {type(policy).__name__}")
