"""Turn analyzer reference maps into bidirectional graph edges."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from .models import EntityGraph

logger = logging.getLogger(__name__)


def link(graph: EntityGraph, reference_map: Mapping[str, Iterable[str]]) -> int:
    """Add a dependency edge for every resolvable reference.

    Self-references and names missing from ``graph`` (built-in types,
    external libraries) are dropped silently. Returns the number of edges
    that did not exist before.
    """
    created = 0
    dropped = 0
    for name, refs in reference_map.items():
        node = graph.get(name)
        if node is None:
            logger.debug("Skipping references of unknown class '%s'", name)
            continue
        for ref in refs:
            if ref == name:
                continue
            target = graph.get(ref)
            if target is None:
                dropped += 1
                continue
            if ref not in node.dependencies:
                created += 1
            node.dependencies.add(ref)
            target.dependents.add(name)

    logger.info("Created %d dependency links (%d unresolved references dropped)", created, dropped)
    return created
