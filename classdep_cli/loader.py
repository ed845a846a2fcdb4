"""Load analyzer output into a linked :class:`EntityGraph`.

The analyzer writes a JSON document with two maps::

    {
      "entities":   {"Ns.Foo": {"kind": "Class", "fields": [...], "methods": [...], "summary": "..."}},
      "references": {"Ns.Foo": ["Ns.Bar", "System.String"]}
    }

Malformed entity records are skipped with a warning so that one bad class
never hides the rest of the project.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .errors import AnalysisLoadError
from .linker import link
from .models import ClassEntity, EntityGraph, SymbolKind

logger = logging.getLogger(__name__)


def load_analysis(path: Path) -> EntityGraph:
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise AnalysisLoadError(f"Analysis file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise AnalysisLoadError(f"Could not read analysis file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise AnalysisLoadError(f"Analysis file {path} is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise AnalysisLoadError(f"Analysis file {path} must contain a JSON object.")

    entities = payload.get("entities", {})
    references = payload.get("references", {})
    if not isinstance(entities, dict) or not isinstance(references, dict):
        raise AnalysisLoadError("'entities' and 'references' must be JSON objects.")

    graph = build_graph(entities, references)
    logger.info("Loaded %d classes from %s", len(graph), path)
    return graph


def build_graph(
    entities: Mapping[str, Any],
    references: Mapping[str, Iterable[str]],
) -> EntityGraph:
    graph = EntityGraph()
    for name, record in entities.items():
        entity = _parse_entity(name, record)
        if entity is not None:
            graph.add(entity)

    clean_refs: Dict[str, List[str]] = {}
    for name, refs in references.items():
        if isinstance(refs, (list, tuple, set, frozenset)):
            clean_refs[name] = [r for r in refs if isinstance(r, str)]
        else:
            logger.warning("Skipping references of '%s': expected a list", name)

    link(graph, clean_refs)
    return graph


def _parse_entity(name: str, record: Any) -> Optional[ClassEntity]:
    if record is None:
        record = {}
    if not isinstance(record, dict):
        logger.warning("Skipping class '%s': expected an object, got %s", name, type(record).__name__)
        return None

    fields = record.get("fields", [])
    methods = record.get("methods", [])
    summary = record.get("summary") or ""
    if not _is_str_list(fields) or not _is_str_list(methods) or not isinstance(summary, str):
        logger.warning("Skipping class '%s': malformed fields, methods, or summary", name)
        return None

    return ClassEntity(
        name=name,
        kind=SymbolKind.parse(record.get("kind")),
        fields=list(fields),
        methods=list(methods),
        summary=summary,
    )


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)
