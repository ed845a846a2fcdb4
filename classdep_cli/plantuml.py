"""PlantUML class-diagram rendering for a selected slice of the entity graph."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set

from .errors import EmptySelectionError, WriteFailureError
from .models import NAMESPACE_SEPARATOR, DisplayPolicy, EntityGraph, SymbolKind, root_of
from .namespace_tree import NamespaceNode, build_namespace_tree

logger = logging.getLogger(__name__)

ESCAPE_PLACEHOLDER = "__"
_ESCAPED_CHARS = ("&", "<", ">", '"', ",", " ", "'")

DEFAULT_WRAP_WIDTH = 20
DEFAULT_ROOT_COLOR = "#orange"
DEFAULT_ROOT_EDGE_COLOR = "#red"

REALIZATION_ARROW = "--|>"
ASSOCIATION_ARROW = "-->"


def escape(text: str) -> str:
    for char in _ESCAPED_CHARS:
        text = text.replace(char, ESCAPE_PLACEHOLDER)
    return text


def wrap_text(text: str, width: int = DEFAULT_WRAP_WIDTH) -> List[str]:
    """Hard-wrap ``text`` into chunks of at most ``width`` characters."""
    if width < 1:
        raise ValueError("wrap width must be positive")
    return [text[i:i + width] for i in range(0, len(text), width)]


def sanitize_summary(summary: str) -> str:
    return summary.replace("\r", "").replace('"', "'")


def summary_lines(summary: str, width: int = DEFAULT_WRAP_WIDTH) -> List[str]:
    lines: List[str] = []
    for line in sanitize_summary(summary).split("\n"):
        lines.extend(wrap_text(line.strip(), width))
    return lines


def disambiguate_short_names(names: Iterable[str], separator: str = NAMESPACE_SEPARATOR) -> Dict[str, str]:
    """Map each full name to a unique display name.

    Short names are escaped first, so the result is already a valid diagram
    identifier. Names are visited in sorted order: the first owner of a short
    name keeps it and later owners get ``_1``, ``_2``... appended.
    """
    mapping: Dict[str, str] = {}
    used: Set[str] = set()
    counters: Dict[str, int] = {}

    for full_name in sorted(set(names)):
        short = escape(full_name.split(separator)[-1])
        candidate = short
        if short in counters or candidate in used:
            count = counters.get(short, 0)
            while candidate in used:
                count += 1
                candidate = f"{short}_{count}"
            counters[short] = count
        else:
            counters[short] = 0
        used.add(candidate)
        mapping[full_name] = candidate
    return mapping


def element_keyword(kind: SymbolKind) -> str:
    if kind is SymbolKind.INTERFACE:
        return "interface"
    if kind is SymbolKind.ABSTRACT_CLASS:
        return "abstract class"
    if kind is SymbolKind.ENUM:
        return "enum"
    if kind in (
        SymbolKind.CLASS,
        SymbolKind.STRUCT,
        SymbolKind.DELEGATE,
        SymbolKind.INTERFACE_IMPLEMENTING_CLASS,
        SymbolKind.UNKNOWN,
    ):
        return "class"
    raise ValueError(f"Unhandled symbol kind: {kind!r}")


def dependency_arrow(source: SymbolKind, target: SymbolKind) -> str:
    if source is SymbolKind.INTERFACE_IMPLEMENTING_CLASS and target is SymbolKind.INTERFACE:
        return REALIZATION_ARROW
    return ASSOCIATION_ARROW


def render_diagram(
    graph: EntityGraph,
    display_names: Iterable[str],
    policy: DisplayPolicy,
    *,
    wrap_width: int = DEFAULT_WRAP_WIDTH,
    root_color: str = DEFAULT_ROOT_COLOR,
    root_edge_color: str = DEFAULT_ROOT_EDGE_COLOR,
) -> str:
    """Render the classes in ``display_names`` and the edges among them."""
    shown = {name for name in display_names if name in graph}
    if not shown:
        raise EmptySelectionError("Nothing to render: no valid class selected.")

    root = root_of(policy)
    name_map = disambiguate_short_names(shown)
    tree = build_namespace_tree(shown)

    lines = ["@startuml", "skinparam classAttributeIconSize 0"]
    _render_node(
        lines,
        tree,
        graph,
        name_map,
        policy,
        root=root,
        indent=0,
        wrap_width=wrap_width,
        root_color=root_color,
    )

    for entity in graph.entities():
        if entity.name not in shown:
            continue
        source = name_map[entity.name]
        color = f" {root_edge_color}" if entity.name == root else ""
        for dep_name in sorted(entity.dependencies):
            if dep_name not in shown:
                continue
            arrow = dependency_arrow(entity.kind, graph[dep_name].kind)
            lines.append(f"{source} {arrow} {name_map[dep_name]}{color}")

    lines.append("@enduml")
    return "\n".join(lines) + "\n"


def _render_node(
    lines: List[str],
    node: NamespaceNode,
    graph: EntityGraph,
    name_map: Dict[str, str],
    policy: DisplayPolicy,
    *,
    root: Optional[str],
    indent: int,
    wrap_width: int,
    root_color: str,
) -> None:
    pad = "  " * indent

    for child in node.iter_children():
        lines.append(f'{pad}package "{escape(child.name)}" {{')
        _render_node(
            lines,
            child,
            graph,
            name_map,
            policy,
            root=root,
            indent=indent + 1,
            wrap_width=wrap_width,
            root_color=root_color,
        )
        lines.append(f"{pad}}}")

    for full_name in node.classes:
        entity = graph[full_name]
        display = name_map[full_name]
        color = f" {root_color}" if full_name == root else ""

        lines.append(f"{pad}{element_keyword(entity.kind)} {display}{color} {{")
        if policy.show_members:
            lines.extend(f"{pad}  +{escape(f)}" for f in entity.fields)
            lines.extend(f"{pad}  +{escape(m)}()" for m in entity.methods)
        else:
            lines.append(f"{pad}  +{len(entity.fields)}")
            lines.append(f"{pad}  +{len(entity.methods)}()")
        lines.append(f"{pad}}}")

        if policy.show_summary and entity.summary and entity.summary.strip():
            lines.append(f"{pad}note right of {display}")
            lines.extend(f"{pad}    {text}" for text in summary_lines(entity.summary, wrap_width))
            lines.append(f"{pad}end note")


def _default_file_mode() -> int:
    # mkstemp files start at 0600, plain writes follow the umask.
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_diagram(text: str, output_file: Path) -> Path:
    """Write ``text`` to ``output_file`` atomically.

    The file is written to a temporary sibling and moved into place, so an
    existing diagram survives a failed write.
    """
    output_file = Path(output_file)
    tmp_name: Optional[str] = None
    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{output_file.name}.", suffix=".tmp", dir=str(output_file.parent)
        )
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        os.chmod(tmp_name, _default_file_mode())
        os.replace(tmp_name, output_file)
        tmp_name = None
    except OSError as exc:
        raise WriteFailureError(output_file, exc) from exc
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except OSError:
                logger.debug("Could not remove temporary file %s", tmp_name)

    logger.info("Wrote diagram to %s", output_file)
    return output_file
