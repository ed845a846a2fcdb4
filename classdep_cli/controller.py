"""Coordinates analysis loading, selection, rendering, and viewing."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional

from .config import RenderOptions
from .errors import GraphNotLoadedError
from .history import InputHistory
from .loader import load_analysis
from .models import DisplayPolicy, EntityGraph, GenerationResult, root_of
from .plantuml import render_diagram, write_diagram
from .selection import resolve_display_names
from .viewer import open_in_viewer

logger = logging.getLogger(__name__)


class DiagramController:
    """Owns the most recently analyzed graph.

    A successful :meth:`analyze` replaces the graph wholesale; renders in
    progress keep the graph object they started with.
    """

    def __init__(
        self,
        history: Optional[InputHistory] = None,
        opener: Callable[..., bool] = open_in_viewer,
        render_options: Optional[RenderOptions] = None,
    ):
        self.history = history or InputHistory()
        self.opener = opener
        self.render_options = render_options or RenderOptions()
        self._graph: Optional[EntityGraph] = None

    @property
    def graph(self) -> Optional[EntityGraph]:
        return self._graph

    def has_graph(self) -> bool:
        return self._graph is not None and len(self._graph) > 0

    def previous_input(self) -> Optional[str]:
        return self.history.get_previous_input()

    def analyze(self, input_path: Path) -> List[str]:
        input_path = Path(input_path)
        graph = load_analysis(input_path)
        self._graph = graph
        self.history.set_previous_input(str(input_path.resolve()))
        logger.info("Analyzed %d classes, %d dependency links", len(graph), graph.edge_count())
        return graph.names()

    def generate(
        self,
        policy: DisplayPolicy,
        output_path: Optional[Path] = None,
        render_options: Optional[RenderOptions] = None,
    ) -> GenerationResult:
        graph = self._graph
        if graph is None:
            raise GraphNotLoadedError("No class graph analyzed yet. Load an analysis file first.")

        options = render_options or self.render_options
        display_names = resolve_display_names(graph, policy)
        text = render_diagram(
            graph,
            display_names,
            policy,
            wrap_width=options.wrap_width,
            root_color=options.root_color,
            root_edge_color=options.root_edge_color,
        )
        target = write_diagram(text, Path(output_path or options.output_file))

        edge_count = sum(
            1
            for name in display_names
            for dep in graph[name].dependencies
            if dep in display_names
        )
        logger.info("Rendered %d classes to %s", len(display_names), target)
        return GenerationResult(
            output_path=str(target),
            class_count=len(display_names),
            edge_count=edge_count,
            root=root_of(policy),
        )

    def open_viewer(self, file_path: Path) -> bool:
        return self.opener(Path(file_path), self.render_options.viewer_command)
