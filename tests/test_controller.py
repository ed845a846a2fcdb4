"""Tests for the analysis/render controller."""

import json
from unittest.mock import MagicMock

import pytest

from classdep_cli.config import RenderOptions
from classdep_cli.controller import DiagramController
from classdep_cli.errors import (
    AnalysisLoadError,
    EmptySelectionError,
    GraphNotLoadedError,
    UnresolvedRootError,
)
from classdep_cli.history import InputHistory
from classdep_cli.models import DistanceSelection, ExplicitSelection


@pytest.fixture
def controller(temp_dir) -> DiagramController:
    return DiagramController(
        history=InputHistory(temp_dir / "state.json"),
        opener=MagicMock(return_value=True),
        render_options=RenderOptions(viewer_command="xdg-open"),
    )


def test_generate_requires_analysis(controller, temp_dir):
    assert controller.has_graph() is False
    with pytest.raises(GraphNotLoadedError):
        controller.generate(ExplicitSelection({"Program"}), temp_dir / "out.puml")


def test_analyze_lists_classes_and_remembers_input(controller, sample_analysis_file):
    names = controller.analyze(sample_analysis_file)

    assert names[0] == "App.Core.Entity"
    assert "Program" in names
    assert controller.has_graph()
    assert controller.previous_input() == str(sample_analysis_file.resolve())


def test_failed_analysis_keeps_previous_graph(controller, sample_analysis_file, temp_dir):
    controller.analyze(sample_analysis_file)
    graph = controller.graph

    with pytest.raises(AnalysisLoadError):
        controller.analyze(temp_dir / "missing.json")

    assert controller.graph is graph


def test_reanalysis_replaces_graph_wholesale(controller, sample_analysis_file, temp_dir):
    controller.analyze(sample_analysis_file)
    first = controller.graph

    other = temp_dir / "other.json"
    other.write_text(json.dumps({"entities": {"Solo": {}}, "references": {}}), encoding="utf-8")
    controller.analyze(other)

    assert controller.graph is not first
    assert controller.graph.names() == ["Solo"]
    assert len(first) == 8


def test_generate_distance_diagram(controller, sample_analysis_file, temp_dir):
    controller.analyze(sample_analysis_file)
    output = temp_dir / "diagrams" / "program.puml"

    result = controller.generate(DistanceSelection("Program", forward_distance=1), output)

    assert result.output_path == str(output)
    assert result.class_count == 3
    assert result.edge_count == 3
    assert result.root == "Program"
    text = output.read_text(encoding="utf-8")
    assert "class Program #orange {" in text
    assert "Program --> OrderService #red" in text


def test_errors_leave_previous_output(controller, sample_analysis_file, temp_dir):
    controller.analyze(sample_analysis_file)
    output = temp_dir / "out.puml"
    output.write_text("previous", encoding="utf-8")

    with pytest.raises(UnresolvedRootError):
        controller.generate(DistanceSelection("Nope"), output)
    with pytest.raises(EmptySelectionError):
        controller.generate(ExplicitSelection({"Nope"}), output)

    assert output.read_text(encoding="utf-8") == "previous"


def test_open_viewer_uses_configured_command(controller, temp_dir):
    target = temp_dir / "d.puml"

    assert controller.open_viewer(target) is True
    controller.opener.assert_called_once_with(target, "xdg-open")


def test_empty_analysis_reports_selection_errors(controller, temp_dir):
    empty = temp_dir / "empty.json"
    empty.write_text(json.dumps({"entities": {}, "references": {}}), encoding="utf-8")
    controller.analyze(empty)

    with pytest.raises(EmptySelectionError):
        controller.generate(ExplicitSelection({"Program"}), temp_dir / "out.puml")
    with pytest.raises(UnresolvedRootError):
        controller.generate(DistanceSelection("Program"), temp_dir / "out.puml")


def test_per_call_render_options(controller, sample_analysis_file, temp_dir):
    controller.analyze(sample_analysis_file)
    output = temp_dir / "colored.puml"

    controller.generate(
        DistanceSelection("Program"),
        output,
        render_options=RenderOptions(root_color="#lightblue", root_edge_color="#blue"),
    )

    text = output.read_text(encoding="utf-8")
    assert "class Program #lightblue {" in text
    assert "Program --> OrderService #blue" in text
    assert controller.render_options.root_color == "#orange"
