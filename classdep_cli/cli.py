"""Typer-based CLI for rendering scoped class dependency diagrams."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import load_render_options
from .controller import DiagramController
from .errors import ClassDepError
from .models import DistanceSelection, ExplicitSelection, GenerationResult

console = Console()

app = typer.Typer(
    help="🗺️  classdep: scoped PlantUML class diagrams from dependency analysis.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"classdep v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
):
    """classdep: select classes by name or by distance and render them as PlantUML."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


def _controller() -> DiagramController:
    return DiagramController(render_options=load_render_options())


def _load(controller: DiagramController, input_path: Optional[Path]) -> Path:
    if input_path is None:
        previous = controller.previous_input()
        if not previous:
            raise typer.BadParameter(
                "No analysis file given and none remembered. Pass --input <analysis.json>."
            )
        input_path = Path(previous)
        console.print(f"[dim]Using previous analysis file {escape(str(input_path))}[/dim]")

    try:
        controller.analyze(input_path)
    except ClassDepError as exc:
        _fail(exc)
    return input_path


def _fail(exc: ClassDepError) -> None:
    console.print(f"[red]❌ {escape(str(exc))}[/red]")
    raise typer.Exit(code=1)


def _report(controller: DiagramController, result: GenerationResult, open_viewer: bool) -> None:
    console.print(f"[green]✓[/green] Wrote [cyan]{escape(result.output_path)}[/cyan]")
    console.print(f"  Classes: {result.class_count} | Relations: {result.edge_count}")
    if open_viewer and not controller.open_viewer(Path(result.output_path)):
        console.print("[yellow]Could not open the diagram viewer.[/yellow]")


INPUT_OPTION = typer.Option(None, "--input", "-i", help="Analysis JSON file (defaults to the last one used).")
OUTPUT_OPTION = typer.Option(None, "--output", "-o", help="Output .puml file path.")
SUMMARY_OPTION = typer.Option(False, "--summary/--no-summary", help="Attach documentation notes.")
COUNTS_OPTION = typer.Option(False, "--counts", help="Show field/method counts instead of member lists.")
OPEN_OPTION = typer.Option(False, "--open", help="Open the diagram in the configured viewer.")


@app.command("classes")
def list_classes(
    input_path: Optional[Path] = INPUT_OPTION,
    name_filter: str = typer.Option("", "--filter", "-f", help="Only list names containing this text."),
):
    """List analyzed classes with their kinds and link counts."""
    controller = _controller()
    _load(controller, input_path)
    graph = controller.graph

    needle = name_filter.lower()
    entities = [e for e in graph.entities() if needle in e.name.lower()]
    if not entities:
        console.print("No classes match.")
        raise typer.Exit(code=0)

    table = Table(title=f"{len(entities)} of {len(graph)} classes")
    table.add_column("Class", style="cyan")
    table.add_column("Kind")
    table.add_column("Fields", justify="right")
    table.add_column("Methods", justify="right")
    table.add_column("Deps", justify="right")
    table.add_column("Dependents", justify="right")
    for entity in entities:
        table.add_row(
            escape(entity.name),
            entity.kind.value,
            str(len(entity.fields)),
            str(len(entity.methods)),
            str(len(entity.dependencies)),
            str(len(entity.dependents)),
        )
    console.print(table)


@app.command("select")
def render_selection(
    class_names: List[str] = typer.Option(..., "--class", "-c", help="Qualified class name (repeatable)."),
    input_path: Optional[Path] = INPUT_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
    summary: bool = SUMMARY_OPTION,
    counts: bool = COUNTS_OPTION,
    open_viewer: bool = OPEN_OPTION,
):
    """Render an explicit set of classes."""
    controller = _controller()
    _load(controller, input_path)
    policy = ExplicitSelection(frozenset(class_names), show_summary=summary, show_members=not counts)
    try:
        result = controller.generate(policy, output)
    except ClassDepError as exc:
        _fail(exc)
    _report(controller, result, open_viewer)


@app.command("around")
def render_around(
    root: str = typer.Argument(..., help="Qualified name of the class to center on."),
    forward: int = typer.Option(1, "--forward", "-F", min=0, help="Hops along dependencies."),
    backward: int = typer.Option(0, "--backward", "-B", min=0, help="Hops along dependents."),
    input_path: Optional[Path] = INPUT_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
    summary: bool = SUMMARY_OPTION,
    counts: bool = COUNTS_OPTION,
    open_viewer: bool = OPEN_OPTION,
):
    """Render a root class and its neighbourhood within the given distances."""
    controller = _controller()
    _load(controller, input_path)
    policy = DistanceSelection(
        root,
        forward_distance=forward,
        backward_distance=backward,
        show_summary=summary,
        show_members=not counts,
    )
    try:
        result = controller.generate(policy, output)
    except ClassDepError as exc:
        _fail(exc)
    _report(controller, result, open_viewer)


@app.command("last")
def last_input():
    """Print the remembered analysis file path."""
    previous = _controller().previous_input()
    typer.echo(previous or "No analysis file used yet")


if __name__ == "__main__":
    app()
