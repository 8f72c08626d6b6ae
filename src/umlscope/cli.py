"""
Command Line Interface for umlscope.

This module provides the CLI for generating UML class and sequence
diagrams from a Java source tree.

Commands:
    - generate: Write .puml files, render images and the HTML index
    - scenarios: List entry points and the call scenarios built from them
    - class-diagram: Print the class diagram text
    - config-show: Show the effective configuration

Options given on the command line override values loaded with --config,
which in turn override the built-in defaults.

Example Usage:
    $ umlscope generate src/main/java -p com.example -o diagrams
    $ umlscope scenarios src/main/java -p com.example
    $ umlscope generate --config uml.properties --no-render
"""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import ClassifierConfig, Config, OutputConfig, RenderConfig, SourceConfig
from .constants import APPLICATION_NAME, APPLICATION_VERSION
from .services.analyzer import ProjectAnalyzer
from .services.class_diagram import ClassDiagramEmitter
from .services.scenario_builder import ScenarioBuilder, find_entry_points
from .tools.generate_diagrams import generate_diagrams

console = Console()


def _fail(message: str) -> None:
    console.print(f"[red]Error: {escape(message)}[/red]")
    sys.exit(1)


def _build_config(
    config_file: Optional[str],
    input_dir: Optional[str] = None,
    prefix: Optional[str] = None,
    output: Optional[str] = None,
    types: Optional[str] = None,
    htmldoc: Optional[str] = None,
    no_render: bool = False,
    no_html: bool = False,
    keep_empty: bool = False,
) -> Config:
    """Load --config (if any) and apply command-line overrides."""
    config = Config.from_properties(Path(config_file)) if config_file else Config()

    source = config.source.model_dump()
    if input_dir:
        source["input_dir"] = Path(input_dir)

    classifier = config.classifier.model_dump()
    if prefix is not None:
        classifier["include_prefix"] = prefix

    output_settings = config.output.model_dump()
    if output:
        output_settings["output_dir"] = Path(output)
    if htmldoc:
        output_settings["htmldoc_dir"] = Path(htmldoc)
    if types:
        output_settings["diagram_types"] = types.split(",")
    if no_html:
        output_settings["write_html"] = False
    if keep_empty:
        output_settings["skip_empty_scenarios"] = False

    render = config.render.model_dump()
    if no_render:
        render["enabled"] = False

    return Config(
        classifier=ClassifierConfig(**classifier),
        source=SourceConfig(**source),
        output=OutputConfig(**output_settings),
        render=RenderConfig(**render),
    )


def _load_config(**kwargs) -> Config:
    try:
        return _build_config(**kwargs)
    except (OSError, ValueError) as e:
        _fail(str(e))


config_option = click.option(
    "--config", "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="Properties file (input.directory, output.directory, diagram.types, ...)",
)
prefix_option = click.option(
    "--prefix", "-p",
    default=None,
    help="Package prefix of project classes (e.g., com.example)",
)


@click.group()
@click.version_option(APPLICATION_VERSION, prog_name=APPLICATION_NAME)
def main():
    """umlscope - UML Diagrams from Java Sources.

    Generates a class diagram and one sequence diagram per call scenario
    as PlantUML text, and renders them when PlantUML is installed.

    \b
    Quick Start:
        # Generate everything for a source tree
        umlscope generate src/main/java -p com.example

        # Preview the call scenarios
        umlscope scenarios src/main/java -p com.example
    """


@main.command()
@click.argument("input_dir", required=False, type=click.Path(file_okay=False))
@click.option("--output", "-o", help="Output directory for .puml files and images")
@prefix_option
@click.option("--types", "-t", help="Diagram types, comma separated (class,sequence)")
@click.option("--htmldoc", help="Directory for the HTML index of images")
@config_option
@click.option("--no-render", is_flag=True, help="Only write .puml files")
@click.option("--no-html", is_flag=True, help="Do not write the HTML index")
@click.option("--keep-empty", is_flag=True, help="Also write scenarios without interactions")
def generate(input_dir, output, prefix, types, htmldoc, config_file, no_render, no_html, keep_empty):
    """Generate class and sequence diagrams.

    INPUT_DIR: Java source directory (defaults to input.directory from
    --config, then ./input)
    """
    config = _load_config(
        config_file=config_file,
        input_dir=input_dir,
        prefix=prefix,
        output=output,
        types=types,
        htmldoc=htmldoc,
        no_render=no_render,
        no_html=no_html,
        keep_empty=keep_empty,
    )

    result = generate_diagrams(config)
    if "error" in result:
        _fail(result["error"])

    table = Table(title="Generated Diagrams")
    table.add_column("Kind", style="cyan")
    table.add_column("Diagram")
    table.add_column("Images", justify="right", style="green")
    table.add_column("Status")

    for diagram in result["diagrams"]:
        if diagram["error"]:
            status = f"[red]{escape(diagram['error'])}[/red]"
        elif diagram["images"]:
            status = "[green]rendered[/green]"
        else:
            status = "[dim]not rendered[/dim]"
        table.add_row(diagram["kind"], diagram["puml"], str(len(diagram["images"])), status)

    console.print(table)
    console.print(
        f"[green]{result['entities']} entities, {result['entry_points']} entry points, "
        f"{result['scenarios']} scenarios ({result['scenarios_skipped']} empty skipped)[/green]"
    )
    if result["rendering"] == "unavailable":
        console.print("[yellow]PlantUML not found: set PLANTUML_JAR_PATH to render images[/yellow]")
    if result["html_index"]:
        console.print(f"HTML documentation: {result['html_index']}")


@main.command()
@click.argument("input_dir", required=False, type=click.Path(file_okay=False))
@prefix_option
@config_option
def scenarios(input_dir, prefix, config_file):
    """List entry points and their call scenarios.

    INPUT_DIR: Java source directory
    """
    config = _load_config(config_file=config_file, input_dir=input_dir, prefix=prefix)
    try:
        graph = ProjectAnalyzer(config).analyze().graph
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))

    console.print(f"\n[bold]{len(find_entry_points(graph))} Entry Points[/bold]\n")

    table = Table()
    table.add_column("Entry", style="cyan")
    table.add_column("Method")
    table.add_column("Interactions", justify="right", style="green")
    table.add_column("Participants", justify="right")

    for scenario in ScenarioBuilder().build_scenarios(graph):
        table.add_row(
            scenario.entry_entity,
            scenario.entry_method,
            str(len(scenario)),
            str(len(scenario.participants)),
        )

    console.print(table)


@main.command("class-diagram")
@click.argument("input_dir", required=False, type=click.Path(file_okay=False))
@prefix_option
@config_option
def class_diagram(input_dir, prefix, config_file):
    """Print the class diagram as PlantUML text.

    INPUT_DIR: Java source directory
    """
    config = _load_config(config_file=config_file, input_dir=input_dir, prefix=prefix)
    try:
        graph = ProjectAnalyzer(config).analyze().graph
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))

    click.echo(ClassDiagramEmitter(config.classifier.include_prefix).render(graph), nl=False)


@main.command("config-show")
@config_option
def config_show(config_file):
    """Show the effective configuration."""
    config = _load_config(config_file=config_file)

    console.print("\n[bold]umlscope Configuration[/bold]\n")

    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Input Directory", str(config.source.input_dir))
    table.add_row("Output Directory", str(config.output.output_dir))
    table.add_row("HTML Doc Directory", str(config.output.htmldoc_dir))
    table.add_row("Diagram Types", ", ".join(config.output.diagram_types))
    table.add_row("Include Prefix", config.classifier.include_prefix or "[dim]Everything[/dim]")
    table.add_row("Library Prefixes", ", ".join(config.classifier.library_prefixes))
    table.add_row("Render Images", "✓ Yes" if config.render.enabled else "✗ No")
    table.add_row("Image Format", config.render.image_format.value)
    table.add_row(
        "PlantUML JAR",
        str(config.render.jar_path) if config.render.jar_path else "[dim]From environment/PATH[/dim]",
    )

    console.print(table)


if __name__ == "__main__":
    main()
