"""
Class and Sequence Diagram Generation Tool.

Runs a complete generation over one source tree:
1. Find and read the Java sources into resolved declarations
2. Extract entities and relationships
3. Write classDiagram.puml (class diagram)
4. Build call scenarios and write one <entry>_<method>.puml per scenario
5. Render each diagram with PlantUML (when enabled and available)
6. Write an HTML index page of the rendered images

Rendering problems are reported per diagram and never stop the run. The
run fails, with nothing written, when the input directory is missing or
holds no declarations.

Example Usage:
    config = Config(
        source=SourceConfig(input_dir=Path("src/main/java")),
        classifier=ClassifierConfig(include_prefix="com.example"),
    )
    result = generate_diagrams(config)
    result["diagrams"]
    # [{"kind": "class", "name": "classDiagram", "puml": "output/classDiagram.puml", ...}]
"""

from pathlib import Path
from typing import Optional

from ..config import Config
from ..constants import CLASS_DIAGRAM_FILENAME, PUML_SUFFIX, DiagramKind
from ..logging import get_logger, log_operation_end, log_operation_start
from ..services.analyzer import ProjectAnalyzer
from ..services.class_diagram import ClassDiagramEmitter
from ..services.html_docs import HtmlDocGenerator
from ..services.renderer import PlantUmlRenderer, RenderError
from ..services.scenario_builder import ScenarioBuilder, find_entry_points
from ..services.sequence_diagram import SequenceDiagramEmitter

logger = get_logger(__name__)


def _write_diagram(output_dir: Path, file_name: str, text: str) -> Path:
    puml_file = output_dir / file_name
    puml_file.write_text(text, encoding="utf-8")
    logger.info("Wrote PlantUML file", extra={"puml": str(puml_file)})
    return puml_file


def _render_diagram(
    renderer: Optional[PlantUmlRenderer],
    kind: DiagramKind,
    puml_file: Path,
) -> dict:
    entry = {
        "kind": kind.value,
        "name": puml_file.stem,
        "puml": str(puml_file),
        "images": [],
        "error": None,
    }
    if renderer is None:
        return entry
    try:
        entry["images"] = [str(image) for image in renderer.render(puml_file)]
    except RenderError as e:
        logger.error("Diagram rendering failed", extra={"puml": str(puml_file), "error": str(e)})
        entry["error"] = str(e)
    return entry


def generate_diagrams(config: Config) -> dict:
    """Generate class and sequence diagrams for a source tree.

    Args:
        config: Run configuration; ``config.source.input_dir`` is analyzed
            and artifacts go to ``config.output.output_dir``

    Returns:
        Dictionary containing:
        - input_dir / output_dir: The directories used
        - entities: Number of extracted entities
        - entry_points: Number of entities never called by another entity
        - scenarios: Number of scenarios built
        - scenarios_skipped: Scenarios without interactions that were not written
        - scenarios_duplicate: Scenarios not written because an earlier one
          already used the same file name
        - diagrams: One entry per written .puml file with its images or error
        - images: Total number of rendered images
        - rendering: "enabled", "disabled" or "unavailable"
        - html_index: Path of the HTML index page, or None

        or {"error": message} when the run fails.
    """
    start_time = log_operation_start(
        logger, "generate_diagrams", input_dir=str(config.source.input_dir)
    )

    analyzer = ProjectAnalyzer(config)
    try:
        analysis = analyzer.analyze()
    except (FileNotFoundError, ValueError) as e:
        log_operation_end(logger, "generate_diagrams", start_time, success=False, error=str(e))
        return {"error": str(e)}

    graph = analysis.graph
    output_dir = Path(config.output.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    renderer: Optional[PlantUmlRenderer] = None
    rendering = "disabled"
    if config.render.enabled:
        renderer = PlantUmlRenderer(config.render)
        if renderer.is_available():
            rendering = "enabled"
        else:
            logger.warning("PlantUML not available, writing .puml files only")
            renderer = None
            rendering = "unavailable"

    diagrams: list[dict] = []
    scenario_count = 0
    skipped = 0
    duplicates = 0
    entry_point_count = len(find_entry_points(graph))

    if config.output.wants(DiagramKind.CLASS):
        class_emitter = ClassDiagramEmitter(config.classifier.include_prefix)
        puml_file = _write_diagram(output_dir, CLASS_DIAGRAM_FILENAME, class_emitter.render(graph))
        diagrams.append(_render_diagram(renderer, DiagramKind.CLASS, puml_file))

    if config.output.wants(DiagramKind.SEQUENCE):
        sequence_emitter = SequenceDiagramEmitter()
        scenarios = ScenarioBuilder().build_scenarios(graph)
        scenario_count = len(scenarios)
        written_stems: set[str] = set()
        for scenario in scenarios:
            if scenario.is_empty and config.output.skip_empty_scenarios:
                skipped += 1
                continue
            stem = sequence_emitter.file_stem(scenario)
            # Overloads differing only in return type share a file name; first wins
            if stem in written_stems:
                logger.warning("Duplicate scenario file name skipped", extra={"diagram": stem})
                duplicates += 1
                continue
            written_stems.add(stem)
            puml_file = _write_diagram(
                output_dir,
                stem + PUML_SUFFIX,
                sequence_emitter.render(scenario),
            )
            diagrams.append(_render_diagram(renderer, DiagramKind.SEQUENCE, puml_file))

    image_count = sum(len(d["images"]) for d in diagrams)

    html_index = None
    if config.output.write_html and image_count:
        html_index = str(HtmlDocGenerator().generate(output_dir, config.output.htmldoc_dir))

    log_operation_end(
        logger,
        "generate_diagrams",
        start_time,
        success=True,
        entities=len(graph),
        diagrams=len(diagrams),
        images=image_count,
    )

    return {
        "input_dir": str(config.source.input_dir),
        "output_dir": str(output_dir),
        "entities": len(graph),
        "entry_points": entry_point_count,
        "scenarios": scenario_count,
        "scenarios_skipped": skipped,
        "scenarios_duplicate": duplicates,
        "diagrams": diagrams,
        "images": image_count,
        "rendering": rendering,
        "html_index": html_index,
    }
