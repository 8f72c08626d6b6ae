"""
Tests for the generate_diagrams tool.

Tests cover:
- Files written for the sample project
- Failure reporting for bad input
- Empty scenario handling
- Rendering outcomes and the HTML index

PlantUML is never run; the renderer class is patched where rendering matters.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from conftest import write_sources

from umlscope.config import ClassifierConfig, Config, OutputConfig, RenderConfig, SourceConfig
from umlscope.services.renderer import RenderError
from umlscope.tools import generate_diagrams


@pytest.fixture
def make_config(java_project, tmp_path):
    """Build a config for the sample project with rendering off by default."""

    def factory(render=False, **output):
        return Config(
            classifier=ClassifierConfig(include_prefix="com.app"),
            source=SourceConfig(input_dir=java_project),
            output=OutputConfig(
                output_dir=tmp_path / "output",
                htmldoc_dir=tmp_path / "htmldoc",
                **output,
            ),
            render=RenderConfig(enabled=render),
        )

    return factory


def _fake_render(puml_file):
    image = Path(puml_file).with_suffix(".png")
    image.write_bytes(b"png")
    return [image]


class TestGenerateDiagrams:
    """Tests for a run without rendering."""

    def test_writes_class_and_sequence_diagrams(self, make_config, tmp_path):
        """Test the sample project yields one class and one sequence diagram."""
        result = generate_diagrams(make_config())

        assert "error" not in result
        assert result["entities"] == 3
        assert result["entry_points"] == 1
        assert result["scenarios"] == 1
        assert result["rendering"] == "disabled"
        assert result["html_index"] is None

        output = tmp_path / "output"
        assert sorted(p.name for p in output.iterdir()) == [
            "classDiagram.puml",
            "com.app.web.OrderController_create.puml",
        ]
        assert [d["kind"] for d in result["diagrams"]] == ["class", "sequence"]

    def test_sequence_diagram_content(self, make_config, tmp_path):
        """Test the controller scenario walks down to the repository."""
        generate_diagrams(make_config())

        text = (tmp_path / "output" / "com.app.web.OrderController_create.puml").read_text()
        assert text == (
            "@startuml\n"
            "title Sequence Diagram for com.app.web.OrderController::create\n"
            "com.app.web.OrderController -> com.app.service.OrderService : create calls place\n"
            "com.app.service.OrderService -> com.app.repo.OrderRepository : place calls save\n"
            "@enduml\n"
        )

    def test_class_diagram_content(self, make_config, tmp_path):
        """Test the class diagram holds every entity and association."""
        generate_diagrams(make_config())

        text = (tmp_path / "output" / "classDiagram.puml").read_text()
        assert "class com.app.repo.OrderRepository {" in text
        assert "    -service : OrderService" in text
        assert (
            "com.app.web.OrderController ..> com.app.service.OrderService : caller-callee"
            in text
        )
        assert (
            "com.app.service.OrderService --> com.app.repo.OrderRepository : association"
            in text
        )

    def test_only_selected_types(self, make_config, tmp_path):
        """Test diagram types restrict what is written."""
        result = generate_diagrams(make_config(diagram_types=["class"]))

        assert [d["name"] for d in result["diagrams"]] == ["classDiagram"]
        assert result["scenarios"] == 0

    def test_missing_input_dir(self, tmp_path):
        """Test a missing input directory is reported, nothing is written."""
        config = Config(
            source=SourceConfig(input_dir=tmp_path / "absent"),
            output=OutputConfig(output_dir=tmp_path / "output"),
            render=RenderConfig(enabled=False),
        )

        result = generate_diagrams(config)

        assert "does not exist" in result["error"]
        assert not (tmp_path / "output").exists()

    def test_empty_input_dir(self, tmp_path):
        """Test a directory without sources is reported."""
        (tmp_path / "src").mkdir()
        config = Config(
            source=SourceConfig(input_dir=tmp_path / "src"),
            render=RenderConfig(enabled=False),
        )

        assert "No input files" in generate_diagrams(config)["error"]


class TestEmptyScenarios:
    """Tests for scenarios without interactions."""

    @pytest.fixture(autouse=True)
    def idle_entity(self, java_project):
        write_sources(java_project, {
            "com/app/util/Clock.java": """
                package com.app.util;

                public class Clock {
                    public long now() {
                        return 0L;
                    }
                }
            """,
        })

    def test_skipped_by_default(self, make_config, tmp_path):
        """Test empty scenarios are counted but not written."""
        result = generate_diagrams(make_config())

        assert result["scenarios"] == 2
        assert result["scenarios_skipped"] == 1
        assert not (tmp_path / "output" / "com.app.util.Clock_now.puml").exists()

    def test_kept_on_request(self, make_config, tmp_path):
        """Test empty scenarios can still be written."""
        result = generate_diagrams(make_config(skip_empty_scenarios=False))

        assert result["scenarios_skipped"] == 0
        assert (tmp_path / "output" / "com.app.util.Clock_now.puml").exists()


class TestOverloadedEntryMethods:
    """Tests for overloads that map to the same file name."""

    @pytest.fixture(autouse=True)
    def overloaded_entity(self, java_project):
        write_sources(java_project, {
            "com/app/util/Box.java": """
                package com.app.util;

                import com.app.repo.OrderRepository;

                public class Box {
                    private OrderRepository repository;

                    public int get() {
                        repository.save("a");
                        return 0;
                    }

                    public String get(int index) {
                        repository.save("b");
                        return "";
                    }
                }
            """,
        })

    def test_file_written_once(self, make_config, tmp_path):
        """Test the second overload does not overwrite or repeat the first."""
        result = generate_diagrams(make_config())

        names = [d["name"] for d in result["diagrams"]]
        assert names.count("com.app.util.Box_get") == 1
        assert result["scenarios"] == 3
        assert result["scenarios_duplicate"] == 1
        assert (tmp_path / "output" / "com.app.util.Box_get.puml").exists()


class TestRendering:
    """Tests for rendering outcomes."""

    def test_unavailable_plantuml(self, make_config):
        """Test the run succeeds with .puml files only."""
        with patch("umlscope.tools.generate_diagrams.PlantUmlRenderer") as renderer_class:
            renderer_class.return_value.is_available.return_value = False
            result = generate_diagrams(make_config(render=True))

        assert result["rendering"] == "unavailable"
        assert result["images"] == 0
        assert result["html_index"] is None
        renderer_class.return_value.render.assert_not_called()

    def test_rendered_images_and_html_index(self, make_config, tmp_path):
        """Test rendered images are indexed in the HTML page."""
        with patch("umlscope.tools.generate_diagrams.PlantUmlRenderer") as renderer_class:
            renderer = renderer_class.return_value
            renderer.is_available.return_value = True
            renderer.render.side_effect = _fake_render
            result = generate_diagrams(make_config(render=True))

        assert result["rendering"] == "enabled"
        assert result["images"] == 2
        assert result["html_index"] == str(tmp_path / "htmldoc" / "index.html")
        assert (tmp_path / "htmldoc" / "images" / "classDiagram.png").exists()
        html = (tmp_path / "htmldoc" / "index.html").read_text()
        assert "com.app.web.OrderController_create.png" in html

    def test_html_index_can_be_disabled(self, make_config, tmp_path):
        """Test write_html=False skips the index."""
        with patch("umlscope.tools.generate_diagrams.PlantUmlRenderer") as renderer_class:
            renderer = renderer_class.return_value
            renderer.is_available.return_value = True
            renderer.render.side_effect = _fake_render
            result = generate_diagrams(make_config(render=True, write_html=False))

        assert result["images"] == 2
        assert result["html_index"] is None
        assert not (tmp_path / "htmldoc").exists()

    def test_render_error_is_per_diagram(self, make_config):
        """Test one failing diagram does not stop the others."""

        def render(puml_file):
            if Path(puml_file).name == "classDiagram.puml":
                raise RenderError("PlantUML failed")
            return _fake_render(puml_file)

        with patch("umlscope.tools.generate_diagrams.PlantUmlRenderer") as renderer_class:
            renderer = renderer_class.return_value
            renderer.is_available.return_value = True
            renderer.render.side_effect = render
            result = generate_diagrams(make_config(render=True))

        class_entry, sequence_entry = result["diagrams"]
        assert class_entry["error"] == "PlantUML failed"
        assert class_entry["images"] == []
        assert sequence_entry["error"] is None
        assert len(sequence_entry["images"]) == 1
        assert result["html_index"] is not None
