"""
Tests for PlantUML image rendering.

PlantUML itself is never run: shutil.which and subprocess.run are patched
and the fake run writes the image PlantUML would have produced.
"""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from umlscope.config import RenderConfig
from umlscope.constants import ImageFormat
from umlscope.services.renderer import PlantUmlRenderer, RenderError


@pytest.fixture(autouse=True)
def no_jar_env(monkeypatch):
    """Keep a developer's PLANTUML_JAR_PATH out of the tests."""
    monkeypatch.delenv("PLANTUML_JAR_PATH", raising=False)


@pytest.fixture
def puml_file(tmp_path):
    path = tmp_path / "classDiagram.puml"
    path.write_text("@startuml\n@enduml\n", encoding="utf-8")
    return path


def _fake_run(*suffixes, returncode=0, stderr=b""):
    """subprocess.run replacement writing one image per suffix."""

    def run(command, **kwargs):
        puml = command[-1]
        for suffix in suffixes:
            with open(puml.rsplit(".", 1)[0] + suffix, "wb") as image:
                image.write(b"\x89PNG")
        return MagicMock(returncode=returncode, stderr=stderr)

    return run


class TestAvailability:
    """Tests for locating PlantUML."""

    def test_executable_on_path(self):
        """Test a plantuml command on PATH is used."""
        with patch("umlscope.services.renderer.shutil.which", return_value="/usr/bin/plantuml"):
            renderer = PlantUmlRenderer()

            assert renderer.is_available()
            assert renderer._base_command() == ["/usr/bin/plantuml"]

    def test_nothing_installed(self):
        """Test rendering is unavailable without jar or executable."""
        with patch("umlscope.services.renderer.shutil.which", return_value=None):
            assert not PlantUmlRenderer().is_available()

    def test_configured_jar(self, tmp_path):
        """Test a configured jar is run through java."""
        jar = tmp_path / "plantuml.jar"
        jar.write_bytes(b"")

        with patch("umlscope.services.renderer.shutil.which", return_value="/usr/bin/java"):
            command = PlantUmlRenderer(RenderConfig(jar_path=jar))._base_command()

        assert command == ["/usr/bin/java", "-Djava.awt.headless=true", "-jar", str(jar)]

    def test_jar_from_environment(self, tmp_path, monkeypatch):
        """Test PLANTUML_JAR_PATH is honored."""
        jar = tmp_path / "plantuml.jar"
        jar.write_bytes(b"")
        monkeypatch.setenv("PLANTUML_JAR_PATH", str(jar))

        with patch("umlscope.services.renderer.shutil.which", return_value="/usr/bin/java"):
            command = PlantUmlRenderer()._base_command()

        assert command[-1] == str(jar)

    def test_jar_without_java(self, tmp_path):
        """Test a jar is unusable without a java launcher."""
        jar = tmp_path / "plantuml.jar"
        jar.write_bytes(b"")

        with patch("umlscope.services.renderer.shutil.which", return_value=None):
            assert not PlantUmlRenderer(RenderConfig(jar_path=jar)).is_available()

    def test_missing_configured_jar(self, tmp_path):
        """Test a configured jar that does not exist is unavailable."""
        config = RenderConfig(jar_path=tmp_path / "absent.jar")

        with patch("umlscope.services.renderer.shutil.which", return_value=None):
            assert not PlantUmlRenderer(config).is_available()


class TestRender:
    """Tests for PlantUmlRenderer.render."""

    @pytest.fixture(autouse=True)
    def plantuml_on_path(self):
        with patch("umlscope.services.renderer.shutil.which", return_value="/usr/bin/plantuml"):
            yield

    def test_renders_png(self, puml_file):
        """Test a successful run returns the produced image."""
        with patch("umlscope.services.renderer.subprocess.run", side_effect=_fake_run(".png")) as run:
            images = PlantUmlRenderer().render(puml_file)

        assert images == [puml_file.with_suffix(".png")]
        command = run.call_args.args[0]
        assert command == ["/usr/bin/plantuml", "-tpng", str(puml_file)]

    def test_svg_format(self, puml_file):
        """Test the configured image format is requested."""
        renderer = PlantUmlRenderer(RenderConfig(image_format=ImageFormat.SVG))

        with patch("umlscope.services.renderer.subprocess.run", side_effect=_fake_run(".svg")):
            images = renderer.render(puml_file)

        assert images == [puml_file.with_suffix(".svg")]

    def test_multi_page_images(self, puml_file):
        """Test paged output is collected in page order."""
        fake = _fake_run(".png", "_001.png", "_002.png")

        with patch("umlscope.services.renderer.subprocess.run", side_effect=fake):
            images = PlantUmlRenderer().render(puml_file)

        assert [i.name for i in images] == [
            "classDiagram.png",
            "classDiagram_001.png",
            "classDiagram_002.png",
        ]

    def test_stale_images_removed(self, puml_file):
        """Test images from an earlier run are not reported as new."""
        stale = puml_file.with_suffix(".png")
        stale.write_bytes(b"old")

        with patch("umlscope.services.renderer.subprocess.run", side_effect=_fake_run()):
            with pytest.raises(RenderError, match="No diagram images"):
                PlantUmlRenderer().render(puml_file)

        assert not stale.exists()

    def test_nonzero_exit(self, puml_file):
        """Test PlantUML failures carry its stderr."""
        fake = _fake_run(returncode=1, stderr=b"Syntax Error?")

        with patch("umlscope.services.renderer.subprocess.run", side_effect=fake):
            with pytest.raises(RenderError, match="Syntax Error"):
                PlantUmlRenderer().render(puml_file)

    def test_timeout(self, puml_file):
        """Test a hung PlantUML process is reported."""
        timeout = subprocess.TimeoutExpired(cmd="plantuml", timeout=60)

        with patch("umlscope.services.renderer.subprocess.run", side_effect=timeout):
            with pytest.raises(RenderError, match="timed out"):
                PlantUmlRenderer().render(puml_file)

    def test_os_error(self, puml_file):
        """Test a launcher that cannot start is reported."""
        with patch("umlscope.services.renderer.subprocess.run", side_effect=OSError("denied")):
            with pytest.raises(RenderError, match="denied"):
                PlantUmlRenderer().render(puml_file)

    def test_missing_puml_file(self, tmp_path):
        """Test rendering a missing file fails before PlantUML runs."""
        with patch("umlscope.services.renderer.subprocess.run") as run:
            with pytest.raises(FileNotFoundError):
                PlantUmlRenderer().render(tmp_path / "absent.puml")

        run.assert_not_called()


def test_render_unavailable(puml_file):
    """Test rendering without PlantUML raises RenderError."""
    with patch("umlscope.services.renderer.shutil.which", return_value=None):
        with pytest.raises(RenderError, match="PLANTUML_JAR_PATH"):
            PlantUmlRenderer().render(puml_file)
