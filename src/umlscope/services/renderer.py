"""
PlantUML rendering: ``.puml`` file -> image files.

Runs a local PlantUML installation on a diagram file; PlantUML writes the
image(s) next to the source file.

PlantUML location resolution order:
  1. ``RenderConfig.jar_path`` (explicit configuration)
  2. PLANTUML_JAR_PATH env var
  3. A ``plantuml`` executable on PATH

A jar is run with ``java -Djava.awt.headless=true -jar <jar> -t<format>``,
which requires ``java`` on PATH.
"""

import os
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from ..config import RenderConfig
from ..constants import ErrorMessage, PLANTUML_EXECUTABLE, PLANTUML_JAR_ENV_VAR
from ..logging import get_logger

logger = get_logger(__name__)


class RenderError(RuntimeError):
    """PlantUML is unavailable or failed to produce an image."""


class PlantUmlRenderer:
    """Renders diagram files with PlantUML."""

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config or RenderConfig()

    def _resolve_jar_path(self) -> Optional[Path]:
        """Return the PlantUML JAR path if it exists, else None."""
        if self.config.jar_path is not None:
            return self.config.jar_path if self.config.jar_path.is_file() else None
        env_path = os.environ.get(PLANTUML_JAR_ENV_VAR)
        if env_path:
            path = Path(env_path)
            return path if path.is_file() else None
        return None

    def _base_command(self) -> Optional[list[str]]:
        jar_path = self._resolve_jar_path()
        if jar_path is not None:
            java = shutil.which(self.config.java_executable)
            if java is None:
                logger.info(
                    "Java not in PATH, PlantUML JAR present but unusable",
                    extra={"jar_path": str(jar_path)},
                )
                return None
            return [java, "-Djava.awt.headless=true", "-jar", str(jar_path)]

        executable = shutil.which(PLANTUML_EXECUTABLE)
        if executable is not None:
            return [executable]
        return None

    def is_available(self) -> bool:
        return self._base_command() is not None

    def render(self, puml_file: Path) -> list[Path]:
        """
        Render one diagram file to images in the same directory.

        Args:
            puml_file: PlantUML source file

        Returns:
            Paths of the produced images

        Raises:
            FileNotFoundError: If the diagram file does not exist
            RenderError: If PlantUML is unavailable, fails, times out, or
                         produces no image
        """
        puml_file = Path(puml_file)
        if not puml_file.is_file():
            raise FileNotFoundError(f"PUML file not found at: {puml_file}")

        base_command = self._base_command()
        if base_command is None:
            raise RenderError(ErrorMessage.PLANTUML_UNAVAILABLE.format(env_var=PLANTUML_JAR_ENV_VAR))

        suffix = self.config.image_format.value
        self._clear_stale_images(puml_file, suffix)
        command = base_command + [f"-t{suffix}", str(puml_file)]

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                timeout=self.config.timeout_seconds,
            )
        except subprocess.TimeoutExpired as e:
            raise RenderError(
                f"PlantUML timed out after {self.config.timeout_seconds}s: {puml_file}"
            ) from e
        except OSError as e:
            raise RenderError(f"PlantUML execution failed: {e}") from e

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise RenderError(
                f"PlantUML failed for {puml_file} (exit={result.returncode}): "
                f"{stderr[:300] if stderr else '(empty)'}"
            )

        images = self._find_images(puml_file, suffix)
        if not images:
            raise RenderError(ErrorMessage.NO_IMAGES_GENERATED.format(path=puml_file))

        for image in images:
            logger.info("Generated diagram image", extra={"image": str(image)})
        return images

    def _find_images(self, puml_file: Path, suffix: str) -> list[Path]:
        # Multi-page diagrams are written as <stem>_001.<suffix>, <stem>_002...
        stem = puml_file.stem
        single = puml_file.with_suffix(f".{suffix}")
        pages = sorted(puml_file.parent.glob(f"{stem}_[0-9][0-9][0-9].{suffix}"))
        return ([single] if single.is_file() else []) + pages

    def _clear_stale_images(self, puml_file: Path, suffix: str) -> None:
        for image in self._find_images(puml_file, suffix):
            image.unlink()
