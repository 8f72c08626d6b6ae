"""HTML index of generated diagram images, rendered with Jinja2."""

import shutil
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..constants import HTML_IMAGES_DIRNAME, HTML_INDEX_FILENAME, IMAGE_SUFFIXES
from ..logging import get_logger

logger = get_logger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"
INDEX_TEMPLATE = "index.html.j2"


class HtmlDocGenerator:
    """Copies diagram images into a doc directory and writes an index page."""

    def __init__(self, title: str = "UML Diagrams Documentation"):
        self.title = title
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=select_autoescape(["html", "j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def find_images(self, output_dir: Path) -> list[Path]:
        return sorted(
            path for path in Path(output_dir).rglob("*")
            if path.is_file() and path.suffix.lower() in IMAGE_SUFFIXES
        )

    def render(self, image_names: list[str]) -> str:
        template = self.env.get_template(INDEX_TEMPLATE)
        return template.render(
            title=self.title,
            images=image_names,
            images_dirname=HTML_IMAGES_DIRNAME,
        )

    def generate(self, output_dir: Path, htmldoc_dir: Optional[Path] = None) -> Path:
        """
        Build the documentation directory for all images under ``output_dir``.

        Args:
            output_dir: Directory searched (recursively) for diagram images
            htmldoc_dir: Documentation directory (default ``./htmldoc``)

        Returns:
            Path of the written index page

        Raises:
            ValueError: If ``output_dir`` is not an existing directory
        """
        output_dir = Path(output_dir)
        if not output_dir.is_dir():
            raise ValueError(
                f"The output directory does not exist or is not a directory: {output_dir}"
            )

        htmldoc_dir = Path(htmldoc_dir or "htmldoc")
        images_dir = htmldoc_dir / HTML_IMAGES_DIRNAME
        images_dir.mkdir(parents=True, exist_ok=True)

        # A doc directory inside the output directory must not index its own copies
        images_root = images_dir.resolve()
        images = [
            image for image in self.find_images(output_dir)
            if images_root not in image.resolve().parents
        ]
        for image in images:
            shutil.copy2(image, images_dir / image.name)

        index_file = htmldoc_dir / HTML_INDEX_FILENAME
        index_file.write_text(self.render([image.name for image in images]), encoding="utf-8")

        logger.info(
            "HTML documentation generated",
            extra={"index": str(index_file), "image_count": len(images)},
        )
        return index_file
