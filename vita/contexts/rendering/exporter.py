"""
PDF Export Module

Rasterizes a rendered document, fits the image onto a single portrait page and
writes it as a PDF with reportlab.

The PDF is written to a temporary file next to the destination and moved into
place with os.replace, so the output path either holds a complete PDF or is
left exactly as it was.
"""

import io
import os
import re
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv
from omegaconf import DictConfig
from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from vita.contexts.editing.blocks import Document
from vita.contexts.rendering.config import load_export_config
from vita.contexts.rendering.exceptions import RenderError
from vita.contexts.rendering.logger import (
    _log_debug,
    log_export_failure,
    log_export_result,
    log_export_start,
    setup_rendering_logger,
)
from vita.contexts.rendering.page_fit import PageFit, compute_page_fit, page_size
from vita.contexts.rendering.rasterizer import rasterize
from vita.contexts.templating.registries import TemplateLayout
from vita.contexts.templating.rendered_document import RenderedDocument
from vita.contexts.templating.renderer import render_document
from vita.utils.pdf_processing import page_count
from vita.utils.timestamp import now

load_dotenv()

EXPORTS_PATH = Path(os.getenv("VITA_EXPORTS_PATH", "outs/exports"))
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

DEFAULT_FILENAME = "Resume.pdf"


@dataclass
class ExportResult:
    """
    Result of a PDF export.

    Attributes:
        pdf_path: Path to the written PDF
        page_size: (width, height) of the page in points
        image_size: (width, height) of the raster in pixels
        fit: Where the raster was placed on the page
        page_count: Pages in the written PDF (None if it could not be read back)
    """

    pdf_path: Path
    page_size: Tuple[float, float]
    image_size: Tuple[int, int]
    fit: PageFit
    page_count: Optional[int] = None


def export_filename(title: str) -> str:
    """
    Build the download filename for a document title.

    Examples:
        >>> export_filename("Senior Engineer Resume")
        'Senior_Engineer_Resume.pdf'
        >>> export_filename("   ")
        'Resume.pdf'
    """
    stem = re.sub(r"\s+", "_", (title or "").strip())
    stem = re.sub(r"[\\/]", "_", stem)
    if not stem:
        return DEFAULT_FILENAME
    return f"{stem}.pdf"


def _encode_jpeg(image: Image.Image, quality: int) -> io.BytesIO:
    buffer = io.BytesIO()
    image.convert("RGB").save(buffer, format="JPEG", quality=int(quality))
    buffer.seek(0)
    return buffer


def _write_pdf(
    image: Image.Image,
    output_path: Path,
    page: Tuple[float, float],
    fit: PageFit,
    config: DictConfig,
    title: str,
) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        dir=output_path.parent, prefix=f".{output_path.stem}.", suffix=".pdf.tmp"
    )
    os.close(fd)
    tmp_path = Path(tmp_name)

    try:
        pdf = canvas.Canvas(str(tmp_path), pagesize=page)
        pdf.setTitle(title or "Resume")
        # reportlab's origin is the bottom-left corner; fit.y is measured from the top
        pdf.drawImage(
            ImageReader(_encode_jpeg(image, config.raster.jpeg_quality)),
            fit.x,
            page[1] - fit.y - fit.height,
            width=fit.width,
            height=fit.height,
        )
        pdf.showPage()
        pdf.save()
        os.replace(tmp_path, output_path)
    except (OSError, ValueError) as e:
        raise RenderError(f"Could not write PDF to {output_path}", stage="write", original_error=e) from e
    finally:
        if tmp_path.exists():
            tmp_path.unlink()


def export_pdf(
    rendered: RenderedDocument,
    output_path: Path,
    config: Optional[DictConfig] = None,
) -> ExportResult:
    """
    Write a rendered document to a one-page PDF.

    Pure export function: no logger setup, no default output directory.

    Args:
        rendered: Output of render_document()
        output_path: Destination .pdf path (parent directories are created)
        config: Export config (defaults to load_export_config())

    Returns:
        ExportResult describing the written file

    Raises:
        RenderError: If any stage fails; nothing is written to output_path
    """
    config = config if config is not None else load_export_config()
    output_path = Path(output_path)

    image = rasterize(rendered, config)
    page = page_size(config.page.format)
    fit = compute_page_fit(image.width, image.height, page[0], page[1])
    _log_debug(f"Page {page[0]:.1f}x{page[1]:.1f}pt, scale {fit.scale:.4f}")

    _write_pdf(image, output_path, page, fit, config, rendered.title)

    return ExportResult(
        pdf_path=output_path,
        page_size=page,
        image_size=(image.width, image.height),
        fit=fit,
        page_count=page_count(output_path),
    )


def export_document(
    document: Document,
    output_dir: Optional[Path] = None,
    config: Optional[DictConfig] = None,
    layout: Optional[TemplateLayout] = None,
    log_dir: Optional[Path] = None,
) -> ExportResult:
    """
    Render and export a document with logging and organized output.

    Orchestration function that wraps export_pdf(): creates a timestamped log
    directory, renders the document, writes {output_dir}/{export_filename(title)}
    and logs the outcome.

    Args:
        document: Document snapshot to export
        output_dir: Output directory (default: VITA_EXPORTS_PATH)
        config: Export config (defaults to load_export_config())
        layout: Template layout override (defaults to the document's template)
        log_dir: Log directory (default: LOGS_PATH/export_<timestamp>)

    Returns:
        ExportResult for the written PDF

    Raises:
        RenderError: Logged, then re-raised
    """
    config = config if config is not None else load_export_config()
    output_dir = Path(output_dir) if output_dir is not None else EXPORTS_PATH
    if log_dir is None:
        log_dir = LOGS_PATH / f"export_{now()}"

    log_file = setup_rendering_logger(log_dir, page_format=str(config.page.format))
    output_path = output_dir / export_filename(document.title)
    log_export_start(document.title, output_path, str(config.page.format), log_file)

    start_time = time.time()
    try:
        try:
            rendered = render_document(document, layout=layout)
        except (FileNotFoundError, ValueError) as e:
            raise RenderError(
                f"Could not load layout for template '{document.template_id}'",
                stage="layout",
                original_error=e,
            ) from e
        result = export_pdf(rendered, output_path, config=config)
    except RenderError as e:
        log_export_failure(document.title, e)
        raise

    log_export_result(document.title, result, time.time() - start_time)
    return result
