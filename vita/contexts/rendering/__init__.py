"""
Rendering Context

Responsibilities:
- Rasterizes rendered documents with Pillow
- Fits the raster onto a single portrait page (A4 or Letter)
- Writes PDFs with reportlab, atomically

Owns: Export configuration, PDF files
Never: Decides what a block looks like (see templating)
"""

from vita.contexts.rendering.config import load_export_config
from vita.contexts.rendering.exceptions import RenderError
from vita.contexts.rendering.exporter import (
    ExportResult,
    export_document,
    export_filename,
    export_pdf,
)
from vita.contexts.rendering.page_fit import PageFit, compute_page_fit, page_size
from vita.contexts.rendering.rasterizer import rasterize

__all__ = [
    "ExportResult",
    "PageFit",
    "RenderError",
    "compute_page_fit",
    "export_document",
    "export_filename",
    "export_pdf",
    "load_export_config",
    "page_size",
    "rasterize",
]
