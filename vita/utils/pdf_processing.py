"""
PDF inspection utilities.

Helper functions:
    page_count: Quick page count without full extraction.
    page_sizes: Width/height of every page in PDF points.
    image_placements: Where each embedded image sits on its page.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

import pdfplumber
from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError


@dataclass
class ImagePlacement:
    """
    Placement of an embedded image, in PDF points with a top-left origin.

    Attributes:
        page: Page number (1-indexed)
        x0: Left edge
        top: Distance from the top of the page to the image's top edge
        width: Drawn width
        height: Drawn height
    """

    page: int
    x0: float
    top: float
    width: float
    height: float


def page_count(pdf_path: Path) -> Optional[int]:
    """Get page count from PDF, or None if unreadable."""
    try:
        reader = PdfReader(str(pdf_path))
        return len(reader.pages)
    except (OSError, PdfReadError):
        return None


def page_sizes(pdf_path: Path) -> List[Tuple[float, float]]:
    """Return (width, height) in points for each page."""
    with pdfplumber.open(pdf_path) as pdf:
        return [(float(page.width), float(page.height)) for page in pdf.pages]


def image_placements(pdf_path: Path) -> List[ImagePlacement]:
    """
    List embedded images with their drawn position and size.

    Args:
        pdf_path: Path to PDF file

    Returns:
        One ImagePlacement per image, in page order
    """
    placements = []
    with pdfplumber.open(pdf_path) as pdf:
        for page_num, page in enumerate(pdf.pages, start=1):
            for image in page.images:
                placements.append(
                    ImagePlacement(
                        page=page_num,
                        x0=float(image["x0"]),
                        top=float(image["top"]),
                        width=float(image["x1"]) - float(image["x0"]),
                        height=float(image["bottom"]) - float(image["top"]),
                    )
                )
    return placements
