"""
Page fitting.

Places a raster image on a fixed-size page: scaled uniformly until it touches
the page on one axis, centred horizontally, aligned to the top edge.
"""

from dataclasses import dataclass
from typing import Tuple

from reportlab.lib.pagesizes import A4, letter

from vita.contexts.rendering.exceptions import RenderError

# Portrait page sizes in PDF points
PAGE_SIZES = {
    "a4": A4,
    "letter": letter,
}


@dataclass(frozen=True)
class PageFit:
    """
    Placement of the image on the page (points, origin at the top-left corner).

    Attributes:
        scale: Image pixels -> page points factor
        width: Placed width
        height: Placed height
        x: Left offset (centres the image horizontally)
        y: Top offset (always 0: content starts at the top edge)
    """

    scale: float
    width: float
    height: float
    x: float
    y: float


def page_size(page_format: str) -> Tuple[float, float]:
    """Portrait (width, height) in points for a page format name."""
    try:
        return PAGE_SIZES[str(page_format).lower()]
    except KeyError:
        raise RenderError(
            f"Unknown page format '{page_format}'. Valid formats: {', '.join(PAGE_SIZES)}",
            stage="config",
        ) from None


def compute_page_fit(image_width: float, image_height: float, page_width: float, page_height: float) -> PageFit:
    """
    Fit an image onto a page preserving its aspect ratio.

    Example:
        >>> fit = compute_page_fit(2000, 3000, 1000, 1400)
        >>> round(fit.scale, 4), round(fit.width), fit.y
        (0.4667, 933, 0)

    Raises:
        RenderError: If any dimension is zero or negative
    """
    for name, value in (
        ("image width", image_width),
        ("image height", image_height),
        ("page width", page_width),
        ("page height", page_height),
    ):
        if value <= 0:
            raise RenderError(f"Cannot fit page: {name} must be positive, got {value}", stage="page_fit")

    scale = min(page_width / image_width, page_height / image_height)
    width = image_width * scale
    height = image_height * scale
    return PageFit(scale=scale, width=width, height=height, x=(page_width - width) / 2, y=0)
