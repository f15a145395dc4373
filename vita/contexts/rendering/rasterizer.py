"""
Rasterizer

Lays a RenderedDocument out on a white canvas with Pillow. Layout happens in two
passes: the typesetter first walks the document and records draw operations
while advancing a cursor (which gives the final canvas height), then the
operations are replayed onto an image of exactly that size.

All sizes in export_config.yaml are CSS pixels at scale 1 and are multiplied by
raster.scale, so scale 2 yields a 1588 px wide image for the default 794 px canvas.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from omegaconf import DictConfig
from PIL import Image, ImageDraw, ImageFont

from vita.contexts.rendering.config import load_export_config
from vita.contexts.rendering.exceptions import RenderError
from vita.contexts.rendering.logger import _log_debug
from vita.contexts.templating.rendered_document import (
    RenderedDocument,
    RenderedEntry,
    RenderedSection,
)

MIN_RASTER_SCALE = 2

# Draw operations recorded by the typesetter
_TEXT = "text"
_RULE = "rule"


class _Typesetter:
    """Records text/rule operations top to bottom for one canvas width."""

    def __init__(self, config: DictConfig, scale: float):
        self.config = config
        self.scale = scale
        self.width = round(config.canvas.width * scale)
        self.padding = round(config.canvas.padding * scale)
        self.content_width = self.width - 2 * self.padding
        if self.width <= 0 or self.content_width <= 0:
            raise RenderError(
                f"Canvas too small: width {config.canvas.width} with padding {config.canvas.padding}",
                stage="rasterize",
            )

        self.colors = config.colors
        self.ops: List[Tuple] = []
        self.y = self.padding
        self._fonts: Dict[Tuple[str, str], ImageFont.ImageFont] = {}
        self._measure = ImageDraw.Draw(Image.new("RGB", (1, 1)))

    # --- Primitives ---

    def font(self, style: str, size_key: str):
        key = (style, size_key)
        if key in self._fonts:
            return self._fonts[key]

        size = max(1, round(self.config.font_sizes[size_key] * self.scale))
        font_path = self.config.fonts.get(style)
        font = None
        if font_path:
            try:
                font = ImageFont.truetype(str(font_path), size)
            except OSError:
                _log_debug(f"Font '{font_path}' unavailable, using Pillow default for {style}")
        if font is None:
            font = ImageFont.load_default(size=size)

        self._fonts[key] = font
        return font

    def measure(self, text: str, font) -> float:
        return self._measure.textlength(text, font=font)

    def line_height(self, size_key: str) -> int:
        return round(self.config.font_sizes[size_key] * self.scale * self.config.spacing.line)

    def space(self, amount: float) -> None:
        self.y += round(amount * self.scale)

    def wrap(self, text: str, font, max_width: float) -> List[str]:
        """Greedy word wrap; a single word wider than max_width gets its own line."""
        lines = []
        for paragraph in text.splitlines() or [""]:
            words = paragraph.split()
            if not words:
                lines.append("")
                continue
            current = words[0]
            for word in words[1:]:
                candidate = f"{current} {word}"
                if self.measure(candidate, font) <= max_width:
                    current = candidate
                else:
                    lines.append(current)
                    current = word
            lines.append(current)
        return lines

    def paragraph(
        self,
        text: str,
        style: str = "regular",
        size_key: str = "body",
        color: str = "text",
        indent: int = 0,
        center: bool = False,
    ) -> None:
        font = self.font(style, size_key)
        fill = self.colors[color]
        for line in self.wrap(text, font, self.content_width - indent):
            if center:
                x = (self.width - self.measure(line, font)) / 2
            else:
                x = self.padding + indent
            if line:
                self.ops.append((_TEXT, (x, self.y), line, font, fill))
            self.y += self.line_height(size_key)

    def rule(self) -> None:
        self.ops.append((_RULE, self.y, self.colors.rule))
        self.space(6)

    # --- Document parts ---

    def header(self, name: str, contact: str) -> None:
        if name:
            self.paragraph(name, style="bold", size_key="name", color="heading", center=True)
        if contact:
            self.paragraph(contact, size_key="contact", color="muted", center=True)
        self.space(6)
        self.rule()

    def section(self, section: RenderedSection) -> None:
        self.paragraph(section.heading.upper(), style="bold", size_key="heading", color="heading")
        self.rule()
        if section.paragraph is not None:
            self.paragraph(section.paragraph)
        if section.tags:
            self.tags(section.tags)
        for entry in section.entries:
            self.entry(entry)
            self.space(self.config.spacing.entry)

    def tags(self, tags: Sequence[str]) -> None:
        """Flow tags left to right, wrapping at the content edge."""
        font = self.font("regular", "body")
        gap = round(self.config.spacing.tag_gap * self.scale)
        x = self.padding
        right = self.padding + self.content_width
        for tag in tags:
            width = self.measure(tag, font)
            if x > self.padding and x + width > right:
                self.y += self.line_height("body")
                x = self.padding
            self.ops.append((_TEXT, (x, self.y), tag, font, self.colors.text))
            x += width + gap
        self.y += self.line_height("body")

    def entry(self, entry: RenderedEntry) -> None:
        title_font = self.font("bold", "title")
        date_font = self.font("regular", "body")
        date_width = self.measure(entry.date_text, date_font) if entry.date_text else 0
        gap = round(12 * self.scale)

        if entry.date_text:
            x = self.padding + self.content_width - date_width
            self.ops.append((_TEXT, (x, self.y), entry.date_text, date_font, self.colors.muted))

        title_lines = self.wrap(entry.title, title_font, self.content_width - date_width - gap)
        for index, line in enumerate(title_lines):
            if line:
                self.ops.append((_TEXT, (self.padding, self.y), line, title_font, self.colors.text))
            if index < len(title_lines) - 1:
                self.y += self.line_height("title")

        if entry.link_label:
            link_font = self.font("regular", "body")
            x = self.padding + self.measure(title_lines[-1], title_font) + round(6 * self.scale)
            if title_lines[-1] and x + self.measure(entry.link_label, link_font) <= self.padding + self.content_width - date_width:
                self.ops.append((_TEXT, (x, self.y), entry.link_label, link_font, self.colors.link))
            else:
                self.y += self.line_height("title")
                self.ops.append((_TEXT, (self.padding, self.y), entry.link_label, link_font, self.colors.link))
        self.y += self.line_height("title")

        if entry.subtitle:
            self.paragraph(entry.subtitle, color="muted")
        for detail in entry.details:
            self.paragraph(detail, style="italic", color="muted")
        if entry.description.strip():
            self.paragraph(entry.description.strip())

    def layout(self, rendered: RenderedDocument) -> None:
        if not rendered.header.is_empty():
            self.header(rendered.header.name, rendered.header.contact)
        for index, section in enumerate(rendered.sections):
            if index or not rendered.header.is_empty():
                self.space(self.config.spacing.section)
            self.section(section)


def _check_scale(scale) -> float:
    if isinstance(scale, bool) or not isinstance(scale, (int, float)) or scale < MIN_RASTER_SCALE:
        raise RenderError(
            f"raster.scale must be a number >= {MIN_RASTER_SCALE}, got {scale!r}",
            stage="rasterize",
        )
    return float(scale)


def rasterize(rendered: RenderedDocument, config: Optional[DictConfig] = None) -> Image.Image:
    """
    Draw a rendered document onto an RGB image.

    Args:
        rendered: Output of render_document()
        config: Export config (defaults to load_export_config())

    Returns:
        Image whose width is canvas.width * raster.scale and whose height fits
        the content

    Raises:
        RenderError: Scale below 2, canvas too small, nothing to draw, or a
            Pillow failure
    """
    config = config if config is not None else load_export_config()
    scale = _check_scale(config.raster.scale)

    if not rendered.has_content():
        raise RenderError("Nothing to export: the document has no visible content", stage="rasterize")

    try:
        setter = _Typesetter(config, scale)
        setter.layout(rendered)
        height = setter.y + setter.padding

        image = Image.new("RGB", (setter.width, height), config.canvas.background)
        draw = ImageDraw.Draw(image)
        line_width = max(1, round(scale))
        for op in setter.ops:
            if op[0] == _TEXT:
                _, xy, text, font, fill = op
                draw.text(xy, text, font=font, fill=fill)
            else:
                _, y, fill = op
                draw.line(
                    [(setter.padding, y), (setter.width - setter.padding, y)],
                    fill=fill,
                    width=line_width,
                )
    except RenderError:
        raise
    except (OSError, ValueError, TypeError, MemoryError, Image.DecompressionBombError) as e:
        raise RenderError("Rasterization failed", stage="rasterize", original_error=e) from e

    _log_debug(f"Rasterized {len(rendered.sections)} sections to {image.width}x{image.height} px")
    return image
