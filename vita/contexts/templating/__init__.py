"""
Templating Context

Responsibilities:
- Projects ordered blocks onto a display-ready RenderedDocument
- Formats dates, headings and labels per template layout (layout.yaml)
- Renders HTML previews through Jinja2 templates

Owns: Template layouts, HTML templates, date formatting
Never: Mutates blocks, rasterizes or writes PDFs
"""

from vita.contexts.templating.date_formatting import (
    format_certification_dates,
    format_date_range,
    format_month,
)
from vita.contexts.templating.registries import LayoutRegistry, TemplateLayout, TemplateRegistry
from vita.contexts.templating.rendered_document import (
    RenderedDocument,
    RenderedEntry,
    RenderedHeader,
    RenderedSection,
)
from vita.contexts.templating.renderer import render_document, render_html, render_text

__all__ = [
    "LayoutRegistry",
    "RenderedDocument",
    "RenderedEntry",
    "RenderedHeader",
    "RenderedSection",
    "TemplateLayout",
    "TemplateRegistry",
    "format_certification_dates",
    "format_date_range",
    "format_month",
    "render_document",
    "render_html",
    "render_text",
]
