"""
Rendered document model.

Template-independent, display-ready projection of a resume: every date is
formatted, every label resolved, empty blocks dropped. The HTML preview, the
plain-text view and the rasterizer all consume this model, so they agree on
what is shown.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from vita.contexts.editing.blocks import BlockType


@dataclass(frozen=True)
class RenderedEntry:
    """One job, degree, project or certificate line group."""

    title: str
    subtitle: str = ""
    date_text: str = ""
    details: Tuple[str, ...] = ()
    description: str = ""
    link_label: str = ""
    link_url: str = ""


@dataclass(frozen=True)
class RenderedSection:
    """
    One visible block.

    Exactly one of paragraph (summary), tags (skills) or entries (list blocks)
    carries the body.
    """

    block_type: BlockType
    heading: str
    paragraph: Optional[str] = None
    tags: Tuple[str, ...] = ()
    entries: Tuple[RenderedEntry, ...] = ()


@dataclass(frozen=True)
class RenderedHeader:
    name: str
    contact: str

    def is_empty(self) -> bool:
        return not (self.name.strip() or self.contact.strip())


@dataclass(frozen=True)
class RenderedDocument:
    title: str
    template_id: str
    header: RenderedHeader
    sections: Tuple[RenderedSection, ...] = ()

    def has_content(self) -> bool:
        """Whether there is anything to draw at all."""
        return bool(self.sections) or not self.header.is_empty()

    @property
    def section_types(self) -> Tuple[BlockType, ...]:
        return tuple(section.block_type for section in self.sections)
