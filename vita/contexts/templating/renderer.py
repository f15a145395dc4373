"""
Template Renderer

Turns a document's ordered blocks into a RenderedDocument and projects that onto
HTML (jinja2) or plain text.

Rendering is a pure function of (blocks, layout): blocks are visited in ascending
order, blocks with empty content are skipped, and every present type goes through
its rule in SECTION_RULES. Nothing here touches the BlockStore.
"""

from typing import Callable, Dict, Iterable, List, Optional, Union

from vita.contexts.editing.block_store import BlockStore
from vita.contexts.editing.blocks import (
    Block,
    BlockContent,
    BlockType,
    CertificationContent,
    Document,
    EducationContent,
    ExperienceContent,
    ProjectContent,
    SkillsContent,
    SummaryContent,
    ensure_covers_all_types,
)
from vita.contexts.templating.date_formatting import (
    format_certification_dates,
    format_date_range,
)
from vita.contexts.templating.logger import log_render_summary
from vita.contexts.templating.registries import (
    DEFAULT_TEMPLATE_ID,
    LayoutRegistry,
    TemplateLayout,
    TemplateRegistry,
)
from vita.contexts.templating.rendered_document import (
    RenderedDocument,
    RenderedEntry,
    RenderedHeader,
    RenderedSection,
)

_layout_registry = LayoutRegistry()
_template_registry = TemplateRegistry()


def _join(*parts: str, separator: str = ", ") -> str:
    return separator.join(part.strip() for part in parts if part and part.strip())


# --- Per-type section rules ---


def _render_summary(content: SummaryContent, layout: TemplateLayout) -> RenderedSection:
    return RenderedSection(
        block_type=BlockType.SUMMARY,
        heading=layout.heading(BlockType.SUMMARY),
        paragraph=content.text.strip(),
    )


def _render_skills(content: SkillsContent, layout: TemplateLayout) -> RenderedSection:
    return RenderedSection(
        block_type=BlockType.SKILLS,
        heading=layout.heading(BlockType.SKILLS),
        tags=content.skills,
    )


def _render_experience(content: ExperienceContent, layout: TemplateLayout) -> RenderedSection:
    entries = tuple(
        RenderedEntry(
            title=item.job_title,
            subtitle=_join(item.company, item.location),
            date_text=format_date_range(item.start_date, item.end_date, item.current),
            description=item.description,
        )
        for item in content.items
    )
    return RenderedSection(
        block_type=BlockType.EXPERIENCE,
        heading=layout.heading(BlockType.EXPERIENCE),
        entries=entries,
    )


def _render_education(content: EducationContent, layout: TemplateLayout) -> RenderedSection:
    entries = []
    for item in content.items:
        details = ()
        if item.gpa.strip():
            details = (f"{layout.label('gpa')} {item.gpa.strip()}",)
        entries.append(
            RenderedEntry(
                title=item.degree,
                subtitle=_join(item.institution, item.location),
                date_text=format_date_range(item.start_date, item.end_date, item.current),
                details=details,
                description=item.description,
            )
        )
    return RenderedSection(
        block_type=BlockType.EDUCATION,
        heading=layout.heading(BlockType.EDUCATION),
        entries=tuple(entries),
    )


def _render_project(content: ProjectContent, layout: TemplateLayout) -> RenderedSection:
    entries = tuple(
        RenderedEntry(
            title=item.title,
            date_text=format_date_range(item.start_date, item.end_date, item.current),
            details=(item.technologies.strip(),) if item.technologies.strip() else (),
            description=item.description,
            link_label=layout.label("project_link") if item.link.strip() else "",
            link_url=item.link.strip(),
        )
        for item in content.items
    )
    return RenderedSection(
        block_type=BlockType.PROJECT,
        heading=layout.heading(BlockType.PROJECT),
        entries=entries,
    )


def _render_certification(content: CertificationContent, layout: TemplateLayout) -> RenderedSection:
    entries = []
    for item in content.items:
        details = ()
        if item.credential_id.strip():
            details = (f"{layout.label('credential_id')} {item.credential_id.strip()}",)
        entries.append(
            RenderedEntry(
                title=item.name,
                subtitle=item.issuer,
                date_text=format_certification_dates(
                    item.date, item.expiration_date, item.no_expiration
                ),
                details=details,
                description=item.description,
                link_label=layout.label("credential_link") if item.credential_url.strip() else "",
                link_url=item.credential_url.strip(),
            )
        )
    return RenderedSection(
        block_type=BlockType.CERTIFICATION,
        heading=layout.heading(BlockType.CERTIFICATION),
        entries=tuple(entries),
    )


SECTION_RULES: Dict[BlockType, Callable[[BlockContent, TemplateLayout], RenderedSection]] = {
    BlockType.SUMMARY: _render_summary,
    BlockType.SKILLS: _render_skills,
    BlockType.EXPERIENCE: _render_experience,
    BlockType.EDUCATION: _render_education,
    BlockType.PROJECT: _render_project,
    BlockType.CERTIFICATION: _render_certification,
}
ensure_covers_all_types(SECTION_RULES, "SECTION_RULES")


# --- Entry points ---


def render_document(
    document_or_blocks: Union[Document, BlockStore, Iterable[Block]],
    layout: Optional[TemplateLayout] = None,
) -> RenderedDocument:
    """
    Render blocks into the display model.

    Args:
        document_or_blocks: A Document, a BlockStore or any iterable of Blocks
        layout: Template layout (defaults to the document's template, or classic)

    Returns:
        RenderedDocument with one section per non-empty block, in block order

    Example:
        >>> rendered = render_document(session.snapshot())
        >>> [s.heading for s in rendered.sections]
        ['Professional Summary', 'Experience']
    """
    if isinstance(document_or_blocks, Document):
        title = document_or_blocks.title
        template_id = document_or_blocks.template_id
        blocks = document_or_blocks.blocks
    else:
        title = ""
        template_id = layout.template_id if layout else DEFAULT_TEMPLATE_ID
        blocks = tuple(document_or_blocks)

    if layout is None:
        layout = _layout_registry.get_layout(template_id)

    sections: List[RenderedSection] = []
    skipped: List[str] = []
    for block in sorted(blocks, key=lambda b: b.order):
        if block.is_empty():
            skipped.append(block.block_type.value)
            continue
        sections.append(SECTION_RULES[block.block_type](block.content, layout))

    log_render_summary(title, layout.template_id, [s.block_type.value for s in sections], skipped)

    return RenderedDocument(
        title=title,
        template_id=layout.template_id,
        header=RenderedHeader(name=layout.name, contact=layout.contact),
        sections=tuple(sections),
    )


def render_html(rendered: RenderedDocument, registry: Optional[TemplateRegistry] = None) -> str:
    """Render the HTML preview for a rendered document (user text is escaped)."""
    registry = registry or _template_registry
    template = registry.get_template(rendered.template_id)
    return template.render(document=rendered)


def render_text(rendered: RenderedDocument) -> str:
    """
    Plain-text projection, used by the CLI preview.

    Example output:
        John Doe
        San Francisco, CA | (555) 123-4567

        PROFESSIONAL SUMMARY
        Engineer with ten years of ...
    """
    lines: List[str] = []
    if rendered.header.name:
        lines.append(rendered.header.name)
    if rendered.header.contact:
        lines.append(rendered.header.contact)

    for section in rendered.sections:
        if lines:
            lines.append("")
        lines.append(section.heading.upper())
        if section.paragraph is not None:
            lines.append(section.paragraph)
        if section.tags:
            lines.append(", ".join(section.tags))
        for entry in section.entries:
            headline = _join(entry.title, entry.subtitle, separator=" | ")
            if entry.date_text:
                headline = _join(headline, entry.date_text, separator="  ")
            lines.append(headline)
            lines.extend(f"  {detail}" for detail in entry.details)
            if entry.link_url:
                lines.append(f"  {entry.link_label} {entry.link_url}")
            if entry.description.strip():
                lines.extend(f"  {line}" for line in entry.description.strip().splitlines())

    return "\n".join(lines)
