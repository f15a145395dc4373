"""
Editing Session

One open document: its title and template, the BlockStore, one cached editor
per block type, and which block's editor panel is expanded. The session is the
only place that talks to the repository and the export pipeline on the
document's behalf.

Usage:
    from vita.contexts.editing.session import EditingSession

    session = EditingSession.new("Senior Engineer")
    session.editor("summary").set_text("Engineer with ten years of ...")
    session.move_block("skills", "down")
    session.save()
"""

from pathlib import Path
from typing import Dict, List, Optional

from omegaconf import DictConfig

from vita.contexts.assist.service import TextImprovementService
from vita.contexts.editing.block_store import BlockStore
from vita.contexts.editing.blocks import (
    Block,
    BlockType,
    Document,
    default_content,
    parse_block_type,
)
from vita.contexts.editing.editors import InFlightGuard, SectionEditor, get_editor
from vita.contexts.editing.exceptions import NotFoundError, ServiceError
from vita.contexts.editing.logger import _log_debug, _log_info
from vita.contexts.persistence.adapter import DocumentRepository
from vita.contexts.rendering.exporter import ExportResult, export_document
from vita.contexts.templating.registries import TemplateLayout
from vita.contexts.templating.rendered_document import RenderedDocument
from vita.contexts.templating.renderer import render_document

DEFAULT_TITLE = "Untitled Resume"
DEFAULT_TEMPLATE_ID = "classic"


def default_blocks() -> List[Block]:
    """All six block types with empty content, in declaration order."""
    return [Block(block_type=t, content=default_content(t), order=i) for i, t in enumerate(BlockType)]


class EditingSession:
    """
    Editing state for one document.

    Args:
        document: Document to edit (default: a new untitled document with every block)
        repository: Where save() writes (None: saving raises ServiceError)
        assist: AI text service shared by all editors (None: AI-assist disabled)
    """

    def __init__(
        self,
        document: Optional[Document] = None,
        repository: Optional[DocumentRepository] = None,
        assist: Optional[TextImprovementService] = None,
    ):
        if document is None:
            document = Document(id=None, title=DEFAULT_TITLE, blocks=tuple(default_blocks()))

        self.document_id: Optional[str] = document.id
        self.title: str = document.title
        self.template_id: str = document.template_id
        self.store = BlockStore(document.blocks)
        self.repository = repository
        self.assist = assist
        self.guard = InFlightGuard()
        self.expanded: Optional[BlockType] = None
        self._editors: Dict[BlockType, SectionEditor] = {}

    # --- Construction ---

    @classmethod
    def new(
        cls,
        title: str = DEFAULT_TITLE,
        repository: Optional[DocumentRepository] = None,
        assist: Optional[TextImprovementService] = None,
    ) -> "EditingSession":
        """Start an unsaved document with all six blocks present and empty."""
        document = Document(id=None, title=title, blocks=tuple(default_blocks()))
        return cls(document, repository=repository, assist=assist)

    @classmethod
    def load(
        cls,
        repository: DocumentRepository,
        document_id: str,
        assist: Optional[TextImprovementService] = None,
    ) -> "EditingSession":
        """
        Open a stored document.

        Stored order values are not trusted; see BlockStore.from_records.

        Raises:
            NotFoundError: Unknown document id
            ServiceError: Storage failure
            ValidationError: Stored blocks are malformed
        """
        stored = repository.get(document_id)
        store = BlockStore.from_records(stored.blocks)
        document = Document(
            id=stored.id,
            title=stored.title,
            template_id=stored.template_id,
            blocks=store.blocks,
        )
        _log_info(f"Loaded '{stored.title}' ({len(store)} blocks)")
        return cls(document, repository=repository, assist=assist)

    # --- Editors and selection ---

    def editor(self, block_type) -> SectionEditor:
        """The editor for a block type (one instance per type per session)."""
        block_type = parse_block_type(block_type)
        if block_type not in self._editors:
            self._editors[block_type] = get_editor(
                self.store, block_type, assist=self.assist, guard=self.guard
            )
        return self._editors[block_type]

    def expand(self, block_type) -> None:
        """Open a block's editor panel (closing any other)."""
        block_type = parse_block_type(block_type)
        if not self.store.has_block(block_type):
            raise NotFoundError("block", block_type.value)
        self.expanded = block_type

    def collapse(self) -> None:
        self.expanded = None

    # --- Structural operations ---

    def add_block(self, block_type) -> Block:
        return self.store.add_block(block_type)

    def remove_block(self, block_type) -> Block:
        """
        Remove a block, re-targeting the expanded panel if it was this block.

        The selection moves to the block that now occupies the removed block's
        position, else to the previous block, else to nothing.
        """
        block_type = parse_block_type(block_type)
        position = self.store.types.index(block_type) if self.store.has_block(block_type) else None
        removed = self.store.remove_block(block_type)

        if self.expanded is block_type:
            remaining = self.store.types
            if position < len(remaining):
                self.expanded = remaining[position]
            elif remaining:
                self.expanded = remaining[-1]
            else:
                self.expanded = None
            _log_debug(f"expanded panel moved to {self.expanded.value if self.expanded else 'none'}")

        return removed

    def toggle_block(self, block_type) -> bool:
        """Add the block if absent, remove it if present. Returns True if now present."""
        block_type = parse_block_type(block_type)
        if self.store.has_block(block_type):
            self.remove_block(block_type)
            return False
        self.add_block(block_type)
        return True

    def move_block(self, block_type, direction) -> bool:
        return self.store.move_block(block_type, direction)

    # --- Document-level operations ---

    def snapshot(self) -> Document:
        """Immutable copy of the current document."""
        return Document(
            id=self.document_id,
            title=self.title,
            template_id=self.template_id,
            blocks=self.store.blocks,
        )

    def validate(self) -> List[str]:
        """
        Required fields left blank, as "type[index].field" strings.

        Saving does not require these; the list backs the editor's warnings.
        """
        missing = [] if self.title.strip() else ["title"]
        for block_type in self.store.types:
            missing.extend(self.editor(block_type).missing_required_fields())
        return missing

    def save(self) -> str:
        """
        Write the whole document to the repository.

        Creates it on first save and updates it afterwards. On failure the
        session is unchanged (an unsaved document stays unsaved).

        Returns:
            Document id

        Raises:
            ValidationError: Blank title or unknown template
            ServiceError: No repository configured, or storage failure
        """
        if self.repository is None:
            raise ServiceError("No document repository configured", service="storage")

        records = self.store.to_records()
        if self.document_id is None:
            self.document_id = self.repository.create(
                self.title, records, template_id=self.template_id
            )
        else:
            self.repository.update(
                self.document_id, title=self.title, blocks=records, template_id=self.template_id
            )
        _log_info(f"Saved '{self.title}' ({len(records)} blocks)")
        return self.document_id

    def render(self, layout: Optional[TemplateLayout] = None) -> RenderedDocument:
        return render_document(self.snapshot(), layout=layout)

    def export_pdf(
        self,
        output_dir: Optional[Path] = None,
        config: Optional[DictConfig] = None,
        layout: Optional[TemplateLayout] = None,
        log_dir: Optional[Path] = None,
    ) -> ExportResult:
        """Export the current state (saved or not) to {output_dir}/{Title}.pdf."""
        return export_document(
            self.snapshot(), output_dir=output_dir, config=config, layout=layout, log_dir=log_dir
        )
