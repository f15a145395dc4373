"""
Document Persistence Adapter

Storage boundary for resume documents. The editing side only ever talks to
DocumentRepository; YamlDocumentRepository is the bundled implementation.

Storage layout (one file per document):
    {root}/{document_id}.yaml

    id: 3f2a...
    title: Senior Engineer
    template_id: classic
    created_at: '2025-11-14T12:34:56.123456'
    updated_at: '2025-11-14T12:40:02.654321'
    blocks:
      - type: summary
        order: 0
        content: {text: ...}

Block records are stored as given; their `order` is not trusted on the way back
in (see BlockStore.from_records).
"""

import os
import re
import shutil
import tempfile
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml
from dotenv import load_dotenv

from vita.contexts.editing.blocks import Block
from vita.contexts.editing.exceptions import NotFoundError, ServiceError, ValidationError
from vita.contexts.persistence.logger import _log_debug, _log_warning, log_document_event
from vita.contexts.templating.registries import available_templates
from vita.utils.timestamp import now_exact

load_dotenv()
DOCUMENTS_PATH = Path(os.getenv("VITA_DOCUMENTS_PATH", "outs/documents"))

COPY_SUFFIX = " (Copy)"
_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


@dataclass
class StoredDocument:
    """A document as read back from storage."""

    id: str
    title: str
    blocks: List[Dict[str, Any]] = field(default_factory=list)
    template_id: str = "classic"
    created_at: str = ""
    updated_at: str = ""


@dataclass
class DocumentSummary:
    """Listing row for a stored document."""

    id: str
    title: str
    updated_at: str
    block_count: int


class DocumentRepository(ABC):
    """Abstract document store."""

    @abstractmethod
    def create(self, title: str, blocks: Sequence, template_id: str = "classic") -> str:
        """Store a new document and return its id."""

    @abstractmethod
    def get(self, document_id: str) -> StoredDocument:
        """Load one document."""

    @abstractmethod
    def update(
        self,
        document_id: str,
        title: Optional[str] = None,
        blocks: Optional[Sequence] = None,
        template_id: Optional[str] = None,
    ) -> StoredDocument:
        """Replace any subset of title, blocks and template."""

    @abstractmethod
    def delete(self, document_id: str) -> None:
        """Remove a document."""

    @abstractmethod
    def list_all(self) -> List[DocumentSummary]:
        """All documents, most recently updated first."""

    def duplicate(self, document_id: str) -> str:
        """Copy a document under the title '<title> (Copy)' and return the new id."""
        original = self.get(document_id)
        return self.create(
            f"{original.title}{COPY_SUFFIX}", original.blocks, template_id=original.template_id
        )


def _clean_title(title) -> str:
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Document title cannot be empty")
    return title.strip()


def _clean_template_id(template_id) -> str:
    if not isinstance(template_id, str) or not template_id.strip():
        raise ValidationError("Template id cannot be empty")
    template_id = template_id.strip()
    known = available_templates()
    if template_id not in known:
        raise ValidationError(
            f"Unknown template '{template_id}' (available: {', '.join(known) or 'none'})"
        )
    return template_id


def _block_records(blocks: Sequence) -> List[Dict[str, Any]]:
    """Accept Blocks or already-serialized records."""
    records = []
    for position, block in enumerate(blocks):
        if isinstance(block, Block):
            records.append(block.to_record())
        elif isinstance(block, Mapping):
            records.append(dict(block))
        else:
            raise ValidationError(f"Block {position} is neither a Block nor a record: {block!r}")
    return records


class YamlDocumentRepository(DocumentRepository):
    """
    File-backed repository writing one YAML file per document.

    Writes go to a temp file in the same directory and are moved into place,
    so a crash mid-write never leaves a truncated document behind.

    Args:
        root: Directory holding the documents (default: VITA_DOCUMENTS_PATH)
    """

    def __init__(self, root: Path = None):
        self.root = Path(root) if root is not None else DOCUMENTS_PATH

    # --- DocumentRepository ---

    def create(self, title: str, blocks: Sequence, template_id: str = "classic") -> str:
        title = _clean_title(title)
        template_id = _clean_template_id(template_id)
        records = _block_records(blocks)

        document_id = uuid.uuid4().hex
        timestamp = now_exact()
        document = StoredDocument(
            id=document_id,
            title=title,
            blocks=records,
            template_id=template_id,
            created_at=timestamp,
            updated_at=timestamp,
        )
        self._write(document)
        log_document_event("created", document_id, title, len(records))
        return document_id

    def get(self, document_id: str) -> StoredDocument:
        path = self._path_for(document_id)
        if not path.exists():
            raise NotFoundError("document", document_id)
        return self._read(path)

    def update(
        self,
        document_id: str,
        title: Optional[str] = None,
        blocks: Optional[Sequence] = None,
        template_id: Optional[str] = None,
    ) -> StoredDocument:
        """
        Update a stored document.

        Raises:
            ValidationError: No fields given, a blank title, or an unknown template
            NotFoundError: Unknown id
            ServiceError: Storage failure (the stored file is unchanged)
        """
        if title is None and blocks is None and template_id is None:
            raise ValidationError("Nothing to update: give a title, blocks or template")

        changes: Dict[str, Any] = {}
        if title is not None:
            changes["title"] = _clean_title(title)
        if template_id is not None:
            changes["template_id"] = _clean_template_id(template_id)
        if blocks is not None:
            changes["blocks"] = _block_records(blocks)

        document = self.get(document_id)
        for key, value in changes.items():
            setattr(document, key, value)
        document.updated_at = now_exact()

        self._write(document)
        log_document_event("updated", document_id, document.title, len(document.blocks))
        return document

    def delete(self, document_id: str) -> None:
        path = self._path_for(document_id)
        if not path.exists():
            raise NotFoundError("document", document_id)
        try:
            path.unlink()
        except OSError as e:
            raise ServiceError(
                f"Could not delete document {document_id}", service="storage", original_error=e
            ) from e
        log_document_event("deleted", document_id, "")

    def list_all(self) -> List[DocumentSummary]:
        if not self.root.exists():
            return []

        summaries = []
        for path in sorted(self.root.glob("*.yaml")):
            try:
                document = self._read(path)
            except ServiceError as e:
                _log_warning(f"Skipping unreadable document file {path.name}: {e.message}")
                continue
            summaries.append(
                DocumentSummary(
                    id=document.id,
                    title=document.title,
                    updated_at=document.updated_at,
                    block_count=len(document.blocks),
                )
            )

        summaries.sort(key=lambda s: (s.updated_at, s.id), reverse=True)
        return summaries

    # --- File handling ---

    def _path_for(self, document_id: str) -> Path:
        if not isinstance(document_id, str) or not _ID_PATTERN.match(document_id):
            raise NotFoundError("document", document_id)
        return self.root / f"{document_id}.yaml"

    def _read(self, path: Path) -> StoredDocument:
        try:
            # Plain YAML: "${...}" in resume text is content, never interpolation grammar
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except Exception as e:
            raise ServiceError(f"Could not read {path}", service="storage", original_error=e) from e

        if not isinstance(data, dict) or "title" not in data:
            raise ServiceError(f"Malformed document file {path}", service="storage")

        blocks = data.get("blocks") or []
        if not isinstance(blocks, list):
            raise ServiceError(f"Malformed blocks in {path}", service="storage")

        return StoredDocument(
            id=str(data.get("id") or path.stem),
            title=str(data["title"]),
            blocks=blocks,
            template_id=str(data.get("template_id") or "classic"),
            created_at=str(data.get("created_at") or ""),
            updated_at=str(data.get("updated_at") or ""),
        )

    def _write(self, document: StoredDocument) -> None:
        payload = {
            "id": document.id,
            "title": document.title,
            "template_id": document.template_id,
            "created_at": document.created_at,
            "updated_at": document.updated_at,
            "blocks": document.blocks,
        }
        target = self._path_for(document.id)

        try:
            self.root.mkdir(parents=True, exist_ok=True)
            text = yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)
            temp_fd, temp_path = tempfile.mkstemp(dir=self.root, suffix=".yaml.tmp", text=True)
        except Exception as e:
            raise ServiceError(
                f"Could not save document {document.id}", service="storage", original_error=e
            ) from e

        # Write to temp file first (atomic write pattern)
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                f.write(text)
            shutil.move(temp_path, target)
        except OSError as e:
            raise ServiceError(
                f"Could not save document {document.id}", service="storage", original_error=e
            ) from e
        finally:
            if os.path.exists(temp_path):
                os.unlink(temp_path)

        _log_debug(f"Wrote {target}")
