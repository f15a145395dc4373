"""
Editing Context

Responsibilities:
- Defines the resume block model (six typed block variants)
- Holds one document's ordered blocks in memory (BlockStore)
- Applies type-specific content edits and AI-assist results (section editors)
- Tracks the editing session (title, template, panel selection, save/export)

Owns: Block structure and content mutations
Never: Renders or persists documents itself

Editors and the session live in vita.contexts.editing.editors and
vita.contexts.editing.session; they depend on the assist context, so they are
not re-exported here.
"""

from vita.contexts.editing.block_store import BlockStore
from vita.contexts.editing.blocks import (
    Block,
    BlockType,
    CertificationItem,
    Direction,
    Document,
    EducationItem,
    ExperienceItem,
    ProjectItem,
)
from vita.contexts.editing.exceptions import (
    DuplicateTypeError,
    NotFoundError,
    ResumeBuilderError,
    ServiceError,
    ValidationError,
)

__all__ = [
    # Data model
    "Block",
    "BlockType",
    "Direction",
    "Document",
    "ExperienceItem",
    "EducationItem",
    "ProjectItem",
    "CertificationItem",
    # Structural mutation
    "BlockStore",
    # Errors
    "ResumeBuilderError",
    "ValidationError",
    "DuplicateTypeError",
    "NotFoundError",
    "ServiceError",
]
