"""
Section editors, one per block type.

Use get_editor() rather than instantiating editors directly: it dispatches on
the block type through a table that must cover every BlockType.
"""

from typing import Dict, Optional, Type

from vita.contexts.assist.service import TextImprovementService
from vita.contexts.editing.block_store import BlockStore
from vita.contexts.editing.blocks import BlockType, ensure_covers_all_types, parse_block_type
from vita.contexts.editing.editors.base import (
    InFlightGuard,
    ListSectionEditor,
    SectionEditor,
)
from vita.contexts.editing.editors.certification import CertificationEditor
from vita.contexts.editing.editors.education import EducationEditor
from vita.contexts.editing.editors.experience import ExperienceEditor
from vita.contexts.editing.editors.project import ProjectEditor
from vita.contexts.editing.editors.skills import SkillsEditor, merge_skills, split_skill_suggestions
from vita.contexts.editing.editors.summary import SummaryEditor

EDITOR_TYPES: Dict[BlockType, Type[SectionEditor]] = {
    BlockType.SUMMARY: SummaryEditor,
    BlockType.SKILLS: SkillsEditor,
    BlockType.EXPERIENCE: ExperienceEditor,
    BlockType.EDUCATION: EducationEditor,
    BlockType.PROJECT: ProjectEditor,
    BlockType.CERTIFICATION: CertificationEditor,
}
ensure_covers_all_types(EDITOR_TYPES, "EDITOR_TYPES")


def get_editor(
    store: BlockStore,
    block_type,
    assist: Optional[TextImprovementService] = None,
    guard: Optional[InFlightGuard] = None,
) -> SectionEditor:
    """
    Create the editor for a block type.

    The block does not need to exist yet; editor operations raise NotFoundError
    while it is absent.
    """
    return EDITOR_TYPES[parse_block_type(block_type)](store, assist=assist, guard=guard)


__all__ = [
    "EDITOR_TYPES",
    "CertificationEditor",
    "EducationEditor",
    "ExperienceEditor",
    "InFlightGuard",
    "ListSectionEditor",
    "ProjectEditor",
    "SectionEditor",
    "SkillsEditor",
    "SummaryEditor",
    "get_editor",
    "merge_skills",
    "split_skill_suggestions",
]
