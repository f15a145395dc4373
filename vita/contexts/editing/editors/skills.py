"""Skills section editor, including AI skill suggestions."""

from typing import List, Optional, Sequence, Tuple

from vita.contexts.editing.blocks import BlockType, SkillsContent
from vita.contexts.editing.editors.base import SectionEditor
from vita.contexts.editing.exceptions import NotFoundError, ServiceError, ValidationError
from vita.contexts.editing.logger import _log_debug, _log_info


def split_skill_suggestions(csv_text: str) -> List[str]:
    """Split a comma-separated suggestion string into trimmed, non-empty skills."""
    return [skill.strip() for skill in (csv_text or "").split(",") if skill.strip()]


def merge_skills(existing: Sequence[str], suggested: Sequence[str]) -> Tuple[str, ...]:
    """
    Union two skill lists, keeping first-seen order and dropping exact duplicates.

    Example:
        >>> merge_skills(["React", "SQL"], ["React", "Python"])
        ('React', 'SQL', 'Python')
    """
    return tuple(dict.fromkeys([*existing, *suggested]))


class SkillsEditor(SectionEditor):
    """Set-like ordered list of skills."""

    block_type = BlockType.SKILLS

    @property
    def skills(self) -> Tuple[str, ...]:
        return self.content.skills

    def add_skill(self, skill: str) -> bool:
        """
        Append a skill.

        Returns:
            True if added; False for blank input or a skill already listed
        """
        skill = (skill or "").strip()
        if not skill or skill in self.skills:
            return False
        self._write(SkillsContent(skills=self.skills + (skill,)))
        return True

    def remove_skill(self, index: int) -> str:
        skills = self.skills
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(skills):
            raise NotFoundError("skill", index)
        self._write(SkillsContent(skills=skills[:index] + skills[index + 1 :]))
        return skills[index]

    def suggest_skills(self, job_description: str, target_role: Optional[str] = None) -> List[str]:
        """
        Ask the AI service for skills matching a job description and merge them in.

        Raises:
            ValidationError: If the job description is blank (no request is sent)
            ServiceError: If the service fails (skills unchanged)

        Returns:
            Skills that were not already listed, in the order they were added
        """
        if not (job_description or "").strip():
            raise ValidationError("Enter a job description to suggest skills")
        return self._suggest(target_role=target_role, job_description=job_description)

    def improve_with_ai(self, target_role: Optional[str] = None) -> List[str]:
        """
        Ask the AI service to extend the current skill list.

        Raises:
            ValidationError: If there are no skills yet (no request is sent)
        """
        if not self.skills:
            raise ValidationError("Nothing to improve: no skills listed")
        return self._suggest(target_role=target_role)

    def _suggest(self, target_role: Optional[str], job_description: Optional[str] = None) -> List[str]:
        response = self._request_rewrite(
            ", ".join(self.skills),
            target_role=target_role,
            job_description=job_description,
        )
        if response.suggested_skills_csv is None:
            raise ServiceError("AI returned no skill suggestions")

        suggested = split_skill_suggestions(response.suggested_skills_csv)
        current = self.skills
        merged = merge_skills(current, suggested)
        added = list(merged[len(current) :])

        self._write(SkillsContent(skills=merged))
        _log_debug(f"skills: {len(suggested)} suggested, {len(added)} new")
        _log_info(f"Added {len(added)} suggested skills")
        return added
