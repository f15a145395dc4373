"""Education section editor."""

from vita.contexts.editing.blocks import BlockType
from vita.contexts.editing.editors.base import ListSectionEditor


class EducationEditor(ListSectionEditor):
    """
    Degrees and programmes.

    Items: degree, institution, location, startDate, endDate, current, gpa, description.
    """

    block_type = BlockType.EDUCATION
    REQUIRED_FIELDS = ("degree", "institution")
    ITEM_PLACEHOLDER = "New Education"
    ITEM_TITLE_FIELD = "degree"

    def set_current(self, index: int, current: bool = True):
        """Mark a programme as still in progress (clears its end date)."""
        return self.update_item_field(index, "current", current)
