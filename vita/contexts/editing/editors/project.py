"""Projects section editor."""

from vita.contexts.editing.blocks import BlockType
from vita.contexts.editing.editors.base import ListSectionEditor


class ProjectEditor(ListSectionEditor):
    """
    Side projects and key deliverables.

    Items: title, technologies, startDate, endDate, current, description, link.
    """

    block_type = BlockType.PROJECT
    REQUIRED_FIELDS = ("title", "description")
    ITEM_PLACEHOLDER = "New Project"
    ITEM_TITLE_FIELD = "title"

    def set_current(self, index: int, current: bool = True):
        """Mark a project as ongoing (clears its end date)."""
        return self.update_item_field(index, "current", current)
