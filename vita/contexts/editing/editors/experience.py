"""Work experience section editor."""

from vita.contexts.editing.blocks import BlockType
from vita.contexts.editing.editors.base import ListSectionEditor


class ExperienceEditor(ListSectionEditor):
    """
    Jobs, most recent first by convention (the order is the user's).

    Items: jobTitle, company, location, startDate, endDate, current, description.
    Checking "I currently work here" (current=True) clears endDate.
    """

    block_type = BlockType.EXPERIENCE
    REQUIRED_FIELDS = ("jobTitle", "company", "description")
    ITEM_PLACEHOLDER = "New Experience"
    ITEM_TITLE_FIELD = "jobTitle"

    def set_current(self, index: int, current: bool = True):
        """Mark a job as the current one (clears its end date)."""
        return self.update_item_field(index, "current", current)
