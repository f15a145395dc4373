"""Summary section editor."""

from typing import Optional

from vita.contexts.editing.blocks import BlockType, SummaryContent
from vita.contexts.editing.editors.base import SectionEditor
from vita.contexts.editing.exceptions import ServiceError, ValidationError
from vita.contexts.editing.logger import _log_info


class SummaryEditor(SectionEditor):
    """Free-text professional summary."""

    block_type = BlockType.SUMMARY

    @property
    def text(self) -> str:
        return self.content.text

    def set_text(self, text: str) -> None:
        self._write(SummaryContent(text=text or ""))

    def improve_with_ai(self, target_role: Optional[str] = None) -> str:
        """
        Replace the summary with an AI rewrite.

        Raises:
            ValidationError: If the summary is blank (no request is sent)
            ServiceError: If the service fails (summary unchanged)
        """
        if not self.text.strip():
            raise ValidationError("Nothing to improve: the summary is empty")

        response = self._request_rewrite(self.text, target_role=target_role)
        if not response.improved_text:
            raise ServiceError("AI returned no summary text")

        self.set_text(response.improved_text)
        _log_info("summary rewritten")
        return response.improved_text
