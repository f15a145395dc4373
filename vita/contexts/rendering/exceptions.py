"""Custom exceptions for the export pipeline."""

from typing import Optional


class RenderError(Exception):
    """
    Exception raised when a document cannot be turned into a PDF.

    Nothing is written to the output path when this is raised.

    Attributes:
        message: Error description
        stage: Pipeline stage that failed ("layout", "rasterize", "page_fit", "write", "config")
        original_error: The underlying Pillow / reportlab / OS error, if any
    """

    def __init__(
        self,
        message: str,
        stage: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.stage = stage
        self.original_error = original_error

        parts = [message]

        if stage:
            parts.append(f"Stage: {stage}")

        if original_error:
            parts.append(f"Original error: {str(original_error)}")

        super().__init__("\n".join(parts))
