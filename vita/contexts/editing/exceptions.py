"""Exceptions raised while editing resume documents."""

from typing import Optional


class ResumeBuilderError(Exception):
    """Base class for all document editing errors."""


class ValidationError(ResumeBuilderError, ValueError):
    """
    Input rejected before anything was changed.

    Examples: empty text passed to AI-assist, unknown item field, blank title on save.
    Recoverable: show the message next to the control and let the user fix it.
    """


class DuplicateTypeError(ResumeBuilderError):
    """A block of this type is already present in the document."""

    def __init__(self, block_type: str):
        self.block_type = block_type
        super().__init__(f"Document already has a '{block_type}' block")


class NotFoundError(ResumeBuilderError, LookupError):
    """
    Referenced block, item or stored document does not exist.

    Attributes:
        kind: What was looked up ("block", "item", "document")
        key: The missing key
    """

    def __init__(self, kind: str, key):
        self.kind = kind
        self.key = key
        super().__init__(f"No {kind} found for {key!r}")


class ServiceError(ResumeBuilderError):
    """
    External service (AI-assist or document storage) failed.

    The document is left in its last-known-good state; the user may retry.

    Attributes:
        service: Name of the failing service ("assist", "storage")
        original_error: Underlying exception, if any
    """

    def __init__(
        self,
        message: str,
        service: str = "assist",
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.service = service
        self.original_error = original_error

        parts = [message]
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))
