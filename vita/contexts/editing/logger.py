"""
Editing context logger.

Provides logging interface for editing context with automatic [edit] prefix.
All editing modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vita.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[edit]"


def setup_editing_logger(log_dir: Path, document: str = "") -> Path:
    """
    Setup logger for an editing session.

    Args:
        log_dir: Directory for this editing session
        document: Title or id of the document being edited

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="edit",
        log_dir=log_dir,
        extra_provenance={"Document": document},
    )


def _log_info(message: str) -> None:
    """Log info message with [edit] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [edit] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [edit] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [edit] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_structure_change(operation: str, block_type: str, order: list) -> None:
    """Log a structural block operation with the resulting order."""
    _log_debug(f"{operation} {block_type} -> order: {', '.join(order) or '(empty)'}")


def log_assist_failure(block_type: str, target: str, error: Exception) -> None:
    """Log a failed AI-assist call; content was left untouched."""
    _log_error(f"AI-assist failed for {block_type} ({target}); content unchanged")
    _log_debug(f"  Error: {error}")
