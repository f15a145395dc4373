"""
Persistence context logger.

Provides logging interface for persistence context with automatic [store] prefix.
All persistence modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vita.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[store]"


def setup_persistence_logger(log_dir: Path, documents_root: Path) -> Path:
    """
    Setup logger for persistence context.

    Args:
        log_dir: Directory for this session
        documents_root: Repository root, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="store",
        log_dir=log_dir,
        extra_provenance={"Documents": documents_root},
    )


def _log_info(message: str) -> None:
    """Log info message with [store] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [store] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [store] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [store] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_document_event(operation: str, document_id: str, title: str, block_count: int = None) -> None:
    """Log a completed repository write."""
    blocks = f", {block_count} blocks" if block_count is not None else ""
    _log_info(f"{operation} {document_id} '{title}'{blocks}")
