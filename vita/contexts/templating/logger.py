"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vita.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[template]"


def setup_templating_logger(log_dir: Path, template_id: str = "classic") -> Path:
    """
    Setup logger for templating context.

    Args:
        log_dir: Directory for this templating session
        template_id: Template being rendered, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="template",
        log_dir=log_dir,
        extra_provenance={"Template": template_id},
    )


def _log_info(message: str) -> None:
    """Log info message with [template] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [template] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [template] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_render_summary(title: str, template_id: str, section_types, skipped_types) -> None:
    """Log which blocks made it into a rendered document."""
    _log_debug(f"Rendered '{title or 'Untitled'}' with template '{template_id}'")
    _log_debug(f"  Sections: {', '.join(section_types) or 'none'}")
    if skipped_types:
        _log_debug(f"  Skipped empty blocks: {', '.join(skipped_types)}")
