"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vita.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, page_format: str = "a4") -> Path:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this export session
        page_format: Target page format, recorded in the provenance header

    Returns:
        Path to log file

    Example:
        from vita.contexts.rendering.logger import setup_rendering_logger, _log_info

        log_file = setup_rendering_logger(log_dir)
        _log_info("Starting export...")
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"Page format": page_format},
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_export_start(title: str, output_path: Path, page_format: str, log_file: Path = None) -> None:
    """Log start of an export with context."""
    _log_info(f"Exporting: {title or 'Untitled'}")
    if log_file is not None:
        _log_info(f"Log file: {log_file}")
    _log_debug(f"  Output: {output_path}")
    _log_debug(f"  Page format: {page_format}")


def log_export_result(title: str, result, elapsed_time: float) -> None:
    """
    Log a finished export.

    Args:
        title: Document title
        result: ExportResult from export_pdf()
        elapsed_time: Seconds taken
    """
    _log_success(f"{title or 'Untitled'}: exported ({elapsed_time:.2f}s)")
    _log_info(f"PDF saved to: {result.pdf_path}")
    _log_debug(f"  Image: {result.image_size[0]}x{result.image_size[1]} px")
    _log_debug(
        f"  Placed at x={result.fit.x:.1f}pt y={result.fit.y:.1f}pt, "
        f"{result.fit.width:.1f}x{result.fit.height:.1f}pt (scale {result.fit.scale:.4f})"
    )
    if result.fit.scale < 0.5:
        _log_warning(
            f"Content scaled to {result.fit.scale:.0%} to fit one page; text may be hard to read"
        )


def log_export_failure(title: str, error: Exception) -> None:
    _log_error(f"{title or 'Untitled'}: export failed")
    for line in str(error).splitlines():
        _log_error(f"  {line}")
