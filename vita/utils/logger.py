"""
Shared loguru setup for the vita contexts.

Each context wraps setup_logger() in its own contexts/{context}/logger.py and
adds a "[prefix]" to every message. One call per CLI invocation: the previous
sinks are dropped, so only the latest session's log file receives messages.
"""

import os
import sys
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv
from loguru import logger

load_dotenv()
CONSOLE_LEVEL = os.getenv("VITA_CONSOLE_LOG_LEVEL", "INFO")

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <level>{message}</level>"
)


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Mapping[str, object]] = None,
) -> Path:
    """
    Point loguru at {log_dir}/{context_name}.log (DEBUG) and stdout (CONSOLE_LEVEL).

    Args:
        context_name: Log file stem, e.g. "render" or "store"
        log_dir: Directory for this session, created if missing
        extra_provenance: Context-specific header lines (document, template, ...)

    Returns:
        Path to log file
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=CONSOLE_LEVEL, colorize=True)

    _log_header(context_name, extra_provenance or {})
    return log_file


def _log_header(context_name: str, extra: Mapping[str, object]) -> None:
    rule = "-" * 60
    logger.debug(rule)
    logger.debug(f"vita {context_name} session")
    logger.debug(f"Command: {' '.join(sys.argv)}")
    logger.debug(f"Working directory: {Path.cwd()}")
    for key, value in extra.items():
        logger.debug(f"{key}: {value}")
    logger.debug(rule)
