"""
Assist context logger.

Provides logging interface for AI-assist calls with automatic [assist] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[assist]"


def _log_info(message: str) -> None:
    """Log info message with [assist] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [assist] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [assist] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_request(provider_name: str, block_type: str, source_chars: int, target_role) -> None:
    """Log an outgoing rewrite request."""
    _log_info(f"Requesting {block_type} rewrite from {provider_name}")
    _log_debug(f"  Source length: {source_chars} chars")
    if target_role:
        _log_debug(f"  Target role: {target_role}")


def log_response(block_type: str, response, elapsed_time: float) -> None:
    """Log a completed rewrite (LLMResponse)."""
    _log_info(f"{block_type} rewrite received ({elapsed_time:.2f}s)")
    _log_debug(f"  Tokens: {response.input_tokens} in / {response.output_tokens} out")
