"""
Shared utilities for VITA.

Common functionality used across contexts:
- Logger setup
- LLM providers
- Timestamps
- PDF inspection
"""

from vita.utils.timestamp import format_timestamp, now, now_exact, today

__all__ = ["format_timestamp", "now", "now_exact", "today"]
