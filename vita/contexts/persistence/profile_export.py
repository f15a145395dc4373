"""
Profile JSON export.

Dumps the user's autofill profile (name, contact details, links) as a dated JSON
file that browser form-filling tools can import.
"""

import json
import math
from datetime import date
from pathlib import Path
from typing import Any, Mapping, Optional

from vita.contexts.editing.exceptions import ServiceError, ValidationError
from vita.contexts.persistence.logger import _log_info
from vita.utils.timestamp import today


def _json_compatible(value: Any) -> Any:
    """Match JSON.stringify number output: 4.0 -> 4, NaN/Infinity -> null."""
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        # JSON.stringify switches to exponent notation from 1e21 up
        if value.is_integer() and abs(value) < 1e21:
            return int(value)
        return value
    if isinstance(value, Mapping):
        return {key: _json_compatible(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_compatible(item) for item in value]
    return value


def profile_filename(on_date: Optional[date] = None) -> str:
    """autofill-profile-YYYY-MM-DD.json for today (or the given date)."""
    return f"autofill-profile-{today(on_date)}.json"


def export_profile_json(
    profile: Mapping[str, Any],
    output_dir: Path,
    on_date: Optional[date] = None,
) -> Path:
    """
    Write a profile as 2-space indented JSON.

    Non-ASCII text is written as-is and the file has no trailing newline.
    An existing export from the same day is overwritten.

    Raises:
        ValidationError: If the profile is not a mapping or holds non-JSON values
        ServiceError: If the file cannot be written
    """
    if not isinstance(profile, Mapping):
        raise ValidationError(f"Profile must be a mapping, got {type(profile).__name__}")

    try:
        text = json.dumps(
            _json_compatible(profile), indent=2, ensure_ascii=False, allow_nan=False
        )
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Profile is not JSON-serializable: {e}") from e

    output_path = Path(output_dir) / profile_filename(on_date)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise ServiceError(
            f"Could not write profile to {output_path}", service="storage", original_error=e
        ) from e

    _log_info(f"Profile exported to {output_path}")
    return output_path
