from __future__ import annotations

import re
from typing import Any, Optional

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def require_email(value: Optional[str], field_name: str = "Email") -> str:
    value = require_non_empty(value, field_name)
    if not _EMAIL_RE.match(value):
        raise ValidationError(f"{field_name} is not a valid address")
    return value


def parse_int(value: Any, field_name: str, *, default: Optional[int] = None) -> Optional[int]:
    """Parse form/JSON input into an int; blank input gives `default`."""

    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a whole number")
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be a whole number")


def require_non_negative(value: Optional[int], field_name: str) -> int:
    value = value or 0
    if value < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return value


def optional_id(value: Any, field_name: str) -> Optional[int]:
    """Foreign keys from forms: blank or 0 means "not set"."""

    parsed = parse_int(value, field_name)
    if not parsed:
        return None
    if parsed < 0:
        raise ValidationError(f"{field_name} is not valid")
    return parsed


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in {"1", "true", "yes", "on"}
