from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime, time
from enum import Enum
from functools import wraps
from typing import Any

from flask import jsonify, request

from ..core.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
    SessionExpiredError,
)

logger = logging.getLogger(__name__)


def serialize(value: Any) -> Any:
    """Turn domain objects into JSON-friendly values (ISO dates, enum values)."""

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: serialize(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize(v) for v in value]
    return value


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def ok(data: Any = None, *, status: int = 200, **extra):
    payload = {"success": True}
    if data is not None:
        payload["data"] = serialize(data)
    payload.update({k: serialize(v) for k, v in extra.items()})
    return jsonify(payload), status


def fail(message: str, status: int = 400):
    return jsonify({"success": False, "message": message}), status


def status_for(exc: DomainError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, ConflictError):
        return 409
    if isinstance(exc, SessionExpiredError):
        return 410
    return 400


def api_errors(view):
    """Map domain errors to JSON error responses; hide everything else behind a 500."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return fail(str(e), status_for(e))
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return fail("Internal server error", 500)

    return wrapper
