from __future__ import annotations

from typing import Any, Callable, Optional

from flask import jsonify, request

from ..core.exceptions import ValidationError
from .unset import UNSET


def ok(data: Any = None, *, message: Optional[str] = None, status: int = 200, count: Optional[int] = None):
    body: dict = {"success": True}
    if message:
        body["message"] = message
    if count is not None:
        body["count"] = count
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def fail(error: str, message: str, status: int, *, details: Optional[list] = None, count: Optional[int] = None):
    body: dict = {"success": False, "error": error, "message": message}
    if details:
        body["details"] = details
    if count is not None:
        body["count"] = count
    return jsonify(body), status


def json_body() -> dict:
    """Request JSON as a dict; an absent body reads as {}."""
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def patch_value(payload: dict, key: str, parse: Optional[Callable[[Any, str], Any]] = None) -> Any:
    """UNSET when `key` is absent from the body, else the (parsed) value."""
    if key not in payload:
        return UNSET
    value = payload[key]
    return parse(value, key) if parse else value
