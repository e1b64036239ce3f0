"""JSON request and response helpers shared by the HTTP handlers."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from flask import Response

MAX_BODY_BYTES = 1024 * 1024
JSON_CONTENT_TYPE = "application/json"

HeaderValue = Union[str, list[str]]


class RequestBodyError(ValueError):
    """Raised when a request body cannot be accepted as a single JSON object."""


@dataclass
class JSONResponse:
    """Envelope used for error replies."""

    error: bool = False
    message: str = ""
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation; ``data`` is left out when unset."""
        out: dict[str, Any] = {"error": self.error, "message": self.message}
        if self.data is not None:
            out["data"] = self.data
        return out


def _default(obj: Any) -> Any:
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"object of type {type(obj).__name__} is not JSON serializable")


def write_json(
    payload: Any,
    status: int = 200,
    headers: Optional[Mapping[str, HeaderValue]] = None,
) -> Response:
    """Serialise *payload* into a JSON response with *status* and extra *headers*."""
    body = json.dumps(payload, default=_default, separators=(",", ":"))
    response = Response(body, status=status)
    for key, value in (headers or {}).items():
        if isinstance(value, str):
            response.headers[key] = value
        else:
            response.headers.setlist(key, list(value))
    response.headers["Content-Type"] = JSON_CONTENT_TYPE
    return response


def _kind(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return f"number {value}"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _matches(value: Any, expected: Any) -> bool:
    if expected is int:
        return isinstance(value, int) and not isinstance(value, bool)
    if expected is float:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    return isinstance(value, expected)


def read_json(body: bytes, allowed_fields: Mapping[str, Any]) -> dict[str, Any]:
    """Decode *body* as exactly one JSON object whose keys are among *allowed_fields*.

    *allowed_fields* maps each accepted field name to its expected Python type.
    Keys match case-insensitively; null values are treated as absent.
    """
    if len(body) > MAX_BODY_BYTES:
        raise RequestBodyError("http: request body too large")
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise RequestBodyError(f"invalid UTF-8 in body: {exc.reason}") from None

    decoder = json.JSONDecoder()
    stripped = text.lstrip()
    if not stripped:
        raise RequestBodyError("EOF")
    try:
        obj, end = decoder.raw_decode(stripped)
    except json.JSONDecodeError as exc:
        raise RequestBodyError(f"invalid JSON: {exc.msg}") from None
    if stripped[end:].strip():
        raise RequestBodyError("body must only contain a single JSON value")
    if not isinstance(obj, dict):
        raise RequestBodyError(f"json: cannot unmarshal {_kind(obj)} into an object")

    exact = set(allowed_fields)
    folded = {name.lower(): name for name in allowed_fields}
    result: dict[str, Any] = {}
    for key, value in obj.items():
        name = key if key in exact else folded.get(key.lower())
        if name is None:
            raise RequestBodyError(f'json: unknown field "{key}"')
        if value is None:
            continue
        if not _matches(value, allowed_fields[name]):
            raise RequestBodyError(
                f"json: cannot unmarshal {_kind(value)} into field {name}"
            )
        result[name] = value
    return result


def error_json(message: Union[str, BaseException], status: int = 400) -> Response:
    """Build an error envelope response carrying *message*."""
    envelope = JSONResponse(error=True, message=str(message))
    return write_json(envelope, status)