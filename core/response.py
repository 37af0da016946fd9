"""JSON response helpers.

Build a payload, fill it, emit it:

    out = new_response(201)
    out["thing"] = "This is definitely a thing"
    return emit(out)

``emit`` takes care of the query-string switches every endpoint supports:
``?pretty`` (indented output), ``?callback=name`` (JSON-P) and ``?debug``
(diagnostics, only when ``JSON_DEBUG`` is configured). Exactly one body is
written per request.
"""
from __future__ import annotations

import json
import logging
from datetime import date, datetime, timezone
from typing import Any, Mapping, NoReturn, Optional

from bson import ObjectId
from flask import Response, abort, current_app, g, has_app_context, has_request_context

from core.context import EmitContext
from core.debug import collect_debug_info
from core.errors import ResponseAlreadyEmitted
from core.jsonp import is_valid_callback_name
from utils.http_status import get_http_status_text

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
CACHE_CONTROL = "no-cache, no-store, must-revalidate"

# range a status line can carry
MIN_STATUS = 100
MAX_STATUS = 599


class JSONEncoder(json.JSONEncoder):
    def default(self, o):
        if isinstance(o, ObjectId):
            return str(o)
        if isinstance(o, datetime):
            if o.tzinfo is None:
                o = o.replace(tzinfo=timezone.utc)
            return o.isoformat()
        if isinstance(o, date):
            return o.isoformat()
        if isinstance(o, (set, frozenset)):
            return list(o)
        return super().default(o)


def _coerce_status(code) -> Optional[int]:
    if isinstance(code, bool):
        return None
    if isinstance(code, str) and code.isascii() and code.isdigit():
        code = int(code)
    if isinstance(code, int) and MIN_STATUS <= code <= MAX_STATUS:
        return code
    return None


def _pending_status() -> int:
    if has_request_context():
        status = getattr(g, "_json_status", None)
        if status is not None:
            return status
    return 200


def new_response(code=None) -> dict:
    """Return an empty response. You should fill it with things.

    If ``code`` is numeric it becomes the HTTP status of the response that
    ``emit`` eventually writes for this request. Recommended: 200 (OK),
    201 (Created), 202 (Accepted).
    """
    status = _coerce_status(code)
    if status is not None and has_request_context():
        g._json_status = status
    return {}


def new_error_response(code=400, message: Optional[str] = None, data: Any = None) -> dict:
    """Return an error response (this builds it, see ``emit_error`` to send it)."""
    response = new_response(code)

    response["status"] = code
    response["response"] = get_http_status_text(code)

    if isinstance(message, str):
        response["message"] = message
    if data is not None:
        response["data"] = data

    return response


def _dumps(payload: Mapping[str, Any], pretty: bool) -> str:
    if pretty:
        text = json.dumps(payload, cls=JSONEncoder, ensure_ascii=False, allow_nan=False, indent=4, separators=(",", ": "))
    else:
        text = json.dumps(payload, cls=JSONEncoder, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
    # keep inline <script> blocks intact
    return text.replace("</", "<\\/")


def _check_not_emitted() -> None:
    if not has_request_context():
        return
    previous = getattr(g, "_json_response", None)
    if previous is not None:
        raise ResponseAlreadyEmitted(previous)


def _build_response(body: str, status: int) -> Response:
    response_class = current_app.response_class if has_app_context() else Response
    response = response_class(body, status=status, content_type=JSON_CONTENT_TYPE)
    response.headers["Cache-Control"] = CACHE_CONTROL
    return response


def emit(payload: Mapping[str, Any], allow_jsonp: bool = True, *, context: Optional[EmitContext] = None) -> Response:
    """Serialize ``payload`` and return the finished response.

    Typically the last call of a view (``return emit(out)``), but it does not
    have to be. An unusable JSON-P callback replaces the payload with a 400
    (invalid name) or 401 (JSON-P disabled for this endpoint) error document.
    """
    try:
        _check_not_emitted()
    except ResponseAlreadyEmitted as exc:
        logger.warning("emit: response already written for this request, ignoring second payload")
        return exc.response

    ctx = context if context is not None else EmitContext.from_request()
    prefix = ""
    suffix = ""
    out = dict(payload)

    if ctx.callback is not None:
        if not allow_jsonp:
            out = new_error_response(401, "JSON-P Unavailable")
        elif is_valid_callback_name(ctx.callback):
            prefix = ctx.callback + "("
            suffix = ");"
        else:
            logger.info("emit: rejected JSON-P callback %r", ctx.callback)
            out = new_error_response(400, "Invalid JSON-P Callback")

    if ctx.debug_active:
        out["debug"] = collect_debug_info(ctx, source_path=__file__)

    try:
        text = _dumps(out, ctx.pretty)
    except (TypeError, ValueError):
        logger.exception("emit: payload could not be serialized")
        out = new_error_response(500, "Response Serialization Failed")
        if ctx.debug_active:
            out["debug"] = collect_debug_info(ctx, source_path=__file__)
        text = _dumps(out, ctx.pretty)

    response = _build_response(prefix + text + suffix, _pending_status())
    if has_request_context():
        g._json_response = response
    return response


def emit_error(code=400, message: Optional[str] = None, data: Any = None) -> Response:
    """Emit an error document. Use this when the user makes a mistake.

    Recommended codes: 400 (Bad Request), 401 (Unauthorized), 404 (Not Found).
    The caller keeps control and must return the response.
    """
    return emit(new_error_response(code, message, data))


def emit_fatal_error(code=400, message: Optional[str] = None, data: Any = None) -> NoReturn:
    """Emit an error document and stop handling the request."""
    abort(emit_error(code, message, data))


def emit_server_error(message: Optional[str] = None) -> NoReturn:
    """Emit a "500 Internal Server Error" document and stop handling the request."""
    abort(emit(new_error_response(500, message)))


__all__ = [
    "JSONEncoder",
    "new_response",
    "new_error_response",
    "emit",
    "emit_error",
    "emit_fatal_error",
    "emit_server_error",
]
