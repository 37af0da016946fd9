from __future__ import annotations

from werkzeug.http import HTTP_STATUS_CODES

UNKNOWN_STATUS_TEXT = "Unknown Status"


def get_http_status_text(code) -> str:
    """Return the reason phrase for ``code`` ("Not Found" for 404)."""
    try:
        return HTTP_STATUS_CODES.get(int(code), UNKNOWN_STATUS_TEXT)
    except (TypeError, ValueError):
        return UNKNOWN_STATUS_TEXT


__all__ = ["get_http_status_text", "UNKNOWN_STATUS_TEXT"]
