"""Exception types for the response layer.

These never reach route handlers; ``emit`` resolves them into a response.
"""
from __future__ import annotations


class ResponseError(Exception):
    """Base response layer exception."""


class ResponseAlreadyEmitted(ResponseError):
    """A response body was already written for the current request."""

    def __init__(self, response):
        super().__init__("response already emitted for this request")
        self.response = response


__all__ = [
    "ResponseError",
    "ResponseAlreadyEmitted",
]
