"""Request-derived inputs and collaborators consumed by ``emit``."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Protocol

from flask import current_app, has_app_context, has_request_context, request

from utils import request_metrics
from utils.bytecode import BytecodeCacheProbe


class QueryCounter(Protocol):
    def available(self) -> bool: ...

    def get_query_count(self) -> int: ...


class CacheStats(Protocol):
    def available(self) -> bool: ...

    def get_cache_reads(self) -> int: ...

    def get_cache_writes(self) -> int: ...


class CompileCacheProbe(Protocol):
    def available(self) -> bool: ...

    def is_cached(self, source_path: str) -> bool: ...


@dataclass
class EmitContext:
    pretty: bool = False
    # None when the query string has no "callback" key at all
    callback: Optional[str] = None
    debug_requested: bool = False
    debug_enabled: bool = False
    path: Optional[str] = None
    redirect_url: Optional[str] = None
    redirect_query: Optional[str] = None
    start_marker: Optional[float] = None
    query_counter: Optional[QueryCounter] = None
    cache_stats: Optional[CacheStats] = None
    bytecode_probe: Optional[CompileCacheProbe] = None

    @property
    def debug_active(self) -> bool:
        return self.debug_enabled and self.debug_requested

    @classmethod
    def from_request(cls) -> "EmitContext":
        """Build a context from the active Flask request (empty outside one)."""
        debug_enabled = bool(current_app.config.get("JSON_DEBUG")) if has_app_context() else False
        if not has_request_context():
            return cls(debug_enabled=debug_enabled, bytecode_probe=BytecodeCacheProbe())

        args = request.args
        environ = request.environ
        return cls(
            pretty="pretty" in args,
            callback=args.get("callback") if "callback" in args else None,
            debug_requested="debug" in args,
            debug_enabled=debug_enabled,
            path=environ.get("PATH_INFO") or None,
            redirect_url=environ.get("REDIRECT_URL") or os.getenv("REDIRECT_URL"),
            redirect_query=environ.get("REDIRECT_QUERY_STRING") or os.getenv("REDIRECT_QUERY_STRING"),
            start_marker=request_metrics.start_marker(),
            query_counter=request_metrics.RequestQueryCounter(),
            cache_stats=request_metrics.RequestCacheStats(),
            bytecode_probe=BytecodeCacheProbe(),
        )


__all__ = ["EmitContext", "QueryCounter", "CacheStats", "CompileCacheProbe"]
