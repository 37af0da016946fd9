from __future__ import annotations

import dataclasses
import time
from typing import Any, Dict, List, Optional

from flask import g, has_request_context, request


@dataclasses.dataclass
class DBQuery:
    command_name: str
    database: Optional[str]
    collection: Optional[str]
    duration_ms: float
    ok: bool = True
    summary: Optional[str] = None


@dataclasses.dataclass
class RequestMetrics:
    started_ts: float
    db: List[DBQuery]
    cache_reads: int = 0
    cache_writes: int = 0
    total_ms: Optional[float] = None
    status_code: Optional[int] = None

    def summarize(self) -> Dict[str, Any]:
        return {
            "total_ms": self.total_ms,
            "db_ms": sum(q.duration_ms for q in self.db),
            "db_count": len(self.db),
            "cache_reads": self.cache_reads,
            "cache_writes": self.cache_writes,
            "status_code": self.status_code,
            "path": request.path if has_request_context() else None,
            "method": request.method if has_request_context() else None,
        }


def _ensure_metrics() -> Optional[RequestMetrics]:
    if not has_request_context():
        return None
    if getattr(g, "_req_metrics", None) is None:
        g._req_metrics = RequestMetrics(started_ts=time.perf_counter(), db=[])
    return g._req_metrics


def _existing_metrics() -> Optional[RequestMetrics]:
    if not has_request_context():
        return None
    return getattr(g, "_req_metrics", None)


def start_request() -> None:
    _ensure_metrics()


def finish_request(status_code: int | None = None) -> Optional[Dict[str, Any]]:
    rm = _existing_metrics()
    if not rm:
        return None
    rm.status_code = status_code
    rm.total_ms = (time.perf_counter() - rm.started_ts) * 1000.0
    return rm.summarize()


def record_db_query(
    command_name: str,
    *,
    database: Optional[str],
    collection: Optional[str],
    duration_ms: float,
    ok: bool = True,
    summary: Optional[str] = None,
) -> None:
    rm = _ensure_metrics()
    if not rm:
        return
    rm.db.append(DBQuery(
        command_name=command_name,
        database=database,
        collection=collection,
        duration_ms=duration_ms,
        ok=ok,
        summary=summary,
    ))


def record_cache_read(count: int = 1) -> None:
    rm = _ensure_metrics()
    if rm:
        rm.cache_reads += count


def record_cache_write(count: int = 1) -> None:
    rm = _ensure_metrics()
    if rm:
        rm.cache_writes += count


def start_marker() -> Optional[float]:
    """perf_counter value taken when the current request started, if any."""
    rm = _existing_metrics()
    return rm.started_ts if rm else None


def current() -> Optional[RequestMetrics]:
    return _ensure_metrics()


class RequestQueryCounter:
    """Database query count for the active request."""

    def available(self) -> bool:
        return _existing_metrics() is not None

    def get_query_count(self) -> int:
        rm = _existing_metrics()
        return len(rm.db) if rm else 0


class RequestCacheStats:
    """Cache read/write counters for the active request."""

    def available(self) -> bool:
        return _existing_metrics() is not None

    def get_cache_reads(self) -> int:
        rm = _existing_metrics()
        return rm.cache_reads if rm else 0

    def get_cache_writes(self) -> int:
        rm = _existing_metrics()
        return rm.cache_writes if rm else 0
