from __future__ import annotations

import logging
import time
from typing import Optional

from flask import has_request_context
from pymongo import monitoring
from pymongo.monitoring import CommandListener, CommandStartedEvent, CommandSucceededEvent, CommandFailedEvent

from .request_metrics import record_db_query

logger = logging.getLogger(__name__)

_interesting_cmds = {
    "find", "aggregate", "insert", "update", "delete",
    "count", "countDocuments", "distinct", "findAndModify",
}


class _TimingStore:
    def __init__(self) -> None:
        self._t0: dict[int, float] = {}

    def start(self, event: CommandStartedEvent) -> None:
        self._t0[event.request_id] = time.perf_counter()

    def end(self, event_id: int) -> Optional[float]:
        t0 = self._t0.pop(event_id, None)
        if t0 is None:
            return None
        return (time.perf_counter() - t0) * 1000.0


class FlaskMongoCommandLogger(CommandListener):
    """Records every interesting Mongo command into the request metrics."""

    def __init__(self) -> None:
        self._timing = _TimingStore()
        self._collections: dict[int, Optional[str]] = {}

    def started(self, event: CommandStartedEvent) -> None:  # type: ignore[override]
        if not has_request_context():
            return
        if event.command_name not in _interesting_cmds:
            return
        self._timing.start(event)
        command = getattr(event, "command", None) or {}
        coll = command.get(event.command_name) if isinstance(command, dict) else None
        self._collections[event.request_id] = coll if isinstance(coll, str) else None

    def succeeded(self, event: CommandSucceededEvent) -> None:  # type: ignore[override]
        if not has_request_context():
            return
        dur = self._timing.end(event.request_id)
        if dur is None:
            return
        record_db_query(
            event.command_name,
            database=getattr(event, "database_name", None),
            collection=self._collections.pop(event.request_id, None),
            duration_ms=dur,
        )

    def failed(self, event: CommandFailedEvent) -> None:  # type: ignore[override]
        if not has_request_context():
            return
        dur = self._timing.end(event.request_id)
        if dur is None:
            return
        record_db_query(
            event.command_name,
            database=getattr(event, "database_name", None),
            collection=self._collections.pop(event.request_id, None),
            duration_ms=dur,
            ok=False,
            summary=str(event.failure),
        )


_registered: Optional[FlaskMongoCommandLogger] = None


def register_command_logger() -> FlaskMongoCommandLogger:
    """Register the listener globally (once per process).

    Must run before any MongoClient is created; pymongo only picks up global
    listeners at client construction.
    """
    global _registered
    if _registered is None:
        _registered = FlaskMongoCommandLogger()
        monitoring.register(_registered)
        logger.debug("db_monitor: registered FlaskMongoCommandLogger")
    return _registered


__all__ = ["FlaskMongoCommandLogger", "register_command_logger"]
