"""Diagnostic block attached to JSON responses when ``?debug`` is allowed.

Every field is optional: a collaborator that is missing or reports itself
unavailable simply leaves its key out of the block.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel

from core.context import EmitContext
from utils.timing import format_elapsed

logger = logging.getLogger(__name__)


class DebugInfo(BaseModel):
    execute_time: Optional[str] = None
    db_queries: Optional[int] = None
    cache_reads: Optional[int] = None
    cache_writes: Optional[int] = None
    opcache: Optional[str] = None
    url: Optional[str] = None
    redirect_url: Optional[str] = None
    redirect_query: Optional[str] = None


def _bytecode_status(context: EmitContext, source_path: str) -> Optional[str]:
    probe = context.bytecode_probe
    if probe is None or not probe.available():
        return "unavailable"
    if not probe.is_cached(source_path):
        return "disabled"
    return None


def collect_debug_info(context: EmitContext, source_path: Optional[str] = None) -> Dict[str, Any]:
    """Gather the debug block for ``context``.

    ``source_path`` is the module whose bytecode cache status is reported;
    ``emit`` passes its own file.
    """
    info = DebugInfo()

    if context.start_marker is not None:
        info.execute_time = format_elapsed(context.start_marker)

    counter = context.query_counter
    if counter is not None and counter.available():
        info.db_queries = counter.get_query_count()

    stats = context.cache_stats
    if stats is not None and stats.available():
        info.cache_reads = stats.get_cache_reads()
        info.cache_writes = stats.get_cache_writes()

    info.opcache = _bytecode_status(context, source_path or __file__)

    if context.path:
        info.url = context.path
    if context.redirect_url:
        info.redirect_url = context.redirect_url
    if context.redirect_query:
        info.redirect_query = context.redirect_query

    block = info.model_dump(exclude_none=True)
    logger.debug("debug block collected: %s", sorted(block))
    return block


__all__ = ["DebugInfo", "collect_debug_info"]
