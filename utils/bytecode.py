"""Introspection of the interpreter's bytecode cache (``__pycache__``).

Python's closest analogue of an opcode cache: a module counts as cached when
its compiled ``.pyc`` exists next to the source.
"""
from __future__ import annotations

import importlib.util
import os
import sys


class BytecodeCacheProbe:
    def available(self) -> bool:
        # cache_tag is None on implementations that never write .pyc files
        return getattr(sys.implementation, "cache_tag", None) is not None

    def is_cached(self, source_path: str) -> bool:
        try:
            cached = importlib.util.cache_from_source(source_path)
        except NotImplementedError:
            return False
        return os.path.exists(cached)


__all__ = ["BytecodeCacheProbe"]
