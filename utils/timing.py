from __future__ import annotations

import time
from typing import Optional


def elapsed_ms(start_marker: float, now: Optional[float] = None) -> float:
    """Milliseconds since ``start_marker`` (a ``time.perf_counter()`` value)."""
    if now is None:
        now = time.perf_counter()
    return max(0.0, (now - start_marker) * 1000.0)


def format_elapsed(start_marker: float, now: Optional[float] = None) -> str:
    """Human readable elapsed time: "12.35 ms" below a second, "1.250 s" above."""
    ms = elapsed_ms(start_marker, now)
    if ms >= 1000.0:
        return f"{ms / 1000.0:.3f} s"
    return f"{ms:.2f} ms"


__all__ = ["elapsed_ms", "format_elapsed"]
