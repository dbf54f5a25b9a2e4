"""Wall-clock timestamps that advance monotonically."""

from __future__ import annotations

import time

_INIT_TIME = time.time()
_INIT_MONOTONIC = time.monotonic()


def _elapsed() -> float:
    return time.monotonic() - _INIT_MONOTONIC


def now() -> float:
    """Seconds since the epoch, anchored at import and driven by a monotonic clock."""
    return _INIT_TIME + _elapsed()