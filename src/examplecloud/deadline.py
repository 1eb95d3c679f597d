"""Per-call deadlines.

A deadline bounds every request issued inside its block in the current
thread or task. Without one, the transport's own timeout applies.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
import time
from typing import Iterator

_deadline: ContextVar[float | None] = ContextVar("examplecloud_deadline", default=None)


@contextmanager
def deadline(seconds: float) -> Iterator[float]:
    """Bound requests made inside the block.

    Nested blocks keep whichever expiry comes first.

    Args:
        seconds: Seconds allowed from now.

    Yields:
        float: Absolute expiry on the ``time.monotonic`` clock.
    """
    expires_at = time.monotonic() + seconds
    current = _deadline.get()
    if current is not None:
        expires_at = min(expires_at, current)
    token = _deadline.set(expires_at)
    try:
        yield expires_at
    finally:
        _deadline.reset(token)


def remaining() -> float | None:
    """Seconds left before the active deadline, ``None`` without one."""
    expires_at = _deadline.get()
    if expires_at is None:
        return None
    return expires_at - time.monotonic()
