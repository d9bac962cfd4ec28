"""
Request-scoped context.

The demo flag lives in a ``ContextVar`` so every asyncio task (and so every
request) sees its own value. Callers that know the mode should still pass
it explicitly; the context is only the fallback for code that does not.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

import structlog

_demo_mode: ContextVar[bool] = ContextVar("homehub_demo_mode", default=False)


def current_demo_mode() -> bool:
    """Return the demo flag of the request being served."""
    return _demo_mode.get()


@contextmanager
def request_context(demo_mode: bool) -> Iterator[None]:
    """Bind the demo flag (and the matching log context) for a request."""
    token = _demo_mode.set(demo_mode)
    with structlog.contextvars.bound_contextvars(demo_mode=demo_mode):
        try:
            yield
        finally:
            _demo_mode.reset(token)
