"""Correlation ID tracking so log lines from one dashboard request can be grouped."""

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

# Empty string means "no correlation ID bound"
_correlation_id: ContextVar[str] = ContextVar("tufan_correlation_id", default="")


def get_correlation_id() -> str:
    """Return the correlation ID bound to the current context, or ''."""
    return _correlation_id.get()


@contextmanager
def correlation_scope(cid: str | None = None) -> Iterator[str]:
    """Bind a correlation ID for the duration of the block.

    A fresh UUID4 is generated when ``cid`` is not given. The previous value
    is restored on exit, so scopes nest.
    """
    token = _correlation_id.set(cid or str(uuid.uuid4()))
    try:
        yield _correlation_id.get()
    finally:
        _correlation_id.reset(token)
