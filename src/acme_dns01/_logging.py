"""Logging helpers shared by the challenger and the DNS providers."""

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

_root = logging.getLogger("acme_dns01")
_root.addHandler(logging.NullHandler())

# Normalized domain of the challenge call in progress. Each thread or task
# running a challenge cycle sees its own value.
_current_domain: ContextVar[str | None] = ContextVar("current_domain", default=None)


@contextmanager
def domain_context(domain: str) -> Iterator[None]:
    """Tag log records emitted inside the block with ``domain``."""
    token = _current_domain.set(domain)
    try:
        yield
    finally:
        _current_domain.reset(token)


def get_domain_extra() -> dict[str, str]:
    """Log extra fields for the current challenge domain, if any."""
    domain = _current_domain.get()
    return {} if domain is None else {"domain": domain}


def get_logger(name: str) -> logging.Logger:
    """Get a module logger; pass ``__name__`` so it sits under ``acme_dns01``."""
    return logging.getLogger(name)


class Timer:
    """Measure the wall time of a block in milliseconds.

    Usage:
        with Timer() as t:
            provider.present(domain, token, key_authorization)
        logger.debug("Presented", extra={"duration_ms": t.elapsed_ms})
    """

    def __init__(self) -> None:
        self.elapsed_ms: float = 0
        self._start: float = 0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *args: object) -> None:
        self.elapsed_ms = round((time.perf_counter() - self._start) * 1000, 3)
