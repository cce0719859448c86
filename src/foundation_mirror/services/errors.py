"""Service-level errors and best-effort helpers."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """A required credential or setting is missing."""


@contextmanager
def non_critical(operation: str, **context: object) -> Iterator[None]:
    """Run a step whose failure must not stop the request.

    Failures are logged with the given context and then dropped.
    """
    try:
        yield
    except Exception:
        logger.exception("Non-critical step failed: %s", operation, extra=context)
