from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from lifehacking.exceptions import AppError, InfrastructureError

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Re-raise unexpected failures inside the block as :class:`InfrastructureError`.

    ``operation`` completes the message ``"An error occurred while <operation>."``.
    Application errors pass through untouched and task cancellation is never
    intercepted.
    """

    try:
        yield
    except AppError:
        raise
    except Exception as exc:
        logger.exception("Unexpected failure while %s", operation)
        raise InfrastructureError(f"An error occurred while {operation}.") from exc
