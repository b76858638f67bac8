"""Translate store failures into the generic InternalError at the service boundary."""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError

from taletrail.core.exceptions import InternalError

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(
    message: str, error_type: type[InternalError] = InternalError
) -> Iterator[None]:
    """Log the original exception, raise `error_type(message)` instead."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception(message)
        raise error_type(message) from exc
