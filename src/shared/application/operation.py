"""
Service Operation Wrapper
Turns raised domain errors into Result values at the service boundary
"""
from __future__ import annotations

import functools
from typing import Any, Awaitable, Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from shared.domain.result import Failure, Result, Success
from shared.error_codes import ErrorKind
from shared.exceptions import DomainError, InternalServerError
from shared.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

# kinds that indicate something is wrong with the system, not the request
_ANOMALIES = frozenset({ErrorKind.INTERNAL, ErrorKind.GENERATION_EXHAUSTED})


def operation(
    func: Callable[..., Awaitable[T]],
) -> Callable[..., Awaitable[Result[T, DomainError]]]:
    """
    Decorate an async service method so it returns ``Success | Failure``.

    Inside the method, business rules raise :class:`DomainError`; the unit of
    work rolls back on the way out and the error is returned as ``Failure``.
    Store errors that escape the method are reported as ``internal_error``.

    Example:
        class LifecycleService:
            @operation
            async def cancel_course(self, command: CancelCourseCommand) -> CourseDTO:
                ...
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Result[T, DomainError]:
        name = func.__name__
        try:
            value = await func(*args, **kwargs)
        except DomainError as e:
            if e.kind in _ANOMALIES:
                logger.error("operation_failed", operation=name, code=e.code, reason=e.message)
            else:
                logger.info("operation_rejected", operation=name, code=e.code, reason=e.message)
            return Failure(e)
        except SQLAlchemyError as e:
            logger.error("operation_store_error", operation=name, error=str(e), exc_info=True)
            return Failure(
                InternalServerError(
                    "The operation could not be stored and was rolled back. Please retry.",
                )
            )
        logger.debug("operation_succeeded", operation=name)
        return Success(value)

    return wrapper
