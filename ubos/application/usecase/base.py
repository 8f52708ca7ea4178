"""Base use case."""

import functools
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, TypeVar

import logfire

from ubos.application.error import ApplicationError, InternalError
from ubos.domain.error import DomainError

T = TypeVar("T")


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


def internal_errors(
    operation: str,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Wrap a use case step so unexpected exceptions surface as InternalError.

    Domain and application errors pass through unchanged. Anything else is
    logged with its traceback and replaced by ``InternalError(operation)``.

    Args:
        operation: Name reported in logs and on the raised error
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except (DomainError, ApplicationError):
                raise
            except Exception as e:
                logfire.exception(
                    "Unexpected error in {operation}",
                    operation=operation,
                    error_type=type(e).__name__,
                )
                raise InternalError(operation) from e

        return wrapper

    return decorator
