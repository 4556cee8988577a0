"""Uniform error envelope for boundary operations.

Every operation callable from the UI is wrapped by exactly one of two
adapters:

- ``BoundaryHandler`` returns the operation's result unchanged, or logs
  the failure and raises a tagged ``BoundaryError`` carrying the original
  message.
- ``BooleanBoundaryHandler`` logs the same way but returns ``False`` so
  "did this persist?" calls always resolve to a boolean.

Handlers receive the caller context as their first positional argument.
It is passed through but never logged.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

from ..errors import BoundaryError

logger = logging.getLogger(__name__)

R = TypeVar("R")

UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"


class BoundaryHandler(Generic[R]):
    """Value-returning boundary adapter.

    Args:
        operation_name: Name used in failure logs
        handler: Sync or async callable ``(caller, *args, **kwargs) -> R``
        error_type: BoundaryError subclass raised on failure; None re-raises
            the original exception
    """

    log_label = "Boundary handler error"

    def __init__(
        self,
        operation_name: str,
        handler: Callable[..., Awaitable[R] | R],
        error_type: type[BoundaryError] | None = None,
    ):
        if not operation_name:
            raise ValueError("operation_name is required")
        self._operation_name = operation_name
        self._handler = handler
        self._error_type = error_type

    @property
    def operation_name(self) -> str:
        return self._operation_name

    @property
    def error_type(self) -> type[BoundaryError] | None:
        return self._error_type

    async def _run(self, caller: Any, *args: Any, **kwargs: Any) -> R:
        result = self._handler(caller, *args, **kwargs)
        if inspect.isawaitable(result):
            result = await result
        return result

    def _log_failure(self, exc: Exception, args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
        message = str(exc) or UNKNOWN_ERROR_MESSAGE
        record = {
            "operation": self._operation_name,
            "error": message,
            "args": list(args),
        }
        if kwargs:
            record["kwargs"] = kwargs
        if self._error_type is not None:
            record["domain"] = self._error_type.__name__
        logger.error("%s: %s", self.log_label, record, extra={"boundary": record})
        return message

    async def __call__(self, caller: Any, *args: Any, **kwargs: Any) -> R:
        try:
            return await self._run(caller, *args, **kwargs)
        except Exception as exc:
            message = self._log_failure(exc, args, kwargs)
            if self._error_type is not None:
                raise self._error_type(message) from exc
            raise


class BooleanBoundaryHandler(BoundaryHandler[bool]):
    """Boolean boundary adapter: failures resolve to ``False``."""

    log_label = "Boundary boolean handler error"

    async def __call__(self, caller: Any, *args: Any, **kwargs: Any) -> bool:
        try:
            return bool(await self._run(caller, *args, **kwargs))
        except Exception as exc:
            self._log_failure(exc, args, kwargs)
            return False
