"""Logging capability for procedures."""

from __future__ import annotations

import abc
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from proccore.capabilities import CapabilityRegistry
    from proccore.context import InvocationContext

__all__ = ["Log", "LoggerLog", "register_logging"]


class Log(abc.ABC):
    """Capability marker for a procedure-facing log.

    Declare it on a declaration group with ``log: Log = resource()``.
    """

    @abc.abstractmethod
    def debug(self, message: str, *args: Any) -> None: ...

    @abc.abstractmethod
    def info(self, message: str, *args: Any) -> None: ...

    @abc.abstractmethod
    def warn(self, message: str, *args: Any) -> None: ...

    @abc.abstractmethod
    def error(self, message: str, *args: Any) -> None: ...


class LoggerLog(Log):
    """Log backed by a standard library logger, tagged with the call's trace id."""

    def __init__(self, logger: logging.Logger, trace_id: str | None = None) -> None:
        self._logger = logger
        self._trace_id = trace_id

    @classmethod
    def from_context(cls, context: InvocationContext, logger: logging.Logger | None = None) -> LoggerLog:
        return cls(logger or logging.getLogger("proccore.procedures"), trace_id=context.trace_id)

    def _emit(self, level: int, message: str, args: tuple[Any, ...]) -> None:
        if self._logger.isEnabledFor(level):
            self._logger.log(level, f"[{self._trace_id}] {message}", *args, extra={"trace_id": self._trace_id})

    def debug(self, message: str, *args: Any) -> None:
        self._emit(logging.DEBUG, message, args)

    def info(self, message: str, *args: Any) -> None:
        self._emit(logging.INFO, message, args)

    def warn(self, message: str, *args: Any) -> None:
        self._emit(logging.WARNING, message, args)

    def error(self, message: str, *args: Any) -> None:
        self._emit(logging.ERROR, message, args)


def register_logging(registry: CapabilityRegistry, logger: logging.Logger | None = None) -> None:
    """Register ``Log`` so each invocation gets a LoggerLog bound to its context."""
    registry.register(Log, lambda context: LoggerLog.from_context(context, logger))
