"""Compiled, invokable procedure handles."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Callable, Sequence

from proccore.context import InvocationContext
from proccore.errors import InvalidArgumentsError, InvocationError, ProcedureError
from proccore.rows import LazyRowSequence, Row
from proccore.signature import ProcedureSignature

logger = logging.getLogger(__name__)

__all__ = ["ProcedureHandle", "Invoker"]

Invoker = Callable[[InvocationContext, tuple[Any, ...]], Iterable[Any]]


class ProcedureHandle:
    """A signature paired with the function that runs the procedure.

    Handles hold no per-call state and are safe to share between threads;
    every invocation gets its own declaration-group instance and its own
    resolved capabilities.
    """

    def __init__(
        self,
        signature: ProcedureSignature,
        invoker: Invoker,
        to_row: Callable[[Any], Row],
    ) -> None:
        self._signature = signature
        self._invoker = invoker
        self._to_row = to_row

    @property
    def signature(self) -> ProcedureSignature:
        return self._signature

    @property
    def name(self) -> str:
        """Qualified procedure name, e.g. ``"db.people.list"``."""
        return self._signature.qualified_name

    def invoke(self, context: InvocationContext, args: Sequence[Any] = ()) -> LazyRowSequence:
        """Run the procedure and return its rows as a lazy sequence.

        Raises:
            InvalidArgumentsError: If ``args`` do not match the declared inputs.
            DependencyResolutionError: If an injected capability cannot be resolved.
            InvocationError: If the group cannot be instantiated or the
                procedure body fails before returning its records.
        """
        args = tuple(args)
        self._check_arguments(args)
        logger.debug("[%s] CALL %s", context.trace_id, self.name)

        try:
            records = self._invoker(context, args)
        except ProcedureError:
            raise
        except Exception as e:
            raise InvocationError(self.name, str(e) or type(e).__name__, cause=e) from e

        if records is None or not isinstance(records, Iterable):
            raise InvocationError(
                self.name,
                f"expected an iterable of output records, got {type(records).__name__}",
            )
        return LazyRowSequence(records, self._to_row, procedure=self.name)

    def _check_arguments(self, args: tuple[Any, ...]) -> None:
        inputs = self._signature.inputs
        if len(args) != len(inputs):
            raise InvalidArgumentsError(
                self.name,
                f"expected {len(inputs)} argument(s) but got {len(args)}",
            )
        for field, value in zip(inputs, args):
            if not field.type.accepts(value):
                raise InvalidArgumentsError(
                    self.name,
                    f"argument `{field.name}` must be {field.type}, got {type(value).__name__}",
                )

    def __repr__(self) -> str:
        return f"ProcedureHandle({self._signature})"
