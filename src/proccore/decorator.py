"""Declarative markers for procedure declaration groups.

A declaration group is a plain class::

    class PeopleProcedures:
        log: Log = resource()

        @procedure
        def list_cool_people(self) -> Iterator[Person]:
            self.log.info("listing")
            yield Person("Bonnie")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

__all__ = [
    "ProcedureSpec",
    "Resource",
    "procedure",
    "resource",
    "private_constructor",
    "PROCEDURE_ATTR",
    "PRIVATE_CONSTRUCTOR_ATTR",
]

PROCEDURE_ATTR = "__proccore_procedure__"
PRIVATE_CONSTRUCTOR_ATTR = "__proccore_private__"


@dataclass(frozen=True)
class ProcedureSpec:
    """Descriptor attached to a method marked with ``@procedure``."""

    member_name: str
    description: str | None = None


class Resource:
    """Class-level marker for a field injected at invocation time.

    The capability marker is the explicit argument, or the field's type hint
    when omitted.
    """

    def __init__(self, marker: Any = None) -> None:
        self.marker = marker
        self.name: str | None = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"resource({self.marker!r})" if self.marker is not None else "resource()"


def resource(marker: Any = None) -> Any:
    """Declare an injectable field on a declaration group."""
    return Resource(marker)


def procedure(
    func_or_none: Callable | None = None,
    /,
    *,
    description: str | None = None,
) -> Any:
    """Mark a method as a procedure.

    Works bare (``@procedure``) and with arguments
    (``@procedure(description="...")``).
    """

    def _mark(func: Callable) -> Callable:
        text = description
        if text is None and func.__doc__:
            text = func.__doc__.strip().split("\n")[0].strip()
        setattr(func, PROCEDURE_ATTR, ProcedureSpec(member_name=func.__name__, description=text))
        return func

    if func_or_none is not None and callable(func_or_none):
        return _mark(func_or_none)

    return _mark


def private_constructor(init: Callable) -> Callable:
    """Mark ``__init__`` as non-public so the group cannot be instantiated by the runtime."""
    setattr(init, PRIVATE_CONSTRUCTOR_ATTR, True)
    return init
