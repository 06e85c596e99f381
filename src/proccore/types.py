"""Procedure type tags: the closed set of types a procedure column can have."""

from __future__ import annotations

import numbers
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable

from proccore.graph import Node, Path, Relationship

__all__ = [
    "ProcType",
    "ListType",
    "list_of",
    "ANY",
    "STRING",
    "INTEGER",
    "FLOAT",
    "NUMBER",
    "BOOLEAN",
    "MAP",
    "NODE",
    "RELATIONSHIP",
    "PATH",
]


@dataclass(frozen=True)
class ProcType:
    """A procedure type tag.

    All procedure types are nullable: ``None`` is accepted by every tag.
    """

    name: str

    def __str__(self) -> str:
        return self.name

    def accepts(self, value: Any) -> bool:
        """Check whether a runtime value conforms to this type without coercion."""
        if value is None:
            return True
        check = _CHECKS.get(self.name)
        # Host-registered tags carry no runtime check.
        return check is None or check(value)


@dataclass(frozen=True)
class ListType(ProcType):
    """A homogeneous list type, ``LIST OF <element>``."""

    element: ProcType

    def accepts(self, value: Any) -> bool:
        if value is None:
            return True
        if not isinstance(value, (list, tuple)):
            return False
        return all(self.element.accepts(item) for item in value)


def list_of(element: ProcType) -> ListType:
    """Build the list type for the given element type."""
    return ListType(name=f"LIST OF {element}", element=element)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


_CHECKS: dict[str, Callable[[Any], bool]] = {
    "ANY": lambda value: True,
    "STRING": lambda value: isinstance(value, str),
    "INTEGER": _is_integer,
    "FLOAT": lambda value: isinstance(value, float),
    "NUMBER": _is_number,
    "BOOLEAN": lambda value: isinstance(value, bool),
    "MAP": lambda value: isinstance(value, Mapping),
    "NODE": lambda value: isinstance(value, Node),
    "RELATIONSHIP": lambda value: isinstance(value, Relationship),
    "PATH": lambda value: isinstance(value, Path),
}

ANY = ProcType("ANY")
STRING = ProcType("STRING")
INTEGER = ProcType("INTEGER")
FLOAT = ProcType("FLOAT")
NUMBER = ProcType("NUMBER")
BOOLEAN = ProcType("BOOLEAN")
MAP = ProcType("MAP")
NODE = ProcType("NODE")
RELATIONSHIP = ProcType("RELATIONSHIP")
PATH = ProcType("PATH")
