"""Mapping from Python type hints to procedure type tags."""

from __future__ import annotations

import collections.abc
import logging
import numbers
import threading
from types import UnionType
from typing import Annotated, Any, Union, get_args, get_origin

from proccore.errors import TypeMappingError
from proccore.graph import Node, Path, Relationship
from proccore.types import (
    ANY,
    BOOLEAN,
    FLOAT,
    INTEGER,
    MAP,
    NODE,
    NUMBER,
    PATH,
    RELATIONSHIP,
    STRING,
    ProcType,
    list_of,
)

logger = logging.getLogger(__name__)

__all__ = ["TypeMapper"]

_LIST_ORIGINS = (
    list,
    tuple,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
)

_MAP_ORIGINS = (
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
)


def _type_name(host_type: Any) -> str:
    return getattr(host_type, "__qualname__", None) or repr(host_type)


class TypeMapper:
    """Converts host type hints into procedure type tags.

    Registrations are expected before compilation starts; the most recent
    registration for a host type wins.
    """

    def __init__(self) -> None:
        self._mappings: dict[Any, ProcType] = {}
        self._lock = threading.RLock()

        self.register(str, STRING)
        self.register(int, INTEGER)
        self.register(float, FLOAT)
        self.register(bool, BOOLEAN)
        self.register(numbers.Number, NUMBER)
        self.register(dict, MAP)
        self.register(collections.abc.Mapping, MAP)
        self.register(list, list_of(ANY))
        self.register(Node, NODE)
        self.register(Relationship, RELATIONSHIP)
        self.register(Path, PATH)
        self.register(Any, ANY)
        self.register(object, ANY)

    def register(self, host_type: Any, proc_type: ProcType) -> None:
        """Map a host type to a procedure type, replacing any earlier mapping."""
        with self._lock:
            previous = self._mappings.get(host_type)
            self._mappings[host_type] = proc_type
        if previous is not None and previous != proc_type:
            logger.debug("Remapped %s from %s to %s", _type_name(host_type), previous, proc_type)

    def map(self, host_type: Any) -> ProcType:
        """Return the procedure type for a host type hint.

        Raises:
            TypeMappingError: If the type, or a list's element type, has no mapping.
        """
        origin = get_origin(host_type)

        if origin is Annotated:
            return self.map(get_args(host_type)[0])

        # Optional[T] maps as T; procedure types are nullable.
        if origin is Union or origin is UnionType:
            members = [arg for arg in get_args(host_type) if arg is not type(None)]
            if len(members) == 1:
                return self.map(members[0])
            raise self._unmapped(host_type)

        mapped = self._lookup(host_type)
        if mapped is not None:
            return mapped

        if origin in _LIST_ORIGINS:
            args = [arg for arg in get_args(host_type) if arg is not Ellipsis]
            if not args:
                return list_of(ANY)
            elements = {self.map(arg) for arg in args}
            # Fixed-length tuples only map when every position has the same type.
            if len(elements) != 1:
                raise self._unmapped(host_type)
            return list_of(elements.pop())

        if origin in _MAP_ORIGINS:
            return MAP

        if isinstance(host_type, type):
            for base in host_type.__mro__[1:]:
                if base is object:
                    break
                mapped = self._lookup(base)
                if mapped is not None:
                    return mapped

        raise self._unmapped(host_type)

    def _lookup(self, host_type: Any) -> ProcType | None:
        with self._lock:
            try:
                return self._mappings.get(host_type)
            except TypeError:
                # Unhashable annotation objects never have a registration.
                return None

    @staticmethod
    def _unmapped(host_type: Any) -> TypeMappingError:
        return TypeMappingError(
            f"Don't know how to map `{_type_name(host_type)}` to the procedure type system.",
            host_type=_type_name(host_type),
        )
